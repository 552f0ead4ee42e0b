class ResumeNotFoundError(Exception):
    """Raised when a resume id does not exist (or is not a valid id)."""

    def __init__(self, resume_id: str | None = None, message: str | None = None):
        self.resume_id = resume_id
        if message is None:
            message = f"Resume with id {resume_id} not found" if resume_id else "Resume not found"
        super().__init__(message)


class ResumeAccessDeniedError(Exception):
    """Raised when a user touches a resume owned by someone else."""

    def __init__(self, resume_id: str, user_id: str):
        self.resume_id = resume_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not allowed to access resume {resume_id}")


class UserAlreadyExistsError(Exception):
    """Raised when signing up with a username or email that is already registered."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(Exception):
    """Raised when a username/password pair does not match a stored account."""

    def __init__(self, message: str = "Bad credentials"):
        self.message = message
        super().__init__(message)
