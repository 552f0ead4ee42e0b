from .auth_service import AuthService
from .resume_service import ResumeService
from .exceptions import (
    ResumeNotFoundError,
    ResumeAccessDeniedError,
    UserAlreadyExistsError,
    InvalidCredentialsError,
)

__all__ = [
    "AuthService",
    "ResumeService",
    "ResumeNotFoundError",
    "ResumeAccessDeniedError",
    "UserAlreadyExistsError",
    "InvalidCredentialsError",
]
