from __future__ import annotations

import logging

from beanie.operators import Or

from resume_builder.models import User
from resume_builder.schemas.pydantic import JwtResponse, SignupRequest
from .exceptions import InvalidCredentialsError, UserAlreadyExistsError

logger = logging.getLogger(__name__)


class AuthService:
    """Account registration and credential checks."""

    async def register(self, payload: SignupRequest) -> User:
        """
        Create a new account with a bcrypt-hashed password.

        Raises:
            UserAlreadyExistsError: If the username or email is already registered.
        """
        existing = await User.find_one(
            Or(User.username == payload.username, User.email == payload.email)
        )
        if existing is not None:
            if existing.username == payload.username:
                raise UserAlreadyExistsError("Error: Username is already taken!")
            raise UserAlreadyExistsError("Error: Email is already in use!")

        user = User(
            username=payload.username,
            email=payload.email,
            password=User.generate_hash(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
        await user.insert()
        logger.info(f"Registered user {user.id} ({user.username})")
        return user

    async def authenticate(self, username: str, password: str) -> JwtResponse:
        """
        Check credentials and issue a bearer token.

        Raises:
            InvalidCredentialsError: If the user is unknown or the password does not match.
        """
        user = await User.find_one(User.username == username)
        if user is None or not user.valid_password(password):
            logger.info(f"Rejected sign-in for username '{username}'")
            raise InvalidCredentialsError()

        return JwtResponse(
            token=user.generate_jwt(),
            id=str(user.id),
            username=user.username,
            email=user.email,
        )
