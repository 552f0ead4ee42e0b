import logging
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from resume_builder.core import decode_token
from resume_builder.models import User
from resume_builder.services import AuthService, ResumeService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """Resolve the bearer token to its ``User`` or answer 401."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Full authentication is required to access this resource")

    try:
        payload = decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except jwt.PyJWTError as e:
        logger.warning(f"JWT validation error: {e}")
        raise _unauthorized("Invalid token")

    user = await User.find_one(User.username == payload["sub"])
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_auth_service() -> AuthService:
    return AuthService()


def get_resume_service() -> ResumeService:
    return ResumeService()
