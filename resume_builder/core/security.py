import jwt

from .config import settings


def decode_token(token: str) -> dict:
    """Decode and verify a bearer token, raising ``jwt.PyJWTError`` when invalid or expired."""
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "sub"]},
    )
