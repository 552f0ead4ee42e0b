from datetime import datetime, timedelta, timezone

import jwt
import bcrypt
from beanie import Document, Indexed
from pydantic import Field

from resume_builder.core.config import settings


class User(Document):
    username: Indexed(str, unique=True)
    email: Indexed(str, unique=True)
    password: str
    first_name: str
    last_name: str
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @staticmethod
    def generate_hash(password: str) -> str:
        """Generate a hashed password using bcrypt."""
        salt = bcrypt.gensalt(8)
        return bcrypt.hashpw(password.encode(), salt).decode()

    def valid_password(self, password: str) -> bool:
        """Verify if the provided password matches the stored hash."""
        if not self.password:
            return False
        return bcrypt.checkpw(password.encode(), self.password.encode())

    def generate_jwt(self) -> str:
        """Generate a signed bearer token for this user."""
        expiration = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

        payload = {
            "sub": self.username,
            "id": str(self.id),
            "exp": int(expiration.timestamp()),
        }

        return jwt.encode(
            payload,
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

    class Settings:
        name = "users"  # MongoDB collection name
