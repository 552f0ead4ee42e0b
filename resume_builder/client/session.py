from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from resume_builder.core.config import settings

logger = logging.getLogger(__name__)


class StoredUser(BaseModel):
    id: str
    username: str
    email: str


class StoredSession(BaseModel):
    token: str
    user: StoredUser


class SessionStore:
    """
    The bearer token and minimal user record, the only client state that
    outlives a run. Kept in a JSON file; ``path=None`` keeps it in memory.
    """

    def __init__(self, path: str | os.PathLike | None = settings.SESSION_FILE):
        self._path = Path(path) if path is not None else None
        self._session: Optional[StoredSession] = None
        self.load()

    @property
    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    @property
    def user(self) -> Optional[StoredUser]:
        return self._session.user if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def load(self) -> None:
        if self._path is None or not self._path.exists():
            return
        try:
            self._session = StoredSession.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Discarding unreadable session file {self._path}: {e}")
            self.clear()

    def save(self, token: str, user: StoredUser) -> None:
        self._session = StoredSession(token=token, user=user)
        if self._path is not None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(self._session.model_dump_json(), encoding="utf-8")
        logger.info(f"Signed in as {user.username}")

    def clear(self) -> None:
        self._session = None
        if self._path is not None and self._path.exists():
            self._path.unlink()
