from .config import settings, setup_logging
from .database import init_db, close_db, ping_db
from .exceptions import EXCEPTION_HANDLERS
from .security import decode_token


__all__ = [
    "settings",
    "setup_logging",
    "init_db",
    "close_db",
    "ping_db",
    "EXCEPTION_HANDLERS",
    "decode_token",
]
