import os
import sys
import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Literal, Optional


_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
_DEFAULT_SESSION_FILE = os.path.join(os.path.expanduser("~"), ".resume_builder", "session.json")


class Settings(BaseSettings):
    # Defaults run the API and client against a local MongoDB out of the box.
    PROJECT_NAME: str = "Resume Builder"
    ENV: str = "local"
    LOG_LEVEL: Optional[str] = None
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    # MongoDB settings
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "resume_builder"
    # Bearer tokens
    JWT_SECRET_KEY: str = "resume-builder-dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_MINUTES: int = 24 * 60
    # Client side
    API_BASE_URL: str = "http://localhost:8000/api/v1"
    SESSION_FILE: str = _DEFAULT_SESSION_FILE
    SAVE_REDIRECT_DELAY_SECONDS: float = 2.0

    model_config = SettingsConfigDict(
        env_file=os.path.join(_PROJECT_ROOT, ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


_LEVEL_BY_ENV: dict[Literal["production", "staging", "local"], int] = {
    "production": logging.INFO,
    "staging": logging.DEBUG,
    "local": logging.DEBUG,
}


def setup_logging() -> None:
    """
    Install a single stderr handler on the root logger.

    The level comes from ``LOG_LEVEL`` when set, otherwise from ``ENV``
    (production logs INFO, everything else DEBUG). Calling it again is a
    no-op, so both the app factory and tests may call it.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
    else:
        level = _LEVEL_BY_ENV.get(settings.ENV.lower(), logging.INFO)

    formatter = logging.Formatter(
        fmt="[%(asctime)s - %(name)s - %(levelname)s] %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.addHandler(handler)

    # chatty third-party loggers
    for noisy in ("pymongo", "httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
