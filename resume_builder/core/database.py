from __future__ import annotations

import logging

import motor.motor_asyncio
from beanie import init_beanie

from .config import settings

logger = logging.getLogger(__name__)

# Set by init_db, reset by close_db
_motor_client: motor.motor_asyncio.AsyncIOMotorClient | None = None
_motor_db = None


def _document_models() -> list:
    # models import core.config, so they are loaded lazily
    from ..models import Resume, User

    return [User, Resume]


async def init_db(app=None, client=None) -> None:
    """Connect to MongoDB and register the Beanie documents.

    Runs from the app lifespan. Pass ``client`` to use an already built
    Motor-compatible client, e.g. an in-memory one.
    """
    global _motor_client, _motor_db
    _motor_client = client or motor.motor_asyncio.AsyncIOMotorClient(settings.MONGO_URI)
    _motor_db = _motor_client[settings.MONGO_DB_NAME]
    await init_beanie(database=_motor_db, document_models=_document_models())
    logger.info(f"Beanie initialised on database '{settings.MONGO_DB_NAME}'")


async def close_db() -> None:
    global _motor_client, _motor_db
    if _motor_client is not None:
        _motor_client.close()
    _motor_client, _motor_db = None, None


async def ping_db() -> bool:
    """True when the database answers a ``ping`` command."""
    if _motor_client is None:
        return False
    try:
        await _motor_client.admin.command("ping")
    except Exception:
        logger.error("Database ping failed", exc_info=True)
        return False
    return True
