from fastapi import APIRouter, status

from resume_builder.core import ping_db

health_check = APIRouter()


@health_check.get("/ping", tags=["Health check"], status_code=status.HTTP_200_OK)
async def ping():
    """Liveness probe that also reports whether MongoDB is reachable."""
    reachable = await ping_db()
    return {"message": "pong", "database": "reachable" if reachable else "unreachable"}
