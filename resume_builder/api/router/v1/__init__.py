from fastapi import APIRouter

from .auth import auth_router
from .resume import resume_router


v1_router = APIRouter(prefix="/api/v1", tags=["v1"])
v1_router.include_router(auth_router, prefix="/auth", tags=["auth"])
v1_router.include_router(resume_router, prefix="/resumes", tags=["resumes"])


__all__ = ["v1_router"]
