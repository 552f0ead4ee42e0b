from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from resume_builder.models import User
from resume_builder.schemas.pydantic import ResumeDocument, ResumeSummary
from resume_builder.services import (
    ResumeAccessDeniedError,
    ResumeNotFoundError,
    ResumeService,
)
from ...dependencies import get_current_user, get_resume_service

resume_router = APIRouter()


def _to_http_error(e: Exception) -> HTTPException:
    if isinstance(e, ResumeNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="You do not have access to this resume",
    )


@resume_router.get("", response_model=List[ResumeSummary])
async def list_resumes(
    user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    return await service.list_resumes(user)


@resume_router.get("/{resume_id}", response_model=ResumeDocument)
async def get_resume(
    resume_id: str,
    user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return await service.get_resume(resume_id, user)
    except (ResumeNotFoundError, ResumeAccessDeniedError) as e:
        raise _to_http_error(e)


@resume_router.post("", response_model=ResumeDocument, status_code=status.HTTP_201_CREATED)
async def create_resume(
    payload: ResumeDocument,
    user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    return await service.create_resume(payload, user)


@resume_router.put("/{resume_id}", response_model=ResumeDocument)
async def update_resume(
    resume_id: str,
    payload: ResumeDocument,
    user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        return await service.update_resume(resume_id, payload, user)
    except (ResumeNotFoundError, ResumeAccessDeniedError) as e:
        raise _to_http_error(e)


@resume_router.delete("/{resume_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_resume(
    resume_id: str,
    user: User = Depends(get_current_user),
    service: ResumeService = Depends(get_resume_service),
):
    try:
        await service.delete_resume(resume_id, user)
    except (ResumeNotFoundError, ResumeAccessDeniedError) as e:
        raise _to_http_error(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
