from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Sequence

from beanie import PydanticObjectId
from bson import ObjectId

from resume_builder.models import (
    Resume,
    User,
    PersonalInfo,
    Education,
    Experience,
    Skill,
    Certification,
    Award,
    Project,
)
from resume_builder.schemas.pydantic import (
    ResumeDocument,
    ResumeSummary,
    SectionEntry,
)
from .exceptions import ResumeAccessDeniedError, ResumeNotFoundError

logger = logging.getLogger(__name__)


_STORED_ENTRY_MODELS = {
    "educations": Education,
    "experiences": Experience,
    "skills": Skill,
    "certifications": Certification,
    "awards": Award,
    "projects": Project,
}


class ResumeService:
    """CRUD over a user's resumes; every resume is one Beanie document."""

    async def list_resumes(self, user: User) -> List[ResumeSummary]:
        resumes = await Resume.find(Resume.user_id == str(user.id)).sort(-Resume.updated_at).to_list()
        return [
            ResumeSummary(
                id=str(resume.id),
                title=resume.title,
                created_at=resume.created_at,
                updated_at=resume.updated_at,
            )
            for resume in resumes
        ]

    async def get_resume(self, resume_id: str, user: User) -> ResumeDocument:
        resume = await self._get_owned(resume_id, user)
        return self._to_document(resume)

    async def create_resume(self, payload: ResumeDocument, user: User) -> ResumeDocument:
        resume = Resume(user_id=str(user.id), title=payload.title)
        self._apply(resume, payload)
        await resume.insert()
        logger.info(f"Created resume {resume.id} for user {user.id}")
        return self._to_document(resume)

    async def update_resume(self, resume_id: str, payload: ResumeDocument, user: User) -> ResumeDocument:
        resume = await self._get_owned(resume_id, user)
        resume.title = payload.title
        self._apply(resume, payload)
        resume.updated_at = datetime.utcnow()
        await resume.save()
        logger.info(f"Updated resume {resume.id} for user {user.id}")
        return self._to_document(resume)

    async def delete_resume(self, resume_id: str, user: User) -> None:
        resume = await self._get_owned(resume_id, user)
        await resume.delete()
        logger.info(f"Deleted resume {resume_id} for user {user.id}")

    async def _get_owned(self, resume_id: str, user: User) -> Resume:
        """
        Load a resume and check it belongs to ``user``.

        Raises:
            ResumeNotFoundError: If the id is malformed or unknown.
            ResumeAccessDeniedError: If the resume belongs to another user.
        """
        if not ObjectId.is_valid(resume_id):
            raise ResumeNotFoundError(resume_id=resume_id)

        resume = await Resume.get(PydanticObjectId(resume_id))
        if resume is None:
            raise ResumeNotFoundError(resume_id=resume_id)

        if resume.user_id != str(user.id):
            logger.warning(f"User {user.id} denied access to resume {resume_id}")
            raise ResumeAccessDeniedError(resume_id=resume_id, user_id=str(user.id))
        return resume

    def _apply(self, resume: Resume, payload: ResumeDocument) -> None:
        """Replace every section of ``resume`` with the content of ``payload``."""
        resume.personal_info = PersonalInfo(**payload.personal_info.model_dump())
        for section, model in _STORED_ENTRY_MODELS.items():
            entries = self._assign_ids(resume, section, getattr(payload, section))
            setattr(resume, section, [model(**entry) for entry in entries])

    def _assign_ids(self, resume: Resume, section: str, entries: Sequence[SectionEntry]) -> List[dict]:
        """
        Keep a server id the section already owns; give everything else the next
        value of the resume's entry counter.
        """
        known = {entry.id for entry in getattr(resume, section)}
        used = set()
        assigned = []
        for entry in entries:
            server_id = entry.server_id
            if server_id is None or server_id not in known or server_id in used:
                resume.entry_counter += 1
                server_id = resume.entry_counter
            used.add(server_id)
            assigned.append({**entry.model_dump(exclude={"id"}), "id": server_id})
        return assigned

    def _to_document(self, resume: Resume) -> ResumeDocument:
        data = resume.model_dump(exclude={"id", "user_id", "entry_counter", "revision_id"})
        return ResumeDocument.model_validate({**data, "id": str(resume.id)})
