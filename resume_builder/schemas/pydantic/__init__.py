from .identifiers import EntryId, Pending, Persisted, new_pending_id
from .resume import (
    SKILL_LEVELS,
    SECTION_ENTRY_MODELS,
    PersonalInfo,
    SectionEntry,
    Education,
    Experience,
    Skill,
    Certification,
    Award,
    Project,
    ResumeDocument,
    ResumeSummary,
)
from .auth import LoginRequest, SignupRequest, JwtResponse, MessageResponse

__all__ = [
    "EntryId",
    "Pending",
    "Persisted",
    "new_pending_id",
    "SKILL_LEVELS",
    "SECTION_ENTRY_MODELS",
    "PersonalInfo",
    "SectionEntry",
    "Education",
    "Experience",
    "Skill",
    "Certification",
    "Award",
    "Project",
    "ResumeDocument",
    "ResumeSummary",
    "LoginRequest",
    "SignupRequest",
    "JwtResponse",
    "MessageResponse",
]
