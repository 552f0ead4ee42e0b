from .resume import (
    Resume,
    PersonalInfo,
    Education,
    Experience,
    Skill,
    Certification,
    Award,
    Project,
)
from .user import User

__all__ = [
    "Resume",
    "PersonalInfo",
    "Education",
    "Experience",
    "Skill",
    "Certification",
    "Award",
    "Project",
    "User",
]
