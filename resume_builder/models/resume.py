from datetime import datetime
from typing import Optional, List

from beanie import Document
from pydantic import BaseModel, Field


class PersonalInfo(BaseModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    portfolio_url: str = ""
    summary: str = ""


class Education(BaseModel):
    id: int
    institution: str
    degree: str
    field_of_study: str = ""
    start_year: str = ""
    end_year: str = ""
    location: str = ""
    description: str = ""


class Experience(BaseModel):
    id: int
    company: str
    position: str
    location: str = ""
    start_year: str = ""
    end_year: str = ""
    current_job: bool = False
    description: str = ""


class Skill(BaseModel):
    id: int
    name: str
    level: str = ""


class Certification(BaseModel):
    id: int
    name: str
    issuer: str
    date: str = ""
    description: str = ""


class Award(BaseModel):
    id: int
    title: str
    issuer: str
    date: str = ""
    description: str = ""


class Project(BaseModel):
    id: int
    name: str
    description: str = ""
    technologies: str = ""
    link: str = ""
    start_year: str = ""
    end_year: str = ""


class Resume(Document):
    """A user's resume with every section embedded.

    Section entries carry integer ids that are unique within the resume; they
    are drawn from ``entry_counter`` whenever the service stores an entry the
    resume has not seen before.
    """
    user_id: str
    title: str
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    educations: List[Education] = Field(default_factory=list)
    experiences: List[Experience] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    awards: List[Award] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    entry_counter: int = 0

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "resumes"
        indexes = [
            "user_id",
            "updated_at",
        ]
