from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .identifiers import EntryId, Persisted


SKILL_LEVELS = ["Beginner", "Intermediate", "Advanced", "Expert"]


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses the snake_case names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(CamelModel):
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


class SectionEntry(CamelModel):
    id: Optional[EntryId] = None

    @field_validator("id", mode="before")
    @classmethod
    def wrap_server_id(cls, value: Any) -> Any:
        """A bare integer on the wire is always a server-assigned id."""
        if isinstance(value, int) and not isinstance(value, bool):
            return Persisted(server_id=value)
        return value

    @field_serializer("id")
    def serialize_id(self, value: Optional[EntryId]) -> Optional[int]:
        # pending ids never leave the client
        return self.server_id

    @property
    def server_id(self) -> Optional[int]:
        """The backend's id for this entry, None while it is still pending."""
        return self.id.server_id if isinstance(self.id, Persisted) else None


class Education(SectionEntry):
    institution: str = ""
    degree: str = ""
    field_of_study: str = ""
    start_year: str = ""
    end_year: str = ""
    location: str = ""
    description: str = ""


class Experience(SectionEntry):
    company: str = ""
    position: str = ""
    location: str = ""
    start_year: str = ""
    end_year: str = ""
    current_job: bool = False
    description: str = ""

    @model_validator(mode="after")
    def clear_end_year_for_current_job(self) -> "Experience":
        if self.current_job:
            self.end_year = ""
        return self


class Skill(SectionEntry):
    name: str = ""
    level: str = ""


class Certification(SectionEntry):
    name: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class Award(SectionEntry):
    title: str = ""
    issuer: str = ""
    date: str = ""
    description: str = ""


class Project(SectionEntry):
    name: str = ""
    description: str = ""
    technologies: str = ""
    link: str = ""
    start_year: str = ""
    end_year: str = ""


SECTION_ENTRY_MODELS: Dict[str, type] = {
    "educations": Education,
    "experiences": Experience,
    "skills": Skill,
    "certifications": Certification,
    "awards": Award,
    "projects": Project,
}


class ResumeDocument(CamelModel):
    """The complete resume: title, personal info and every section."""
    id: Optional[str] = None
    title: str = "My Resume"
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    educations: List[Education] = Field(default_factory=list)
    experiences: List[Experience] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    awards: List[Award] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        """JSON body sent to the backend on create/update."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude={"id", "created_at", "updated_at"},
        )


class ResumeSummary(CamelModel):
    id: str
    title: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
