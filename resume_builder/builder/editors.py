"""Section editors.

Each editor works on a private copy of one section and hands every committed
change back through ``on_update`` as a brand-new value; the owner of the
document decides what to do with it.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from resume_builder.schemas.pydantic import (
    SKILL_LEVELS,
    Award,
    Certification,
    Education,
    EntryId,
    Experience,
    PersonalInfo,
    Project,
    SectionEntry,
    Skill,
    new_pending_id,
)
from . import validators
from .validators import Validator, validate_fields, validate_required

EntryT = TypeVar("EntryT", bound=SectionEntry)

FORM_ERROR_BANNER = "Please fix the highlighted fields"


class EntryValidationError(Exception):
    """Raised when an entry is committed while required fields fail validation."""

    def __init__(self, errors: Mapping[str, str]):
        self.errors = dict(errors)
        super().__init__(f"{FORM_ERROR_BANNER}: {', '.join(sorted(self.errors))}")


class EditorBusyError(Exception):
    """Raised when a second entry is opened while another one is in form view."""


class ViewMode(str, Enum):
    LIST = "list"
    FORM = "form"


def _copy_entries(entries: Sequence[EntryT]) -> List[EntryT]:
    return [entry.model_copy(deep=True) for entry in entries]


class SectionEditor(Generic[EntryT]):
    """
    Add, edit in place and delete the entries of one list section.

    The editor is either in list view (read-only cards) or in form view with a
    single draft entry. ``add``/``edit``/``delete`` are the commit operations;
    ``start_add``/``start_edit``/``set_field``/``blur``/``submit``/``cancel``
    drive the form view on top of them.
    """

    entry_model: Type[EntryT]
    rules: Mapping[str, Validator] = {}

    def __init__(self, entries: Sequence[EntryT], on_update: Callable[[List[EntryT]], None]):
        self._entries: List[EntryT] = _copy_entries(entries)
        self._on_update = on_update
        self.mode = ViewMode.LIST
        self.draft: Optional[EntryT] = None
        self.editing_index: Optional[int] = None
        self.errors: Dict[str, str] = {}

    @property
    def entries(self) -> List[EntryT]:
        return _copy_entries(self._entries)

    # ---- commit operations ----

    def validate(self, entry: EntryT) -> Dict[str, str]:
        return validate_fields(dict(entry), self.rules)

    def add(self, entry: Union[EntryT, Mapping[str, Any]]) -> List[EntryT]:
        """Append ``entry`` under a fresh placeholder id."""
        entry = self._coerce(entry)
        errors = self.validate(entry)
        if errors:
            raise EntryValidationError(errors)
        entry = entry.model_copy(update={"id": new_pending_id()})
        return self._publish(self._entries + [entry])

    def edit(self, index: int, entry: Union[EntryT, Mapping[str, Any]]) -> List[EntryT]:
        """Replace the entry at ``index``, keeping its identifier."""
        self._check_index(index)
        entry = self._coerce(entry)
        errors = self.validate(entry)
        if errors:
            raise EntryValidationError(errors)
        updated = list(self._entries)
        updated[index] = entry.model_copy(update={"id": self._entries[index].id})
        return self._publish(updated)

    def delete(self, index: int) -> List[EntryT]:
        self._check_index(index)
        updated = self._entries[:index] + self._entries[index + 1:]
        return self._publish(updated)

    # ---- form view ----

    def start_add(self) -> EntryT:
        self._open_form(self.entry_model(), None)
        return self.draft

    def start_edit(self, index: int) -> EntryT:
        self._check_index(index)
        self._open_form(self._entries[index].model_copy(deep=True), index)
        return self.draft

    def set_field(self, name: str, value: Any) -> EntryT:
        self._require_form()
        if name == "id" or name not in self.entry_model.model_fields:
            raise KeyError(f"{self.entry_model.__name__} has no editable field '{name}'")
        self.draft = self.entry_model.model_validate({**dict(self.draft), name: value})
        self.errors.pop(name, None)
        return self.draft

    def blur(self, name: str) -> Optional[str]:
        """Validate one field of the draft, as when focus leaves it."""
        self._require_form()
        rule = self.rules.get(name)
        message = rule(getattr(self.draft, name) or "") if rule else None
        if message:
            self.errors[name] = message
        else:
            self.errors.pop(name, None)
        return message

    def submit(self) -> bool:
        """Commit the draft. Returns ``False`` and keeps the form open when it is invalid."""
        self._require_form()
        try:
            if self.editing_index is None:
                self.add(self.draft)
            else:
                self.edit(self.editing_index, self.draft)
        except EntryValidationError as e:
            self.errors = e.errors
            return False
        self._close_form()
        return True

    def cancel(self) -> None:
        """Drop the draft; the committed list is left as it was."""
        self._close_form()

    @property
    def banner(self) -> Optional[str]:
        return FORM_ERROR_BANNER if self.errors else None

    # ---- internals ----

    def _coerce(self, entry: Union[EntryT, Mapping[str, Any]]) -> EntryT:
        data = entry if isinstance(entry, Mapping) else dict(entry)
        return self.entry_model.model_validate(data)

    def _publish(self, entries: List[EntryT]) -> List[EntryT]:
        self._entries = entries
        self._on_update(_copy_entries(entries))
        return self.entries

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"No {self.entry_model.__name__} entry at index {index}")

    def _open_form(self, draft: EntryT, index: Optional[int]) -> None:
        if self.mode is ViewMode.FORM:
            raise EditorBusyError("Finish or cancel the entry being edited first")
        self.mode = ViewMode.FORM
        self.draft = draft
        self.editing_index = index
        self.errors = {}

    def _close_form(self) -> None:
        self.mode = ViewMode.LIST
        self.draft = None
        self.editing_index = None
        self.errors = {}

    def _require_form(self) -> None:
        if self.mode is not ViewMode.FORM:
            raise RuntimeError("No entry is open for editing")


class EducationEditor(SectionEditor[Education]):
    entry_model = Education
    rules = {
        "institution": validate_required("Institution"),
        "degree": validate_required("Degree"),
        "start_year": validate_required("Start year"),
    }


class ExperienceEditor(SectionEditor[Experience]):
    entry_model = Experience
    rules = {
        "company": validate_required("Company"),
        "position": validate_required("Position"),
        "start_year": validate_required("Start year"),
    }


class CertificationsEditor(SectionEditor[Certification]):
    entry_model = Certification
    rules = {
        "name": validate_required("Certification name"),
        "issuer": validate_required("Issuer"),
    }


class AwardsEditor(SectionEditor[Award]):
    entry_model = Award
    rules = {
        "title": validate_required("Award title"),
        "issuer": validate_required("Issuer"),
    }


class ProjectsEditor(SectionEditor[Project]):
    entry_model = Project
    rules = {
        "name": validate_required("Project name"),
        "description": validate_required("Description"),
        "link": lambda value: validators.validate_url(value, "Must be a valid URL"),
    }


class SkillsEditor:
    """Skills are added with an immediate commit and removed by identifier; there is no edit in place."""

    def __init__(self, skills: Sequence[Skill], on_update: Callable[[List[Skill]], None]):
        self._skills: List[Skill] = _copy_entries(skills)
        self._on_update = on_update

    @property
    def entries(self) -> List[Skill]:
        return _copy_entries(self._skills)

    def add(self, name: str, level: str = "") -> List[Skill]:
        errors = validate_fields({"name": name}, {"name": validate_required("Skill name")})
        if level and level not in SKILL_LEVELS:
            errors["level"] = f"Level must be one of: {', '.join(SKILL_LEVELS)}"
        if errors:
            raise EntryValidationError(errors)
        skill = Skill(id=new_pending_id(), name=name.strip(), level=level)
        return self._publish(self._skills + [skill])

    def remove(self, entry_id: Optional[EntryId]) -> List[Skill]:
        if entry_id is None:
            return self.entries
        return self._publish([skill for skill in self._skills if skill.id != entry_id])

    def _publish(self, skills: List[Skill]) -> List[Skill]:
        self._skills = skills
        self._on_update(_copy_entries(skills))
        return self.entries


class PersonalInfoEditor:
    """The single personal-information record. Every change is published as it is typed."""

    rules: Mapping[str, Validator] = {
        "full_name": validate_required("Full name"),
        "email": validators.validate_email,
        "phone": validators.validate_phone,
        "zip_code": validators.validate_zip_code,
        "linkedin_url": validators.validate_url,
        "github_url": validators.validate_url,
        "portfolio_url": validators.validate_url,
    }

    def __init__(self, personal_info: PersonalInfo, on_update: Callable[[PersonalInfo], None]):
        self._info = personal_info.model_copy(deep=True)
        self._on_update = on_update
        self.errors: Dict[str, str] = {}

    @property
    def value(self) -> PersonalInfo:
        return self._info.model_copy(deep=True)

    def change(self, name: str, value: str) -> PersonalInfo:
        if name not in PersonalInfo.model_fields:
            raise KeyError(f"PersonalInfo has no field '{name}'")
        self._info = PersonalInfo.model_validate({**dict(self._info), name: value})
        self.errors.pop(name, None)
        self._on_update(self.value)
        return self.value

    def blur(self, name: str) -> Optional[str]:
        rule = self.rules.get(name)
        message = rule(getattr(self._info, name)) if rule else None
        if message:
            self.errors[name] = message
        else:
            self.errors.pop(name, None)
        return message

    def validate(self) -> Dict[str, str]:
        self.errors = validate_fields(dict(self._info), self.rules)
        return dict(self.errors)
