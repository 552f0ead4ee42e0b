from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel

from resume_builder.schemas.pydantic import (
    SECTION_ENTRY_MODELS,
    PersonalInfo,
    ResumeDocument,
)

logger = logging.getLogger(__name__)


SECTION_NAMES = ["title", "personal_info", *SECTION_ENTRY_MODELS]

_SECTION_ADAPTERS: Dict[str, TypeAdapter] = {
    "title": TypeAdapter(str),
    "personal_info": TypeAdapter(PersonalInfo),
    **{name: TypeAdapter(List[model]) for name, model in SECTION_ENTRY_MODELS.items()},
}

_CAMEL_TO_SECTION = {to_camel(name): name for name in SECTION_NAMES}


class UnknownSectionError(KeyError):
    """Raised for a section name the resume document does not have."""

    def __init__(self, section_name: str):
        self.section_name = section_name
        super().__init__(f"Unknown resume section '{section_name}'. Known sections: {SECTION_NAMES}")


def normalize_section_name(section_name: str) -> str:
    """Accept ``personal_info`` as well as the wire spelling ``personalInfo``."""
    if section_name in _SECTION_ADAPTERS:
        return section_name
    if section_name in _CAMEL_TO_SECTION:
        return _CAMEL_TO_SECTION[section_name]
    raise UnknownSectionError(section_name)


class ResumeAggregate:
    """
    Holds the in-progress resume and replaces it one section at a time.

    No rule spans two sections here (an experience may end before it starts);
    section-level checks belong to the editors.
    """

    def __init__(self, document: Optional[ResumeDocument] = None):
        self._document = (document or ResumeDocument()).model_copy(deep=True)

    def snapshot(self) -> ResumeDocument:
        """A deep copy of the current document, safe to hand to editors and renderers."""
        return self._document.model_copy(deep=True)

    def section(self, section_name: str) -> Any:
        name = normalize_section_name(section_name)
        return getattr(self.snapshot(), name)

    @property
    def resume_id(self) -> Optional[str]:
        return self._document.id

    def update_section(self, section_name: str, new_value: Any) -> ResumeDocument:
        """Replace one section wholesale and return the new snapshot."""
        name = normalize_section_name(section_name)
        value = _SECTION_ADAPTERS[name].validate_python(new_value)
        if name == "personal_info":
            value = value.model_copy(deep=True)
        elif name != "title":
            value = [entry.model_copy(deep=True) for entry in value]
        self._document = self._document.model_copy(update={name: value})
        logger.debug(f"Updated resume section '{name}'")
        return self.snapshot()

    def replace(self, document: ResumeDocument) -> None:
        """Swap in a whole document, e.g. the one loaded from or returned by the backend."""
        self._document = document.model_copy(deep=True)
