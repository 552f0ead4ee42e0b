"""The multi-step resume wizard: step navigation plus load/save against the backend."""
from __future__ import annotations

import asyncio
import logging
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional

from resume_builder.client.gateway import ApiError, ApiGateway, AuthenticationError, NotFoundError
from resume_builder.client.navigation import DASHBOARD_PATH, Navigator, Page
from resume_builder.core.config import settings
from resume_builder.schemas.pydantic import ResumeDocument
from . import editors
from .document import ResumeAggregate
from .preview import PrintCallback, ResumePreview, open_in_browser

logger = logging.getLogger(__name__)

CANCEL_PROMPT = "Are you sure you want to cancel? All unsaved changes will be lost."


class WizardStep(str, Enum):
    PERSONAL_INFO = "Personal Information"
    EDUCATION = "Education"
    EXPERIENCE = "Experience"
    SKILLS = "Skills"
    CERTIFICATIONS = "Certifications"
    AWARDS = "Awards"
    PROJECTS = "Projects"
    PREVIEW = "Preview"


STEPS = list(WizardStep)

STEP_SECTIONS: Dict[WizardStep, str] = {
    WizardStep.PERSONAL_INFO: "personal_info",
    WizardStep.EDUCATION: "educations",
    WizardStep.EXPERIENCE: "experiences",
    WizardStep.SKILLS: "skills",
    WizardStep.CERTIFICATIONS: "certifications",
    WizardStep.AWARDS: "awards",
    WizardStep.PROJECTS: "projects",
}

STEP_EDITORS: Dict[WizardStep, Callable[..., Any]] = {
    WizardStep.PERSONAL_INFO: editors.PersonalInfoEditor,
    WizardStep.EDUCATION: editors.EducationEditor,
    WizardStep.EXPERIENCE: editors.ExperienceEditor,
    WizardStep.SKILLS: editors.SkillsEditor,
    WizardStep.CERTIFICATIONS: editors.CertificationsEditor,
    WizardStep.AWARDS: editors.AwardsEditor,
    WizardStep.PROJECTS: editors.ProjectsEditor,
}


def _always_confirm(message: str) -> bool:
    return True


class ResumeWizard(Page):
    """
    Walks the user through the resume sections and saves the result.

    Steps can be visited in any order with ``next``/``back``; nothing is
    validated between steps. The preview step offers ``save`` instead of
    ``next``. Without a ``resume_id`` the wizard creates a new resume,
    otherwise it edits the existing one (call ``load`` first).
    """

    def __init__(
        self,
        gateway: ApiGateway,
        navigator: Navigator,
        resume_id: Optional[str] = None,
        confirm: Callable[[str], bool] = _always_confirm,
        trigger_print: PrintCallback = open_in_browser,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        redirect_delay: Optional[float] = None,
    ):
        super().__init__(navigator)
        self.gateway = gateway
        self.resume_id = resume_id
        self.aggregate = ResumeAggregate()
        self.step_index = 0
        self.loading = False
        self.is_saving = False
        self.not_found = False
        self._confirm = confirm
        self._trigger_print = trigger_print
        self._sleep = sleep
        self._redirect_delay = (
            settings.SAVE_REDIRECT_DELAY_SECONDS if redirect_delay is None else redirect_delay
        )

    @property
    def is_edit_mode(self) -> bool:
        return self.resume_id is not None

    @property
    def step(self) -> WizardStep:
        return STEPS[self.step_index]

    @property
    def is_last_step(self) -> bool:
        return self.step_index == len(STEPS) - 1

    @property
    def can_go_back(self) -> bool:
        return self.step_index > 0

    @property
    def can_go_next(self) -> bool:
        return not self.is_last_step

    @property
    def can_save(self) -> bool:
        return self.is_last_step and not self.is_saving

    @property
    def document(self) -> ResumeDocument:
        return self.aggregate.snapshot()

    def next(self) -> bool:
        if not self.can_go_next:
            return False
        self.step_index += 1
        return True

    def back(self) -> bool:
        if not self.can_go_back:
            return False
        self.step_index -= 1
        return True

    def set_title(self, title: str) -> ResumeDocument:
        return self.aggregate.update_section("title", title)

    def editor(self):
        """The editor for the current step, wired to write back into the document."""
        if self.step is WizardStep.PREVIEW:
            return ResumePreview(self.aggregate.snapshot(), trigger_print=self._trigger_print)
        section = STEP_SECTIONS[self.step]
        on_update = partial(self.aggregate.update_section, section)
        return STEP_EDITORS[self.step](self.aggregate.section(section), on_update)

    async def load(self) -> bool:
        if not self.is_edit_mode:
            return True
        self.loading = True
        self.error = None
        try:
            document = await self.gateway.get_resume(self.resume_id)
        except NotFoundError:
            logger.info(f"Resume {self.resume_id} not found")
            self.not_found = True
            return False
        except AuthenticationError:
            logger.info(f"Session expired while loading resume {self.resume_id}")
            return False
        except ApiError:
            logger.exception(f"Error loading resume {self.resume_id}")
            self.error = "Failed to load resume data"
            return False
        finally:
            self.loading = False
        self.aggregate.replace(document)
        return True

    async def save(self) -> bool:
        """
        Create or update the resume, then return to the dashboard after a short delay.

        Refused while a save is already in flight. On failure the document and
        the current step are left untouched and ``error`` explains why, except
        after a 401, when the gateway has already moved to the login page.
        """
        if self.is_saving:
            logger.warning("Save already in progress; ignoring")
            return False

        self.is_saving = True
        self.error = None
        self.success = None
        try:
            document = self.aggregate.snapshot()
            if self.is_edit_mode:
                saved = await self.gateway.update_resume(self.resume_id, document)
            else:
                saved = await self.gateway.create_resume(document)
        except AuthenticationError:
            # the gateway already signed out and moved to the login page
            logger.info("Session expired while saving resume")
            return False
        except ApiError as e:
            logger.exception("Error saving resume")
            self.error = e.message or "Failed to save resume"
            return False
        finally:
            self.is_saving = False

        self.aggregate.replace(saved)
        if self.is_edit_mode:
            self.success = "Resume updated successfully!"
        else:
            self.success = "Resume created successfully!"
            self.resume_id = self.aggregate.resume_id
            self.navigator.navigate(f"/resume/edit/{self.resume_id}", replace=True)
        await self._sleep(self._redirect_delay)
        self.navigator.navigate(DASHBOARD_PATH)
        return True

    def cancel(self) -> bool:
        if not self._confirm(CANCEL_PROMPT):
            return False
        self.aggregate = ResumeAggregate()
        self.navigator.navigate(DASHBOARD_PATH)
        return True
