"""Screen controllers outside the resume wizard: sign in, sign up, dashboard and viewer."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from resume_builder.builder.editors import FORM_ERROR_BANNER
from resume_builder.builder.forms import LoginForm, RegistrationForm
from resume_builder.builder.preview import PrintCallback, ResumePreview, open_in_browser
from resume_builder.core.config import settings
from resume_builder.schemas.pydantic import ResumeDocument, ResumeSummary
from .gateway import ApiError, ApiGateway, AuthenticationError, NotFoundError
from .navigation import DASHBOARD_PATH, LOGIN_PATH, Navigator, Page
from .session import SessionStore, StoredUser

logger = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this resume?"


def format_date(value: Optional[datetime]) -> str:
    return value.strftime("%b %d, %Y") if value else ""


def _always_confirm(message: str) -> bool:
    return True


class LoginPage(Page):
    def __init__(self, gateway: ApiGateway, navigator: Navigator, session: SessionStore):
        super().__init__(navigator)
        self.gateway = gateway
        self.session = session
        self.errors: Dict[str, str] = {}
        self.loading = False

    async def submit(self, username: str, password: str) -> bool:
        self.error = None
        self.errors = LoginForm(username=username, password=password).validate()
        if self.errors:
            self.error = FORM_ERROR_BANNER
            return False

        self.loading = True
        try:
            response = await self.gateway.login(username, password)
        except ApiError as e:
            logger.warning(f"Login failed for {username}: {e}")
            self.error = e.message or "Invalid username or password"
            return False
        finally:
            self.loading = False

        self.session.save(
            response.token,
            StoredUser(id=response.id, username=response.username, email=response.email),
        )
        self.navigator.navigate(DASHBOARD_PATH)
        return True


class RegisterPage(Page):
    def __init__(
        self,
        gateway: ApiGateway,
        navigator: Navigator,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        redirect_delay: Optional[float] = None,
    ):
        super().__init__(navigator)
        self.gateway = gateway
        self.errors: Dict[str, str] = {}
        self.loading = False
        self._sleep = sleep
        self._redirect_delay = (
            settings.SAVE_REDIRECT_DELAY_SECONDS if redirect_delay is None else redirect_delay
        )

    async def submit(self, form: RegistrationForm) -> bool:
        """Register the account. An invalid form is never sent to the server."""
        self.error = None
        self.success = None
        self.errors = form.validate()
        if self.errors:
            self.error = FORM_ERROR_BANNER
            return False

        self.loading = True
        try:
            await self.gateway.register(
                username=form.username,
                email=form.email,
                password=form.password,
                first_name=form.first_name,
                last_name=form.last_name,
            )
        except ApiError as e:
            logger.warning(f"Registration failed for {form.username}: {e}")
            self.error = e.message or "Registration failed"
            return False
        finally:
            self.loading = False

        self.success = "Registration successful! Redirecting to login..."
        await self._sleep(self._redirect_delay)
        self.navigator.navigate(LOGIN_PATH)
        return True


class Dashboard(Page):
    """The signed-in user's resumes, newest first, with create/edit/view/delete."""

    def __init__(
        self,
        gateway: ApiGateway,
        navigator: Navigator,
        session: SessionStore,
        confirm: Callable[[str], bool] = _always_confirm,
    ):
        super().__init__(navigator)
        self.gateway = gateway
        self.session = session
        self.resumes: List[ResumeSummary] = []
        self.loading = False
        self._confirm = confirm

    @property
    def user(self) -> Optional[StoredUser]:
        return self.session.user

    @property
    def rows(self) -> List[Tuple[str, str, str]]:
        """``(id, title, last updated)`` for each listed resume."""
        return [(resume.id, resume.title, format_date(resume.updated_at)) for resume in self.resumes]

    async def load(self) -> bool:
        self.loading = True
        self.error = None
        try:
            self.resumes = await self.gateway.list_resumes()
        except AuthenticationError:
            return False
        except ApiError:
            logger.exception("Error fetching resumes")
            self.error = "Failed to load resumes"
            return False
        finally:
            self.loading = False
        return True

    def create(self) -> None:
        self.navigator.navigate("/resume/new")

    def edit(self, resume_id: str) -> None:
        self.navigator.navigate(f"/resume/edit/{resume_id}")

    def view(self, resume_id: str) -> None:
        self.navigator.navigate(f"/resume/{resume_id}")

    async def delete(self, resume_id: str) -> bool:
        if not self._confirm(DELETE_PROMPT):
            return False
        try:
            await self.gateway.delete_resume(resume_id)
        except AuthenticationError:
            return False
        except ApiError:
            logger.exception(f"Error deleting resume {resume_id}")
            self.error = "Failed to delete resume"
            return False
        self.resumes = [resume for resume in self.resumes if resume.id != resume_id]
        return True

    def logout(self) -> None:
        self.session.clear()
        self.navigator.navigate(LOGIN_PATH)


class ResumeViewer(Page):
    def __init__(
        self,
        gateway: ApiGateway,
        navigator: Navigator,
        trigger_print: PrintCallback = open_in_browser,
    ):
        super().__init__(navigator)
        self.gateway = gateway
        self.document: Optional[ResumeDocument] = None
        self.loading = False
        self.not_found = False
        self._trigger_print = trigger_print

    async def load(self, resume_id: str) -> bool:
        self.loading = True
        self.error = None
        self.not_found = False
        try:
            self.document = await self.gateway.get_resume(resume_id)
        except NotFoundError:
            self.not_found = True
            return False
        except AuthenticationError:
            return False
        except ApiError:
            logger.exception(f"Error fetching resume {resume_id}")
            self.error = "Failed to load resume"
            return False
        finally:
            self.loading = False
        return True

    def preview(self) -> Optional[ResumePreview]:
        if self.document is None:
            return None
        return ResumePreview(self.document, trigger_print=self._trigger_print)

    def edit(self) -> None:
        if self.document is not None:
            self.navigator.navigate(f"/resume/edit/{self.document.id}")

    def back(self) -> None:
        self.navigator.navigate(DASHBOARD_PATH)
