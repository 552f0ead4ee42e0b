"""test_pages.py
Sign-in, registration, dashboard and viewer screens.
"""

from datetime import datetime

import pytest

from resume_builder.builder.editors import FORM_ERROR_BANNER
from resume_builder.builder.forms import LoginForm, RegistrationForm
from resume_builder.client.gateway import ApiError, AuthenticationError, NotFoundError
from resume_builder.client.pages import Dashboard, LoginPage, RegisterPage, ResumeViewer, format_date
from resume_builder.client.session import StoredUser
from resume_builder.schemas.pydantic import JwtResponse, ResumeDocument, ResumeSummary


def valid_registration(**overrides):
    fields = dict(
        username="janedoe",
        email="jane@example.com",
        password="Secret#123",
        confirm_password="Secret#123",
        first_name="Jane",
        last_name="Doe",
    )
    fields.update(overrides)
    return RegistrationForm(**fields)


@pytest.fixture
def signed_in_session(session, navigator):
    session.save("token", StoredUser(id="u1", username="jane", email="jane@example.com"))
    navigator.navigate("/dashboard")
    return session


class TestForms:
    def test_registration_form_valid(self):
        assert valid_registration().validate() == {}

    def test_registration_form_mismatch(self):
        form = valid_registration(confirm_password="Secret#124")
        assert form.validate() == {"confirm_password": "Passwords must match"}
        assert form.blur("confirm_password") == "Passwords must match"
        assert form.blur("username") is None

    def test_login_form_requires_both_fields(self):
        assert LoginForm().validate() == {
            "username": "Username is required",
            "password": "Password is required",
        }


class TestRegisterPage:
    async def test_mismatched_password_never_calls_signup(self, fake_gateway, navigator, no_sleep):
        page = RegisterPage(fake_gateway, navigator, sleep=no_sleep)
        assert await page.submit(valid_registration(confirm_password="Other#1234")) is False
        assert fake_gateway.calls == []
        assert page.error == FORM_ERROR_BANNER
        assert "confirm_password" in page.errors

    async def test_success_redirects_to_login(self, fake_gateway, navigator, no_sleep):
        page = RegisterPage(fake_gateway, navigator, sleep=no_sleep, redirect_delay=2.0)
        assert await page.submit(valid_registration()) is True
        assert fake_gateway.calls[0][0] == "register"
        assert page.success.startswith("Registration successful")
        assert no_sleep.delays == [2.0]
        assert navigator.current.path == "/login"

    async def test_server_error_shown(self, fake_gateway, navigator, no_sleep):
        fake_gateway.fail_with = ApiError("Error: Email is already in use!", 400)
        page = RegisterPage(fake_gateway, navigator, sleep=no_sleep)
        assert await page.submit(valid_registration()) is False
        assert page.error == "Error: Email is already in use!"
        assert navigator.history == []


class TestLoginPage:
    async def test_success_saves_session(self, fake_gateway, session, navigator):
        fake_gateway.result = JwtResponse(token="t1", id="u1", username="jane", email="jane@example.com")
        page = LoginPage(fake_gateway, navigator, session)
        assert await page.submit("jane", "Secret#123") is True
        assert session.token == "t1"
        assert session.user.username == "jane"
        assert navigator.current.path == "/dashboard"

    async def test_failure_message(self, fake_gateway, session, navigator):
        fake_gateway.fail_with = ApiError(None, None)
        page = LoginPage(fake_gateway, navigator, session)
        assert await page.submit("jane", "wrong") is False
        assert page.error == "Invalid username or password"
        assert not session.is_authenticated

    async def test_blank_fields_blocked(self, fake_gateway, session, navigator):
        page = LoginPage(fake_gateway, navigator, session)
        assert await page.submit("", "") is False
        assert fake_gateway.calls == []


class TestDashboard:
    async def test_load_and_delete(self, fake_gateway, navigator, signed_in_session):
        fake_gateway.result = [ResumeSummary(id="r1", title="A"), ResumeSummary(id="r2", title="B")]
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session)
        assert await dashboard.load() is True
        fake_gateway.result = None
        assert await dashboard.delete("r1") is True
        assert [r.id for r in dashboard.resumes] == ["r2"]
        assert fake_gateway.calls[-1] == ("delete_resume", "r1")

    async def test_delete_declined(self, fake_gateway, navigator, signed_in_session):
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session, confirm=lambda message: False)
        assert await dashboard.delete("r1") is False
        assert fake_gateway.calls == []

    async def test_failures(self, fake_gateway, navigator, signed_in_session):
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session)
        fake_gateway.fail_with = ApiError(None, 500)
        assert await dashboard.load() is False
        assert dashboard.error == "Failed to load resumes"
        fake_gateway.fail_with = ApiError(None, 500)
        assert await dashboard.delete("r1") is False
        assert dashboard.error == "Failed to delete resume"

    def test_navigation_actions(self, fake_gateway, navigator, signed_in_session):
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session)
        dashboard.create()
        dashboard.edit("r1")
        dashboard.view("r1")
        assert [loc.route for loc in navigator.history[-3:]] == ["resume_new", "resume_edit", "resume_view"]
        dashboard.logout()
        assert not signed_in_session.is_authenticated
        assert navigator.current.path == "/login"

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 5)) == "Mar 05, 2024"
        assert format_date(None) == ""

    async def test_rows_show_last_updated(self, fake_gateway, navigator, signed_in_session):
        fake_gateway.result = [
            ResumeSummary(id="r1", title="A", updated_at=datetime(2024, 3, 5, 10, 30)),
            ResumeSummary(id="r2", title="B"),
        ]
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session)
        await dashboard.load()
        assert dashboard.rows == [("r1", "A", "Mar 05, 2024"), ("r2", "B", "")]

    async def test_expired_session_leaves_no_banner(self, fake_gateway, navigator, signed_in_session):
        dashboard = Dashboard(fake_gateway, navigator, signed_in_session)
        fake_gateway.fail_with = AuthenticationError("Token has expired", 401)
        assert await dashboard.load() is False
        assert dashboard.error is None
        fake_gateway.fail_with = AuthenticationError("Token has expired", 401)
        assert await dashboard.delete("r1") is False
        assert dashboard.error is None


class TestResumeViewer:
    async def test_load_and_preview(self, fake_gateway, navigator, signed_in_session):
        fake_gateway.result = ResumeDocument(id="r1", title="CV")
        viewer = ResumeViewer(fake_gateway, navigator, trigger_print=lambda html: None)
        assert await viewer.load("r1") is True
        assert viewer.preview().document.title == "CV"
        viewer.edit()
        assert navigator.current.path == "/resume/edit/r1"
        viewer.back()
        assert navigator.current.path == "/dashboard"

    async def test_not_found(self, fake_gateway, navigator, signed_in_session):
        fake_gateway.fail_with = NotFoundError("Resume not found", 404)
        viewer = ResumeViewer(fake_gateway, navigator)
        assert await viewer.load("missing") is False
        assert viewer.not_found is True
        assert viewer.preview() is None

    async def test_expired_session_leaves_no_banner(self, fake_gateway, navigator, signed_in_session):
        fake_gateway.fail_with = AuthenticationError("Token has expired", 401)
        viewer = ResumeViewer(fake_gateway, navigator)
        assert await viewer.load("r1") is False
        assert viewer.error is None
        assert viewer.not_found is False
