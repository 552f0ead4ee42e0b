"""conftest.py
Shared fixtures: an in-memory MongoDB, the ASGI app and client-side plumbing.
"""

import logging

import httpx
import pytest
from mongomock_motor import AsyncMongoMockClient

from resume_builder.base import create_app
from resume_builder.client.gateway import ApiGateway
from resume_builder.client.navigation import Navigator
from resume_builder.client.session import SessionStore, StoredUser
from resume_builder.core import init_db

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

logger = logging.getLogger("pytest_logger")
current_module = None


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    logger.info("==== PYTEST SESSION START ====")


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    global current_module
    if location[0] != current_module:
        current_module = location[0]
        logger.info(f"---- {current_module} ----")


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    if report.when != "call":
        return
    if report.failed:
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    else:
        logger.info(f"{report.outcome.upper()}: {report.nodeid}")


# --------------------------------------------------------------
# BACKEND
# --------------------------------------------------------------

BASE_URL = "http://testserver"


@pytest.fixture
async def db():
    """Fresh in-memory database with Beanie initialised on it."""
    client = AsyncMongoMockClient()
    await init_db(client=client)
    yield client


@pytest.fixture
def app(db):
    return create_app(use_lifespan=False)


@pytest.fixture
async def api(app):
    """Raw HTTP client talking to the app in-process."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url=BASE_URL) as client:
        yield client


async def signup_and_signin(api, username="janedoe", email="jane@example.com", password="Secret#123"):
    response = await api.post(
        "/api/v1/auth/signup",
        json={
            "username": username,
            "email": email,
            "password": password,
            "firstName": "Jane",
            "lastName": "Doe",
        },
    )
    assert response.status_code == 200, response.text
    response = await api.post("/api/v1/auth/signin", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
async def auth_headers(api):
    body = await signup_and_signin(api)
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def register_user(api):
    """Factory signing up and signing in an extra account; returns the signin body."""
    async def _register(username, email):
        return await signup_and_signin(api, username=username, email=email)
    return _register


# --------------------------------------------------------------
# CLIENT
# --------------------------------------------------------------

@pytest.fixture
def session():
    return SessionStore(path=None)


@pytest.fixture
def navigator(session):
    return Navigator(session)


@pytest.fixture
async def gateway(app, session, navigator):
    """Gateway wired to the in-process backend."""
    async with ApiGateway(
        session,
        navigator,
        base_url=f"{BASE_URL}/api/v1",
        transport=httpx.ASGITransport(app=app),
    ) as gw:
        yield gw


@pytest.fixture
async def signed_in(gateway, session, navigator):
    """Registers and signs a user in through the gateway, leaving them on the dashboard."""
    await gateway.register("janedoe", "jane@example.com", "Secret#123", "Jane", "Doe")
    jwt = await gateway.login("janedoe", "Secret#123")
    session.save(jwt.token, StoredUser(id=jwt.id, username=jwt.username, email=jwt.email))
    navigator.navigate("/dashboard")
    return jwt


class FakeGateway:
    """Records calls and returns canned results; ``fail_with`` makes the next call raise."""

    def __init__(self):
        self.calls = []
        self.fail_with = None
        self.result = None

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error
        return self.result

    async def login(self, username, password):
        return self._record("login", username, password)

    async def register(self, **fields):
        return self._record("register", fields)

    async def list_resumes(self):
        return self._record("list_resumes")

    async def get_resume(self, resume_id):
        return self._record("get_resume", resume_id)

    async def create_resume(self, document):
        return self._record("create_resume", document)

    async def update_resume(self, resume_id, document):
        return self._record("update_resume", resume_id, document)

    async def delete_resume(self, resume_id):
        return self._record("delete_resume", resume_id)


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def no_sleep():
    delays = []

    async def _sleep(seconds):
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
