from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from resume_builder.core.config import settings
from resume_builder.schemas.pydantic import (
    JwtResponse,
    LoginRequest,
    MessageResponse,
    ResumeDocument,
    ResumeSummary,
    SignupRequest,
)
from .navigation import LOGIN_PATH, Navigator
from .session import SessionStore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request to the backend failed. ``message`` is the server's message when it sent one."""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message or f"Request failed with status {status_code}")


class AuthenticationError(ApiError):
    """The backend answered 401; the session has already been cleared."""


class NotFoundError(ApiError):
    pass


class ApiGateway:
    """
    Async client for the resume backend.

    Attaches the stored bearer token to every request. Any 401 response
    ends the session: the token is dropped and the navigator is sent to the
    login page before ``AuthenticationError`` is raised.
    """

    def __init__(
        self,
        session: SessionStore,
        navigator: Navigator,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._session = session
        self._navigator = navigator
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ApiGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ---- auth ----

    async def login(self, username: str, password: str) -> JwtResponse:
        payload = LoginRequest(username=username, password=password).model_dump()
        response = await self._request("POST", "/auth/signin", payload)
        return JwtResponse.model_validate(response.json())

    async def register(
        self,
        username: str,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> MessageResponse:
        payload = SignupRequest(
            username=username,
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        ).model_dump(by_alias=True)
        response = await self._request("POST", "/auth/signup", payload)
        return MessageResponse.model_validate(response.json())

    # ---- resumes ----

    async def list_resumes(self) -> List[ResumeSummary]:
        response = await self._request("GET", "/resumes")
        return [ResumeSummary.model_validate(item) for item in response.json()]

    async def get_resume(self, resume_id: str) -> ResumeDocument:
        response = await self._request("GET", f"/resumes/{resume_id}")
        return ResumeDocument.model_validate(response.json())

    async def create_resume(self, document: ResumeDocument) -> ResumeDocument:
        response = await self._request("POST", "/resumes", document.to_payload())
        return ResumeDocument.model_validate(response.json())

    async def update_resume(self, resume_id: str, document: ResumeDocument) -> ResumeDocument:
        response = await self._request("PUT", f"/resumes/{resume_id}", document.to_payload())
        return ResumeDocument.model_validate(response.json())

    async def delete_resume(self, resume_id: str) -> None:
        await self._request("DELETE", f"/resumes/{resume_id}")

    # ---- internals ----

    async def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> httpx.Response:
        headers = {}
        if self._session.token:
            headers["Authorization"] = f"Bearer {self._session.token}"

        try:
            response = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}", exc_info=True)
            raise ApiError(None) from e

        if response.status_code == 401:
            self._end_session()
            raise AuthenticationError(self._server_message(response), 401)
        if response.status_code == 404:
            raise NotFoundError(self._server_message(response), 404)
        if response.is_error:
            message = self._server_message(response)
            logger.warning(f"{method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)
        return response

    def _end_session(self) -> None:
        logger.info("Session rejected by the server; signing out")
        self._session.clear()
        current = self._navigator.current
        if current is None or current.path != LOGIN_PATH:
            self._navigator.navigate(LOGIN_PATH)

    @staticmethod
    def _server_message(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            return body.get("message")
        return None
