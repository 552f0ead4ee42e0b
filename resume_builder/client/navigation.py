"""Client-side routes and the navigator that moves between them."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .session import SessionStore

logger = logging.getLogger(__name__)

NOT_FOUND = "not_found"
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


@dataclass(frozen=True)
class Route:
    name: str
    pattern: str
    auth_required: bool = True

    def match(self, path: str) -> Optional[Dict[str, str]]:
        regex = re.sub(r"\{(\w+)\}", r"(?P<\1>[^/]+)", self.pattern)
        matched = re.fullmatch(regex, path)
        return matched.groupdict() if matched else None


# Order matters: "/resume/new" must win over "/resume/{id}".
ROUTES: List[Route] = [
    Route("login", LOGIN_PATH, auth_required=False),
    Route("register", "/register", auth_required=False),
    Route("dashboard", DASHBOARD_PATH),
    Route("resume_new", "/resume/new"),
    Route("resume_edit", "/resume/edit/{id}"),
    Route("resume_view", "/resume/{id}"),
]

REDIRECTS: Dict[str, str] = {
    "/": DASHBOARD_PATH,
}


@dataclass
class Location:
    path: str
    route: str
    params: Dict[str, str] = field(default_factory=dict)


Listener = Callable[[Location], None]


class Navigator:
    """
    Resolves paths to routes and keeps the navigation history.

    Redirects are followed, auth-gated routes send signed-out users to the
    login page, and unknown paths resolve to the ``not_found`` route.
    """

    def __init__(self, session: SessionStore, routes: List[Route] = ROUTES):
        self._session = session
        self._routes = routes
        self.history: List[Location] = []
        self._listeners: List[Listener] = []

    @property
    def current(self) -> Optional[Location]:
        return self.history[-1] if self.history else None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def resolve(self, path: str) -> Location:
        path = REDIRECTS.get(path, path)
        for route in self._routes:
            params = route.match(path)
            if params is None:
                continue
            if route.auth_required and not self._session.is_authenticated:
                return Location(path=LOGIN_PATH, route="login")
            return Location(path=path, route=route.name, params=params)
        return Location(path=path, route=NOT_FOUND)

    def navigate(self, path: str, replace: bool = False) -> Location:
        location = self.resolve(path)
        if replace and self.history:
            self.history[-1] = location
        else:
            self.history.append(location)
        logger.debug(f"Navigated to {location.path} ({location.route})")
        for listener in list(self._listeners):
            listener(location)
        return location


class Page:
    """Base for screens: holds the banner messages, which are dismissed on navigation."""

    def __init__(self, navigator: Navigator):
        self.navigator = navigator
        self.error: Optional[str] = None
        self.success: Optional[str] = None
        navigator.subscribe(self._on_navigate)

    def _on_navigate(self, location: Location) -> None:
        self.error = None
