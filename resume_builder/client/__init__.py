from .session import SessionStore, StoredUser
from .navigation import Navigator, Location, Route, ROUTES
from .gateway import ApiGateway, ApiError, AuthenticationError, NotFoundError

__all__ = [
    "SessionStore",
    "StoredUser",
    "Navigator",
    "Location",
    "Route",
    "ROUTES",
    "ApiGateway",
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
]
