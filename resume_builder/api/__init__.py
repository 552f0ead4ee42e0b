from .router import health_check, v1_router
from .middleware import RequestIDMiddleware

__all__ = ["health_check", "v1_router", "RequestIDMiddleware"]
