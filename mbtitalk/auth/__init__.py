"""인증 모듈"""

from .middleware import (
    AuthContext,
    auth_middleware,
    get_api_client,
    get_auth_context,
    require_auth,
)

__all__ = ["AuthContext", "auth_middleware", "get_api_client", "get_auth_context", "require_auth"]
