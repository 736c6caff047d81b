"""세션 관리 모듈"""

from .session_manager import session_manager, SessionManager, UserSession

__all__ = ["session_manager", "SessionManager", "UserSession"]
