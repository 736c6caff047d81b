"""
HTML Views Module
웹 인터페이스를 위한 HTML 응답 뷰들
"""

from .main_views import main_views_router
from .auth_views import auth_views_router
from .chat_views import chat_views_router
from .balance_views import balance_views_router
from .mbti_test_views import mbti_test_views_router
from .profile_views import profile_views_router

__all__ = [
    "main_views_router",
    "auth_views_router",
    "chat_views_router",
    "balance_views_router",
    "mbti_test_views_router",
    "profile_views_router"
]
