"""JSON API 라우터 모듈"""

from .auth import router as auth_router
from .matching import router as matching_router
from .mbti_test import router as mbti_test_router
from .profile import router as profile_router

__all__ = ["auth_router", "matching_router", "mbti_test_router", "profile_router"]
