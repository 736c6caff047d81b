"""
인증 컨텍스트 및 접근 제어
- 백엔드 인증 서비스에서 로그인 상태/프로필 조회
- 읽기 전용 AuthContext + 명시적 refresh
- 보호 페이지 리다이렉트 (/login, /profile)
"""

import logging
from typing import Dict, Optional
from urllib.parse import quote

from fastapi import Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from mbtitalk.api_client import BackendAPIError, UserAPIClient
from mbtitalk.config_manager import config_manager
from mbtitalk.models.user import Profile, User

logger = logging.getLogger(__name__)


class AuthContext:
    """현재 요청의 로그인 사용자/프로필 (읽기 전용)"""

    def __init__(self, client: UserAPIClient):
        self._client = client
        self._logged_in = False
        self._user: Optional[User] = None
        self._profile: Optional[Profile] = None

    @property
    def is_logged_in(self) -> bool:
        return self._logged_in and self._user is not None

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def profile(self) -> Profile:
        return self._profile or Profile()

    @property
    def user_id(self) -> Optional[str]:
        return self._user.id if self._user else None

    async def refresh(self) -> "AuthContext":
        """로그인 상태와 프로필을 백엔드에서 다시 조회"""
        self._logged_in = False
        self._user = None
        self._profile = None

        try:
            auth_status = await self._client.check_auth_status()
        except BackendAPIError as e:
            # 인증 서비스 오류는 비로그인으로 처리
            logger.warning(f"⚠️ 로그인 상태 조회 실패: {str(e)}")
            return self

        if not auth_status.logged_in or not auth_status.user_id:
            return self

        self._logged_in = True
        self._user = User(id=auth_status.user_id)

        try:
            me = await self._client.get_my_profile()
            self._user = User(id=me.id, email=me.email)
            self._profile = Profile(mbti=me.mbti, gender=me.gender)
        except BackendAPIError as e:
            logger.error(f"❌ 프로필 조회 실패 (user_id={auth_status.user_id}): {str(e)}")

        return self


class AuthMiddleware:
    """인증 미들웨어"""

    def extract_auth_cookies(self, request: Request) -> Dict[str, str]:
        """백엔드로 전달할 인증 쿠키 추출"""
        return {
            name: request.cookies[name]
            for name in config_manager.backend.auth_cookie_names
            if name in request.cookies
        }

    def get_client(self, request: Request) -> UserAPIClient:
        """요청자 쿠키에 바인딩된 백엔드 클라이언트"""
        from mbtitalk.app_lifecycle import backend_api
        return backend_api.for_cookies(self.extract_auth_cookies(request))

    async def load_context(self, client: UserAPIClient) -> AuthContext:
        """인증 컨텍스트 생성"""
        return await AuthContext(client).refresh()

    def login_redirect(self, request: Request, redirect_url: str = "/login") -> RedirectResponse:
        """로그인 페이지로 리다이렉트 (현재 경로를 next로 전달)"""
        next_path = request.url.path
        if request.url.query:
            next_path = f"{next_path}?{request.url.query}"
        return RedirectResponse(
            url=f"{redirect_url}?next={quote(next_path, safe='')}",
            status_code=status.HTTP_302_FOUND
        )

    def require_login_redirect(self, request: Request, context: AuthContext) -> Optional[RedirectResponse]:
        """보호 페이지용 - 비로그인이면 /login 리다이렉트"""
        if not context.is_logged_in:
            return self.login_redirect(request)
        return None

    def require_mbti_redirect(self, request: Request, context: AuthContext) -> Optional[RedirectResponse]:
        """채팅/매칭 페이지용 - 비로그인이면 /login, MBTI 미설정이면 /profile"""
        redirect = self.require_login_redirect(request, context)
        if redirect:
            return redirect
        if not context.profile.has_mbti:
            logger.info(f"🧭 MBTI 미설정 사용자 프로필 페이지로 이동: {context.user_id}")
            return RedirectResponse(url="/profile", status_code=status.HTTP_302_FOUND)
        return None


# 전역 인스턴스
auth_middleware = AuthMiddleware()

# FastAPI Depends용 함수들
def get_api_client(request: Request) -> UserAPIClient:
    """요청자 백엔드 클라이언트 (의존성 주입용)"""
    return auth_middleware.get_client(request)


async def get_auth_context(client: UserAPIClient = Depends(get_api_client)) -> AuthContext:
    """인증 컨텍스트 (의존성 주입용)"""
    return await auth_middleware.load_context(client)


async def require_auth(context: AuthContext = Depends(get_auth_context)) -> AuthContext:
    """인증 필수 (의존성 주입용) - 비로그인이면 401"""
    if not context.is_logged_in:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="로그인이 필요합니다",
        )
    return context
