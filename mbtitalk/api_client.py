"""
백엔드 API 클라이언트 모듈
- BackendAPI: 공유 aiohttp 세션 (앱 수명 동안 유지)
- UserAPIClient: 요청자 인증 쿠키를 실어 보내는 사용자별 클라이언트
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp
from pydantic import BaseModel, ValidationError

from mbtitalk.models.backend import (
    AIQuestionRequest,
    AIQuestionResponse,
    AuthStatusResponse,
    BalanceGameListResponse,
    MatchRequest,
    MatchRequestResponse,
    MbtiTestStartResponse,
    MyProfileResponse,
    ProfileUpdateRequest,
)

logger = logging.getLogger(__name__)


class BackendAPIError(Exception):
    """백엔드 호출 실패 (네트워크/서버/응답 형식 구분 없음)"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def _parse(model: type, data: Dict[str, Any]) -> BaseModel:
    """응답 바디를 모델로 변환 - 형식이 다르면 BackendAPIError"""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise BackendAPIError(f"{model.__name__} 응답 형식 오류: {e.error_count()}개 필드")


class BackendAPI:
    """백엔드 REST API 전송 계층"""

    def __init__(self, base_url: str, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """aiohttp 세션 생성 또는 반환"""
        if self.session is None or self.session.closed:
            connector = aiohttp.TCPConnector(
                keepalive_timeout=60,
                enable_cleanup_closed=True,
                limit=100,
                limit_per_host=30,
            )

            headers = {
                "Accept": "application/json",
                "User-Agent": "mbtitalk-web/1.0",
            }

            timeout = aiohttp.ClientTimeout(total=self.timeout, connect=min(5, self.timeout))

            # 여러 사용자의 요청이 세션을 공유하므로 응답 쿠키를 저장하지 않음
            self.session = aiohttp.ClientSession(
                connector=connector,
                headers=headers,
                timeout=timeout,
                cookie_jar=aiohttp.DummyCookieJar(),
            )
        return self.session

    async def close(self):
        """세션 종료"""
        if self.session and not self.session.closed:
            await self.session.close()
            logger.info("🔌 백엔드 API 세션 종료")
        self.session = None

    async def request(
        self,
        method: str,
        path: str,
        cookies: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """백엔드 요청 실행 - 2xx가 아니면 BackendAPIError"""
        url = f"{self.base_url}{path}"
        headers = {}
        if cookies:
            headers["Cookie"] = "; ".join(f"{name}={value}" for name, value in cookies.items())

        session = await self._get_session()
        try:
            async with session.request(method, url, json=json, headers=headers) as response:
                if response.status == 204:
                    return None
                if 200 <= response.status < 300:
                    body = await response.text()
                    if not body:
                        return None
                    try:
                        return await response.json(content_type=None)
                    except ValueError as e:
                        raise BackendAPIError(f"{method} {path} 응답 파싱 실패: {str(e)}", response.status)

                error_text = await response.text()
                raise BackendAPIError(
                    f"{method} {path} 실패 {response.status}: {error_text[:200]}",
                    response.status,
                )
        except aiohttp.ClientError as e:
            raise BackendAPIError(f"{method} {path} 연결 오류: {str(e)}")
        except asyncio.TimeoutError:
            raise BackendAPIError(f"{method} {path} 타임아웃 ({self.timeout}초)")

    def for_cookies(self, cookies: Optional[Dict[str, str]]) -> "UserAPIClient":
        """요청자 쿠키에 바인딩된 클라이언트 생성"""
        return UserAPIClient(self, cookies or {})


class UserAPIClient:
    """요청자 인증 정보를 전달하는 백엔드 클라이언트"""

    def __init__(self, api: BackendAPI, cookies: Dict[str, str]):
        self.api = api
        self.cookies = cookies

    async def _call(self, method: str, path: str, json: Optional[Dict[str, Any]] = None):
        return await self.api.request(method, path, cookies=self.cookies, json=json)

    # === 인증/프로필 ===

    async def check_auth_status(self) -> AuthStatusResponse:
        """로그인 상태 조회"""
        data = await self._call("GET", "/api/auth/status")
        return _parse(AuthStatusResponse, data or {})

    async def get_my_profile(self) -> MyProfileResponse:
        """현재 사용자 정보 및 프로필 조회"""
        data = await self._call("GET", "/api/users/me")
        if not data:
            raise BackendAPIError("사용자 정보 응답이 비어 있음")
        return _parse(MyProfileResponse, data)

    async def update_profile(self, payload: ProfileUpdateRequest) -> None:
        """프로필 수정 (MBTI, 성별)"""
        await self._call("PUT", "/api/users/me/profile", json=payload.model_dump(mode="json"))

    # === 매칭 ===

    async def request_match(self, payload: MatchRequest) -> MatchRequestResponse:
        """매칭 요청"""
        data = await self._call("POST", "/api/matching/request", json=payload.model_dump())
        return _parse(MatchRequestResponse, data or {})

    async def cancel_match(self, payload: MatchRequest) -> None:
        """매칭 취소"""
        await self._call("POST", "/api/matching/cancel", json=payload.model_dump())

    # === 밸런스 게임 ===

    async def get_balance_game_list(self) -> BalanceGameListResponse:
        """밸런스 게임 목록 조회"""
        data = await self._call("GET", "/api/balance-games")
        return _parse(BalanceGameListResponse, data or {})

    # === MBTI 검사 ===

    async def start_mbti_test(self, user_id: str) -> MbtiTestStartResponse:
        """MBTI 검사 세션 시작"""
        data = await self._call("POST", "/api/mbti-test/start", json={"user_id": user_id})
        if not data:
            raise BackendAPIError("검사 시작 응답이 비어 있음")
        return _parse(MbtiTestStartResponse, data)

    async def generate_ai_question(self, session_id: str, payload: AIQuestionRequest) -> AIQuestionResponse:
        """다음 질문 생성"""
        data = await self._call(
            "POST",
            f"/api/mbti-test/{session_id}/questions",
            json=payload.model_dump(),
        )
        return _parse(AIQuestionResponse, data or {})
