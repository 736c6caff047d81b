"""
채팅 매칭 워크플로우
- idle → waiting → matched 상태 관리
- 매칭 요청/취소 백엔드 호출
- 매칭 결과 전달 (푸시/폴링 계약 전까지 지연 시뮬레이션)
"""

import asyncio
import logging
import time
from typing import Any, Dict, Optional

from pydantic import ValidationError

from mbtitalk.api_client import BackendAPIError
from mbtitalk.config_manager import config_manager
from mbtitalk.models.backend import MatchRequest
from mbtitalk.models.chat import MatchingStatus

logger = logging.getLogger(__name__)

MATCH_REQUEST_FAILED = "매칭 요청에 실패했습니다. 다시 시도해주세요."
MATCH_CANCEL_FAILED = "매칭 취소에 실패했습니다."


class MatchingStateError(Exception):
    """현재 매칭 상태에서 허용되지 않는 동작"""


class MatchNotifier:
    """매칭 성공 전달 (지연 후 고정 상대와 매칭)"""

    def __init__(self, delay: float, partner_mbti: str):
        self.delay = delay
        self.partner_mbti = partner_mbti

    @classmethod
    def from_config(cls) -> "MatchNotifier":
        return cls(
            delay=config_manager.matching.simulation_delay,
            partner_mbti=config_manager.matching.simulated_partner,
        )

    def schedule(self, workflow: "MatchingWorkflow") -> asyncio.Task:
        """매칭 성공 이벤트 예약"""
        async def deliver():
            await asyncio.sleep(self.delay)
            if workflow.status == MatchingStatus.WAITING:
                room_id = f"room_{int(time.time() * 1000)}"
                workflow.mark_matched(self.partner_mbti, room_id)

        return asyncio.create_task(deliver())


class MatchingWorkflow:
    """사용자별 매칭 상태 머신"""

    def __init__(self, notifier: Optional[MatchNotifier] = None):
        self.notifier = notifier or MatchNotifier.from_config()
        self.status = MatchingStatus.IDLE
        self.wait_count = 0
        self.matched_mbti: Optional[str] = None
        self.matched_room_id: Optional[str] = None
        self.error: Optional[str] = None
        self.is_loading = False
        self._delivery_task: Optional[asyncio.Task] = None

    @property
    def pending_delivery(self) -> Optional[asyncio.Task]:
        return self._delivery_task

    def _ensure(self, expected: MatchingStatus, action: str):
        if self.is_loading:
            raise MatchingStateError("이전 요청을 처리 중입니다")
        if self.status != expected:
            raise MatchingStateError(f"{action} 불가 상태: {self.status.value}")

    @staticmethod
    def _match_request(user_id: str, mbti: Optional[str]) -> MatchRequest:
        try:
            return MatchRequest(user_id=user_id, mbti=mbti)
        except ValidationError:
            raise MatchingStateError(f"유효한 MBTI가 없습니다: {mbti}")

    async def start(self, client, user_id: str, mbti: str):
        """매칭 시작 (idle → waiting)"""
        self._ensure(MatchingStatus.IDLE, "매칭 시작")
        request = self._match_request(user_id, mbti)

        self.is_loading = True
        self.error = None
        try:
            response = await client.request_match(request)
        except BackendAPIError as e:
            logger.error(f"❌ 매칭 요청 실패 (user_id={user_id}): {str(e)}")
            self.error = MATCH_REQUEST_FAILED
            self.status = MatchingStatus.IDLE
            return
        finally:
            self.is_loading = False

        self.status = MatchingStatus.WAITING
        self.wait_count = response.wait_count
        self._delivery_task = self.notifier.schedule(self)
        logger.info(f"🔍 매칭 대기 시작: user_id={user_id}, mbti={mbti}, 대기 인원={self.wait_count}")

    async def cancel(self, client, user_id: str, mbti: str):
        """매칭 취소 (waiting → idle)"""
        self._ensure(MatchingStatus.WAITING, "매칭 취소")
        # 요청을 만들 수 없으면 대기 상태 유지
        request = self._match_request(user_id, mbti)

        self.is_loading = True
        self.cancel_pending_delivery()
        try:
            await client.cancel_match(request)
            logger.info(f"🛑 매칭 취소: user_id={user_id}")
        except BackendAPIError as e:
            logger.error(f"❌ 매칭 취소 실패 (user_id={user_id}): {str(e)}")
            self.error = MATCH_CANCEL_FAILED
        finally:
            self.is_loading = False
            self.status = MatchingStatus.IDLE
            self.wait_count = 0

    def mark_matched(self, partner_mbti: str, room_id: str):
        """매칭 성공 (waiting → matched)"""
        if self.status != MatchingStatus.WAITING:
            raise MatchingStateError(f"매칭 성공 처리 불가 상태: {self.status.value}")

        self.status = MatchingStatus.MATCHED
        self.matched_mbti = partner_mbti
        self.matched_room_id = room_id
        self._delivery_task = None
        logger.info(f"💞 매칭 성공: 상대 {partner_mbti}, 채팅방 {room_id}")

    def reset(self):
        """다시 매칭 (matched → idle)"""
        self._ensure(MatchingStatus.MATCHED, "다시 매칭")
        self.status = MatchingStatus.IDLE
        self.matched_mbti = None
        self.matched_room_id = None
        self.wait_count = 0

    def chat_destination(self) -> str:
        """매칭된 채팅방 경로"""
        if self.status != MatchingStatus.MATCHED or not self.matched_room_id:
            raise MatchingStateError("매칭된 채팅방이 없습니다")
        return f"/chat/{self.matched_room_id}"

    def cancel_pending_delivery(self):
        """예약된 매칭 결과 전달 취소"""
        task = self._delivery_task
        self._delivery_task = None
        if task and not task.done():
            task.cancel()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "wait_count": self.wait_count,
            "matched_mbti": self.matched_mbti,
            "matched_room_id": self.matched_room_id,
            "chat_url": f"/chat/{self.matched_room_id}" if self.matched_room_id else None,
            "error": self.error,
            "is_loading": self.is_loading,
        }
