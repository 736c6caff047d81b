"""
사용자별 화면 상태 관리자
다중 사용자 동시 사용을 위한 워크플로우 상태 격리
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from ..services.matching_service import MatchingWorkflow
from ..services.mbti_test_service import MbtiTestSession
from ..services.profile_service import ProfileEditor

logger = logging.getLogger(__name__)


class UserSession:
    """개별 사용자 세션 데이터"""

    def __init__(self, user_id: str):
        self.user_id = user_id

        # 매칭 상태 (사용자별 독립 인스턴스)
        self.matching = MatchingWorkflow()

        # MBTI 검사 (시작 전에는 빈 세션)
        self.mbti_test = MbtiTestSession()

        # 프로필 편집 버퍼
        self.profile_editor = ProfileEditor()

        self.created_at = datetime.now()
        self.last_access = datetime.now()

        logger.info(f"✅ 사용자 세션 생성: {user_id}")

    def touch(self):
        self.last_access = datetime.now()

    def reset_mbti_test(self) -> MbtiTestSession:
        """검사 세션 새로 시작"""
        self.mbti_test.cancel_pending_result()
        self.mbti_test = MbtiTestSession()
        self.touch()
        return self.mbti_test

    def cleanup(self):
        """세션 정리 - 예약된 매칭/결과 전달 취소"""
        logger.info(f"🧹 사용자 세션 정리 시작: {self.user_id}")
        self.matching.cancel_pending_delivery()
        self.mbti_test.cancel_pending_result()
        logger.info(f"✅ 사용자 세션 정리 완료: {self.user_id}")


class SessionManager:
    """전역 세션 관리자"""

    def __init__(self):
        self._sessions: Dict[str, UserSession] = {}
        logger.info("🎯 세션 관리자 초기화 완료")

    def get_or_create_session(self, user_id: str) -> UserSession:
        """사용자 세션 조회 (없으면 생성)"""
        session = self.get_session(user_id)
        if session is None:
            session = UserSession(user_id)
            self._sessions[user_id] = session
            logger.info(f"✅ 새 세션 생성 완료: {user_id} (총 {len(self._sessions)}개 활성 세션)")
        return session

    def get_session(self, user_id: str) -> Optional[UserSession]:
        """사용자 세션 조회"""
        session = self._sessions.get(user_id)
        if session:
            session.touch()
        return session

    def remove_session(self, user_id: str):
        """사용자 세션 제거"""
        if user_id in self._sessions:
            self._sessions[user_id].cleanup()
            del self._sessions[user_id]
            logger.info(f"🗑️ 세션 제거 완료: {user_id} (총 {len(self._sessions)}개 활성 세션)")
        else:
            logger.warning(f"⚠️ 제거할 세션이 존재하지 않음: user_id={user_id}")

    def get_active_sessions_count(self) -> int:
        """활성 세션 수 조회"""
        return len(self._sessions)

    def cleanup_expired_sessions(self, max_idle_hours: int = 24) -> int:
        """만료된 세션 정리"""
        now = datetime.now()
        expired_sessions = [
            user_id for user_id, session in self._sessions.items()
            if now - session.last_access > timedelta(hours=max_idle_hours)
        ]

        for user_id in expired_sessions:
            self.remove_session(user_id)
            logger.info(f"🕐 만료된 세션 정리: {user_id}")

        if expired_sessions:
            logger.info(f"✅ 만료된 세션 {len(expired_sessions)}개 정리 완료")
        return len(expired_sessions)

    def cleanup_all(self):
        """전체 세션 정리 (종료 시)"""
        for user_id in list(self._sessions):
            self.remove_session(user_id)


# 전역 세션 관리자 인스턴스
session_manager = SessionManager()
