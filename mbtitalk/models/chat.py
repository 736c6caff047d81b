"""채팅/매칭 관련 데이터 모델"""

from dataclasses import dataclass
from enum import Enum


class MatchingStatus(str, Enum):
    """매칭 진행 상태"""
    IDLE = "idle"
    WAITING = "waiting"
    MATCHED = "matched"


@dataclass(frozen=True)
class ChatRoom:
    """채팅방 목록 항목"""
    id: str
    partner_mbti: str
    last_message: str
    last_message_time: str
    unread_count: int = 0

    @property
    def avatar_label(self) -> str:
        return self.partner_mbti[:2]
