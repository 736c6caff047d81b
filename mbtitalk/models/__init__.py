"""데이터 모델"""

from .mbti import MBTI_AXES, ALL_MBTI_TYPES, InvalidMbtiError, is_valid_mbti, parse_mbti
from .user import Gender, User, Profile
from .chat import ChatRoom, MatchingStatus
from .view_state import LoadStatus, BalanceGameListState

__all__ = [
    "MBTI_AXES",
    "ALL_MBTI_TYPES",
    "InvalidMbtiError",
    "is_valid_mbti",
    "parse_mbti",
    "Gender",
    "User",
    "Profile",
    "ChatRoom",
    "MatchingStatus",
    "LoadStatus",
    "BalanceGameListState",
]
