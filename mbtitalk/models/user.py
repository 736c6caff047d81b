"""사용자 및 프로필 모델"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Gender(str, Enum):
    """성별"""
    MALE = "MALE"
    FEMALE = "FEMALE"


GENDER_LABELS = {
    Gender.MALE: "남성",
    Gender.FEMALE: "여성",
}

GENDER_ICONS = {
    Gender.MALE: "👨",
    Gender.FEMALE: "👩",
}


@dataclass(frozen=True)
class User:
    """로그인 사용자 (인증 서비스 소유, 읽기 전용)"""
    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class Profile:
    """사용자 프로필 - update_profile 호출로만 변경"""
    mbti: Optional[str] = None
    gender: Optional[Gender] = None

    @property
    def has_mbti(self) -> bool:
        return bool(self.mbti)

    @property
    def gender_label(self) -> str:
        return GENDER_LABELS.get(self.gender, "-")

    @property
    def gender_icon(self) -> str:
        return GENDER_ICONS.get(self.gender, "👤")
