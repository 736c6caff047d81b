"""
프로필 편집
- MBTI 4글자 + 성별 선택 버퍼
- 저장 전 검증 (미선택 항목이 있으면 네트워크 호출 없음)
- 저장 후 인증 컨텍스트 갱신
"""

import logging
from typing import Any, Dict, List, Optional

from mbtitalk.api_client import BackendAPIError
from mbtitalk.models.backend import ProfileUpdateRequest
from mbtitalk.models.mbti import MBTI_AXES, InvalidMbtiError, split_letters
from mbtitalk.models.user import Gender, Profile

logger = logging.getLogger(__name__)

SELECTION_REQUIRED = "MBTI 4글자와 성별을 모두 선택해주세요."
SAVE_FAILED = "프로필 저장에 실패했습니다."


class ProfileValidationError(ValueError):
    """선택되지 않은 항목이 있음"""


class ProfileEditor:
    """프로필 편집 상태"""

    def __init__(self, profile: Optional[Profile] = None):
        self.letters: List[Optional[str]] = [None] * len(MBTI_AXES)
        self.gender: Optional[Gender] = None
        self.is_editing = False
        self.is_saving = False
        self.error: Optional[str] = None
        if profile:
            self.load(profile)

    def load(self, profile: Profile):
        """현재 프로필로 선택 버퍼 초기화"""
        self.letters = split_letters(profile.mbti) if profile.mbti else [None] * len(MBTI_AXES)
        self.gender = profile.gender
        self.error = None

    def start_editing(self, profile: Profile):
        self.load(profile)
        self.is_editing = True

    @staticmethod
    def _check_letter(axis: int, letter: Optional[str]) -> Optional[str]:
        if not 0 <= axis < len(MBTI_AXES):
            raise InvalidMbtiError(f"유효하지 않은 축: {axis}")
        if letter is None:
            return None
        letter = letter.upper()
        if letter not in MBTI_AXES[axis]:
            raise InvalidMbtiError(f"{'/'.join(MBTI_AXES[axis])} 축에 없는 글자: {letter}")
        return letter

    def select_letter(self, axis: int, letter: Optional[str]):
        """축별 글자 선택 (None이면 선택 해제)"""
        self.letters[axis] = self._check_letter(axis, letter)

    def select_letters(self, letters: List[Optional[str]]):
        """4축 글자 일괄 선택 - 하나라도 틀리면 버퍼를 바꾸지 않음"""
        if len(letters) != len(MBTI_AXES):
            raise InvalidMbtiError(f"MBTI 글자 수 오류: {len(letters)}")
        self.letters = [self._check_letter(axis, letter) for axis, letter in enumerate(letters)]

    def select_gender(self, gender: Optional[Gender]):
        self.gender = gender

    @property
    def is_complete(self) -> bool:
        return all(self.letters) and self.gender is not None

    @property
    def selected_mbti(self) -> Optional[str]:
        return "".join(self.letters) if all(self.letters) else None

    def validate(self) -> ProfileUpdateRequest:
        """저장 요청 생성 - 미선택 항목이 있으면 ProfileValidationError"""
        if not self.is_complete:
            raise ProfileValidationError(SELECTION_REQUIRED)
        return ProfileUpdateRequest(mbti=self.selected_mbti, gender=self.gender)

    async def save(self, client, auth_context) -> bool:
        """프로필 저장 후 인증 컨텍스트 갱신, 편집 모드 종료"""
        payload = self.validate()

        self.is_saving = True
        self.error = None
        try:
            await client.update_profile(payload)
        except BackendAPIError as e:
            logger.error(f"❌ 프로필 저장 실패 (user_id={auth_context.user_id}): {str(e)}")
            self.error = SAVE_FAILED
            return False
        finally:
            self.is_saving = False

        await auth_context.refresh()
        self.is_editing = False
        logger.info(f"✅ 프로필 저장 완료: user_id={auth_context.user_id}, mbti={payload.mbti}, gender={payload.gender.value}")
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "letters": self.letters,
            "gender": self.gender.value if self.gender else None,
            "is_editing": self.is_editing,
            "is_complete": self.is_complete,
            "error": self.error,
        }
