"""MBTI 유형 정의 및 검증"""

from itertools import product
from typing import List, Optional, Tuple

# 축 순서: E/I, S/N, T/F, J/P
MBTI_AXES: Tuple[Tuple[str, str], ...] = (
    ("E", "I"),
    ("S", "N"),
    ("T", "F"),
    ("J", "P"),
)

ALL_MBTI_TYPES: List[str] = ["".join(letters) for letters in product(*MBTI_AXES)]


class InvalidMbtiError(ValueError):
    """유효하지 않은 MBTI 코드"""


def is_valid_mbti(code: Optional[str]) -> bool:
    """4축에서 한 글자씩 정확히 4글자인지 확인"""
    if not code or len(code) != 4:
        return False
    return all(letter in axis for letter, axis in zip(code.upper(), MBTI_AXES))


def parse_mbti(code: Optional[str]) -> str:
    """MBTI 코드 정규화 (대문자) - 유효하지 않으면 InvalidMbtiError"""
    if not is_valid_mbti(code):
        raise InvalidMbtiError(f"유효하지 않은 MBTI: {code!r}")
    return code.upper()


def split_letters(code: str) -> List[str]:
    """MBTI 코드를 축별 글자 리스트로 분리"""
    return list(parse_mbti(code))

