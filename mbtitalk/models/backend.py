"""백엔드 API 요청/응답 모델"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from .mbti import parse_mbti
from .user import Gender


class AuthStatusResponse(BaseModel):
    """로그인 상태 응답"""
    logged_in: bool = False
    user_id: Optional[str] = None


class MyProfileResponse(BaseModel):
    """현재 사용자 정보 응답"""
    id: str
    email: Optional[str] = None
    mbti: Optional[str] = None
    gender: Optional[Gender] = None

    @field_validator("mbti")
    @classmethod
    def normalize_mbti(cls, value: Optional[str]) -> Optional[str]:
        return parse_mbti(value) if value else None


class MatchRequest(BaseModel):
    """매칭 요청/취소 바디"""
    user_id: str
    mbti: str

    @field_validator("mbti")
    @classmethod
    def validate_mbti(cls, value: str) -> str:
        return parse_mbti(value)


class MatchRequestResponse(BaseModel):
    """매칭 요청 응답"""
    wait_count: int = 0


class BalanceGameListItem(BaseModel):
    """밸런스 게임 목록 항목"""
    id: int
    question: str
    option_left: str
    option_right: str
    left_percentage: float = 0.0
    right_percentage: float = 0.0
    comment_count: int = 0
    week_of: str = ""
    is_votable: bool = False


class BalanceGameListResponse(BaseModel):
    """밸런스 게임 목록 응답"""
    items: List[BalanceGameListItem] = Field(default_factory=list)


class MbtiTestStartResponse(BaseModel):
    """MBTI 검사 시작 응답"""
    session_id: str
    first_question: str


class ChatMessageDTO(BaseModel):
    """대화 기록 항목"""
    role: Literal["user", "assistant"]
    content: str


class AIQuestionRequest(BaseModel):
    """AI 질문 생성 요청"""
    turn: int
    history: List[ChatMessageDTO]
    question_mode: str = "normal"


class GeneratedQuestion(BaseModel):
    text: str


class AIQuestionResponse(BaseModel):
    """AI 질문 생성 응답"""
    questions: List[GeneratedQuestion] = Field(default_factory=list)


class ProfileUpdateRequest(BaseModel):
    """프로필 수정 요청"""
    mbti: str
    gender: Gender

    @field_validator("mbti")
    @classmethod
    def validate_mbti(cls, value: str) -> str:
        return parse_mbti(value)
