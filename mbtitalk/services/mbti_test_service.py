"""
AI MBTI 검사 진행
- 채팅형 질문/답변 턴 루프
- 1~12번은 사람이 만든 질문, 13~24번은 AI 질문 (설정 가능)
- 마지막 턴 이후 결과 분석 (채점 API 연동 전까지 지연 시뮬레이션)

한 턴은 전부 성공하거나 전부 취소된다. 질문 생성이 실패하면 방금 추가한
사용자 답변을 되돌리고 질문 번호도 그대로 둔다.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from mbtitalk.api_client import BackendAPIError
from mbtitalk.config_manager import config_manager
from mbtitalk.models.backend import AIQuestionRequest, ChatMessageDTO
from mbtitalk.models.mbti import MBTI_AXES, split_letters

logger = logging.getLogger(__name__)

LOGIN_REQUIRED = "로그인이 필요합니다."
START_FAILED = "MBTI 테스트 시작 중 오류가 발생했습니다."
QUESTION_FAILED = "질문 생성 중 오류가 발생했습니다."
COMPLETED_MESSAGE = "테스트가 완료되었습니다! 결과를 분석 중입니다..."

QUESTION_MODE = "normal"


class MbtiTestError(Exception):
    """검사 진행 오류"""


class MbtiTestNotStartedError(MbtiTestError):
    """검사 시작 전 답변"""


class MbtiTestCompletedError(MbtiTestError):
    """완료된 검사에 답변"""


class EmptyAnswerError(MbtiTestError):
    """빈 답변"""


class TurnInProgressError(MbtiTestError):
    """이전 턴 처리 중"""


@dataclass
class TranscriptMessage:
    role: str  # 'user' | 'assistant'
    content: str

    def to_dto(self) -> ChatMessageDTO:
        return ChatMessageDTO(role=self.role, content=self.content)


# 결과 화면용 축별 우세 비율 (결과 글자 쪽에 배정)
SIMULATED_AXIS_SHARES = (68, 59, 72, 65)


def format_result_message(mbti: str) -> str:
    """결과 분석 메시지"""
    lines = [f"분석이 완료되었습니다! 당신의 MBTI는 {mbti}입니다.", "", "각 차원별 결과:"]
    for (left, right), letter, share in zip(MBTI_AXES, split_letters(mbti), SIMULATED_AXIS_SHARES):
        left_score = share if letter == left else 100 - share
        lines.append(f"- {left} {left_score}% / {right} {100 - left_score}%")
    return "\n".join(lines)


class ResultNotifier:
    """검사 결과 전달 (지연 후 고정 결과)"""

    def __init__(self, delay: float, result: str):
        self.delay = delay
        self.result = result

    @classmethod
    def from_config(cls) -> "ResultNotifier":
        return cls(
            delay=config_manager.mbti_test.result_delay,
            result=config_manager.mbti_test.simulated_result,
        )

    def schedule(self, session: "MbtiTestSession") -> asyncio.Task:
        async def deliver():
            await asyncio.sleep(self.delay)
            session.set_result(self.result)

        return asyncio.create_task(deliver())


class MbtiTestSession:
    """사용자별 MBTI 검사 세션"""

    def __init__(
        self,
        total_questions: Optional[int] = None,
        human_questions: Optional[int] = None,
        notifier: Optional[ResultNotifier] = None,
    ):
        self.total_questions = total_questions or config_manager.mbti_test.total_questions
        self.human_questions = (
            human_questions if human_questions is not None else config_manager.mbti_test.human_questions
        )
        self.notifier = notifier or ResultNotifier.from_config()

        self.session_id: str = ""
        self.messages: List[TranscriptMessage] = []
        self.question_number = 1
        self.is_started = False
        self.is_completed = False
        self.is_loading = False
        self.mbti_result: Optional[str] = None
        self.error: Optional[str] = None

        self._lock = asyncio.Lock()
        self._result_task: Optional[asyncio.Task] = None

    # === 진행 상태 ===

    @property
    def phase(self) -> str:
        """현재 단계 (human: 사람 질문, ai: AI 질문)"""
        return "human" if self.question_number <= self.human_questions else "ai"

    @property
    def progress_percent(self) -> float:
        return min(self.question_number / self.total_questions * 100, 100)

    @property
    def phase_text(self) -> str:
        if self.is_completed:
            return "테스트 완료!"
        return f"진행 중: {self.question_number}/{self.total_questions}"

    @property
    def pending_result(self) -> Optional[asyncio.Task]:
        return self._result_task

    # === 동작 ===

    async def start(self, client, user_id: Optional[str]) -> bool:
        """검사 시작 - 첫 질문 수신"""
        if not user_id:
            self.error = LOGIN_REQUIRED
            return False

        self.is_loading = True
        self.error = None
        try:
            response = await client.start_mbti_test(user_id)
        except BackendAPIError as e:
            logger.error(f"❌ MBTI 검사 시작 실패 (user_id={user_id}): {str(e)}")
            self.error = START_FAILED
            return False
        finally:
            self.is_loading = False

        self.session_id = response.session_id
        self.messages = [TranscriptMessage("assistant", response.first_question)]
        self.question_number = 1
        self.is_started = True
        logger.info(f"🧠 MBTI 검사 시작: user_id={user_id}, session_id={self.session_id}")
        return True

    async def submit_answer(self, client, answer: str) -> bool:
        """답변 제출 - 성공 시 사용자/질문 메시지 1개씩 추가, 질문 번호 +1"""
        if not self.is_started:
            raise MbtiTestNotStartedError("검사를 먼저 시작해주세요")
        if self.is_completed:
            raise MbtiTestCompletedError("테스트가 완료되었습니다")
        answer = (answer or "").strip()
        if not answer:
            raise EmptyAnswerError("답변을 입력해주세요")
        if self._lock.locked():
            raise TurnInProgressError("이전 답변을 처리 중입니다")

        async with self._lock:
            self.messages.append(TranscriptMessage("user", answer))
            self.is_loading = True
            self.error = None

            try:
                request = AIQuestionRequest(
                    turn=self.question_number,
                    history=[message.to_dto() for message in self.messages],
                    question_mode=QUESTION_MODE,
                )
                response = await client.generate_ai_question(self.session_id, request)

                next_question_number = self.question_number + 1
                is_last_turn = next_question_number > self.total_questions
                if not is_last_turn and not response.questions:
                    raise BackendAPIError("다음 질문이 비어 있음")
            except BackendAPIError as e:
                logger.error(f"❌ 질문 생성 실패 (session_id={self.session_id}, turn={self.question_number}): {str(e)}")
                self.messages.pop()
                self.error = QUESTION_FAILED
                return False
            finally:
                self.is_loading = False

            self.question_number = next_question_number
            if is_last_turn:
                self.is_completed = True
                self.messages.append(TranscriptMessage("assistant", COMPLETED_MESSAGE))
                self._result_task = self.notifier.schedule(self)
                logger.info(f"🏁 MBTI 검사 완료: session_id={self.session_id}")
            else:
                self.messages.append(TranscriptMessage("assistant", response.questions[0].text))
            return True

    def set_result(self, mbti: str):
        """분석 결과 반영"""
        self.mbti_result = mbti
        self.messages.append(TranscriptMessage("assistant", format_result_message(mbti)))
        self._result_task = None
        logger.info(f"📊 MBTI 검사 결과: session_id={self.session_id}, 결과={mbti}")

    def cancel_pending_result(self):
        task = self._result_task
        self._result_task = None
        if task and not task.done():
            task.cancel()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "is_started": self.is_started,
            "is_completed": self.is_completed,
            "is_loading": self.is_loading,
            "question_number": self.question_number,
            "total_questions": self.total_questions,
            "phase": self.phase,
            "phase_text": self.phase_text,
            "progress": self.progress_percent,
            "messages": [{"role": m.role, "content": m.content} for m in self.messages],
            "mbti_result": self.mbti_result,
            "error": self.error,
        }
