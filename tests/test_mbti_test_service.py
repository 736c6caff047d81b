"""AI MBTI 검사 세션 테스트"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from conftest import make_backend_client
from mbtitalk.api_client import BackendAPIError
from mbtitalk.models.backend import AIQuestionResponse, GeneratedQuestion
from mbtitalk.services.mbti_test_service import (
    COMPLETED_MESSAGE,
    LOGIN_REQUIRED,
    QUESTION_FAILED,
    START_FAILED,
    EmptyAnswerError,
    MbtiTestCompletedError,
    MbtiTestNotStartedError,
    MbtiTestSession,
    ResultNotifier,
    TurnInProgressError,
    format_result_message,
)


def make_session(total: int = 24, human: int = 12, delay: float = 0) -> MbtiTestSession:
    return MbtiTestSession(
        total_questions=total,
        human_questions=human,
        notifier=ResultNotifier(delay=delay, result="INFP"),
    )


class TestStart:
    @pytest.mark.asyncio
    async def test_start_sets_first_question(self):
        client = make_backend_client()
        session = make_session()

        assert await session.start(client, "user-1")

        assert session.is_started
        assert session.session_id == "session-1"
        assert session.question_number == 1
        assert [m.role for m in session.messages] == ["assistant"]
        assert session.messages[0].content == "최근 주말을 어떻게 보냈나요?"
        client.start_mbti_test.assert_awaited_once_with("user-1")

    @pytest.mark.asyncio
    async def test_start_without_login(self):
        """비로그인 상태에서는 백엔드 호출 없이 로그인 필요 메시지를 설정합니다."""
        client = make_backend_client()
        session = make_session()

        assert not await session.start(client, None)

        assert session.error == LOGIN_REQUIRED
        assert not session.is_started
        client.start_mbti_test.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_start_failure(self):
        client = make_backend_client()
        client.start_mbti_test = AsyncMock(side_effect=BackendAPIError("down"))
        session = make_session()

        assert not await session.start(client, "user-1")

        assert session.error == START_FAILED
        assert not session.is_started
        assert not session.is_loading


class TestSubmitAnswer:
    @pytest.mark.asyncio
    async def test_turn_appends_answer_and_question(self):
        """성공한 턴은 사용자 답변과 다음 질문을 하나씩 추가하고 질문 번호를 올립니다."""
        client = make_backend_client()
        session = make_session()
        await session.start(client, "user-1")

        assert await session.submit_answer(client, "  친구들과 캠핑 갔어요  ")

        assert session.question_number == 2
        assert [(m.role, m.content) for m in session.messages[1:]] == [
            ("user", "친구들과 캠핑 갔어요"),
            ("assistant", "다음 질문입니다"),
        ]

        session_id, request = client.generate_ai_question.await_args.args
        assert session_id == "session-1"
        assert request.turn == 1
        assert request.question_mode == "normal"
        assert [m.role for m in request.history] == ["assistant", "user"]

    @pytest.mark.asyncio
    async def test_failed_turn_rolls_back(self):
        """질문 생성이 실패하면 답변을 되돌리고 질문 번호를 유지합니다."""
        client = make_backend_client()
        session = make_session()
        await session.start(client, "user-1")
        client.generate_ai_question = AsyncMock(side_effect=BackendAPIError("timeout"))

        assert not await session.submit_answer(client, "답변")

        assert session.question_number == 1
        assert len(session.messages) == 1
        assert session.error == QUESTION_FAILED
        assert not session.is_loading

    @pytest.mark.asyncio
    async def test_empty_questions_counts_as_failure(self):
        client = make_backend_client()
        session = make_session()
        await session.start(client, "user-1")
        client.generate_ai_question = AsyncMock(return_value=AIQuestionResponse(questions=[]))

        assert not await session.submit_answer(client, "답변")

        assert session.question_number == 1
        assert len(session.messages) == 1
        assert session.error == QUESTION_FAILED

    @pytest.mark.asyncio
    async def test_rejects_before_start(self):
        client = make_backend_client()
        session = make_session()

        with pytest.raises(MbtiTestNotStartedError):
            await session.submit_answer(client, "답변")
        client.generate_ai_question.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_rejects_blank_answer(self):
        client = make_backend_client()
        session = make_session()
        await session.start(client, "user-1")

        with pytest.raises(EmptyAnswerError):
            await session.submit_answer(client, "   ")
        assert len(session.messages) == 1

    @pytest.mark.asyncio
    async def test_rejects_concurrent_turn(self):
        """이전 턴이 처리 중이면 새 답변을 거부합니다."""
        client = make_backend_client()
        session = make_session()
        await session.start(client, "user-1")

        release = asyncio.Event()

        async def slow_question(*args, **kwargs):
            await release.wait()
            return AIQuestionResponse(questions=[GeneratedQuestion(text="다음 질문입니다")])

        client.generate_ai_question = AsyncMock(side_effect=slow_question)
        first_turn = asyncio.create_task(session.submit_answer(client, "첫 답변"))
        await asyncio.sleep(0)

        with pytest.raises(TurnInProgressError):
            await session.submit_answer(client, "두 번째 답변")

        release.set()
        assert await first_turn
        assert session.question_number == 2
        assert len(session.messages) == 3


class TestCompletion:
    @pytest.mark.asyncio
    async def test_last_turn_completes_and_delivers_result(self):
        """마지막 턴 이후 완료 메시지를 추가하고 결과를 전달합니다."""
        client = make_backend_client()
        session = make_session(total=3, human=1)
        await session.start(client, "user-1")

        assert session.phase == "human"
        await session.submit_answer(client, "답변 1")
        assert session.phase == "ai"
        await session.submit_answer(client, "답변 2")
        await session.submit_answer(client, "답변 3")

        assert session.is_completed
        assert session.phase_text == "테스트 완료!"
        assert session.progress_percent == 100
        assert session.messages[-1].content == COMPLETED_MESSAGE

        await session.pending_result

        assert session.mbti_result == "INFP"
        assert session.messages[-1].content == format_result_message("INFP")

        with pytest.raises(MbtiTestCompletedError):
            await session.submit_answer(client, "더 답변")

    @pytest.mark.asyncio
    async def test_last_turn_ignores_empty_questions(self):
        client = make_backend_client()
        session = make_session(total=1, human=1, delay=60)
        await session.start(client, "user-1")
        client.generate_ai_question = AsyncMock(return_value=AIQuestionResponse(questions=[]))

        assert await session.submit_answer(client, "마지막 답변")

        assert session.is_completed
        pending = session.pending_result
        session.cancel_pending_result()
        with pytest.raises(asyncio.CancelledError):
            await pending
        assert session.mbti_result is None

    def test_progress_text(self):
        session = make_session()
        assert session.phase_text == "진행 중: 1/24"
        assert session.progress_percent == pytest.approx(100 / 24)


def test_result_message_lists_axes():
    message = format_result_message("INFP")
    assert "당신의 MBTI는 INFP입니다" in message
    assert "- E 32% / I 68%" in message
    assert "- J 35% / P 65%" in message


def test_result_message_follows_result_letters():
    message = format_result_message("ESTJ")
    assert "- E 68% / I 32%" in message
    assert "- S 59% / N 41%" in message
    assert "- T 72% / F 28%" in message
    assert "- J 65% / P 35%" in message
