"""Pytest fixtures for mbtitalk tests."""

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# 테스트 환경: 파일 로그 비활성화
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["LOG_FILE"] = ""

# 프로젝트 루트를 PYTHONPATH에 추가
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from mbtitalk.models.backend import (  # noqa: E402
    AIQuestionResponse,
    AuthStatusResponse,
    BalanceGameListItem,
    BalanceGameListResponse,
    GeneratedQuestion,
    MatchRequestResponse,
    MbtiTestStartResponse,
    MyProfileResponse,
)
from mbtitalk.models.user import Gender  # noqa: E402


def make_backend_client(
    logged_in: bool = True,
    user_id: str = "user-1",
    email: str = "tester@example.com",
    mbti: str = "INFJ",
    gender: Gender = Gender.FEMALE,
    balance_games=None,
):
    """백엔드 호출을 모두 AsyncMock으로 대체한 UserAPIClient"""
    client = MagicMock()
    client.check_auth_status = AsyncMock(
        return_value=AuthStatusResponse(logged_in=logged_in, user_id=user_id if logged_in else None)
    )
    client.get_my_profile = AsyncMock(
        return_value=MyProfileResponse(id=user_id, email=email, mbti=mbti, gender=gender)
    )
    client.update_profile = AsyncMock(return_value=None)
    client.request_match = AsyncMock(return_value=MatchRequestResponse(wait_count=3))
    client.cancel_match = AsyncMock(return_value=None)
    client.get_balance_game_list = AsyncMock(
        return_value=BalanceGameListResponse(items=balance_games or [])
    )
    client.start_mbti_test = AsyncMock(
        return_value=MbtiTestStartResponse(session_id="session-1", first_question="최근 주말을 어떻게 보냈나요?")
    )
    client.generate_ai_question = AsyncMock(
        return_value=AIQuestionResponse(questions=[GeneratedQuestion(text="다음 질문입니다")])
    )
    return client


def make_balance_game(game_id: int = 1, **overrides) -> BalanceGameListItem:
    data = {
        "id": game_id,
        "question": "평생 여름 vs 평생 겨울",
        "option_left": "여름",
        "option_right": "겨울",
        "left_percentage": 62.0,
        "right_percentage": 38.0,
        "comment_count": 12,
        "week_of": "2025년 1월 2주차",
        "is_votable": True,
    }
    data.update(overrides)
    return BalanceGameListItem(**data)


@pytest.fixture
def backend_client():
    """로그인 + MBTI 설정 완료 사용자"""
    return make_backend_client()


@pytest.fixture
def anonymous_client():
    """비로그인 사용자"""
    return make_backend_client(logged_in=False)


@pytest.fixture
def app_factory():
    """백엔드 클라이언트를 주입한 테스트 애플리케이션 생성"""
    from mbtitalk.app_factory import create_application
    from mbtitalk.auth.middleware import get_api_client

    def factory(client):
        app = create_application("testing")
        app.dependency_overrides[get_api_client] = lambda: client
        return app

    return factory


@pytest.fixture
def test_client(app_factory, backend_client):
    from fastapi.testclient import TestClient

    with TestClient(app_factory(backend_client)) as client:
        yield client
