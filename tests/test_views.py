"""HTML 화면 테스트"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from conftest import make_backend_client, make_balance_game
from mbtitalk.api_client import BackendAPIError
from mbtitalk.services.balance_game_service import LOAD_FAILED
from mbtitalk.services.mbti_test_service import LOGIN_REQUIRED


@pytest.fixture
def open_client(app_factory):
    """백엔드 클라이언트를 받아 TestClient를 여는 헬퍼"""
    clients = []

    def opener(backend_client):
        client = TestClient(app_factory(backend_client))
        client.__enter__()
        clients.append(client)
        return client

    yield opener

    for client in clients:
        client.__exit__(None, None, None)


class TestProtectedPages:
    @pytest.mark.parametrize("path", ["/chat", "/matching", "/chat/room_1", "/profile", "/mypage"])
    def test_anonymous_redirects_to_login(self, open_client, path):
        client = open_client(make_backend_client(logged_in=False))

        response = client.get(path, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"].startswith("/login?next=")

    @pytest.mark.parametrize("path", ["/chat", "/matching", "/chat/room_1"])
    def test_missing_mbti_redirects_to_profile(self, open_client, path):
        client = open_client(make_backend_client(mbti=None))

        response = client.get(path, follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/profile"

    def test_profile_page_open_without_mbti(self, open_client):
        client = open_client(make_backend_client(mbti=None, gender=None))

        response = client.get("/profile")

        assert response.status_code == 200
        assert "MBTI를 먼저 설정해주세요" in response.text
        assert "????" in response.text


class TestChatPages:
    def test_chat_list_with_idle_matching(self, test_client):
        response = test_client.get("/chat")

        assert response.status_code == 200
        assert "매칭 시작하기" in response.text
        assert "무료 사용자는 하루 3회까지 매칭할 수 있습니다" in response.text
        assert "안녕하세요! 반가워요" in response.text
        assert "오늘 날씨가 좋네요" in response.text

    def test_matching_panel_after_start(self, test_client):
        test_client.post("/api/matching/start")

        response = test_client.get("/matching/panel")

        assert "매칭 중... 대기 인원: 3명" in response.text
        assert "매칭 취소" in response.text

    def test_chat_room_page(self, test_client):
        response = test_client.get("/chat/room_2")

        assert response.status_code == 200
        assert "INTJ님과의 대화" in response.text

    def test_unknown_chat_room(self, test_client):
        response = test_client.get("/chat/room_999")
        assert response.status_code == 404


class TestBalancePages:
    def test_list(self, open_client):
        client = open_client(make_backend_client(balance_games=[
            make_balance_game(1),
            make_balance_game(2, question="탕수육 부먹 vs 찍먹", is_votable=False, left_percentage=10.0, right_percentage=90.0),
        ]))

        response = client.get("/community/balance")

        assert response.status_code == 200
        assert "평생 여름 vs 평생 겨울" in response.text
        assert "탕수육 부먹 vs 찍먹" in response.text
        assert "투표 가능" in response.text
        assert "마감됨" in response.text
        assert "62%" in response.text
        assert ">10%<" not in response.text

    def test_empty_list(self, test_client):
        response = test_client.get("/community/balance")
        assert "아직 밸런스 게임이 없습니다." in response.text

    def test_list_error(self, open_client):
        backend = make_backend_client()
        backend.get_balance_game_list = AsyncMock(side_effect=BackendAPIError("down", 503))

        response = open_client(backend).get("/community/balance")

        assert LOAD_FAILED in response.text

    def test_detail_and_missing(self, open_client):
        client = open_client(make_backend_client(balance_games=[make_balance_game(3)]))

        assert client.get("/community/balance/3").status_code == 200
        assert client.get("/community/balance/4").status_code == 404

    def test_question_is_escaped(self, open_client):
        client = open_client(make_backend_client(balance_games=[
            make_balance_game(1, question="<script>alert(1)</script>"),
        ]))

        response = client.get("/community/balance")

        assert "<script>alert(1)</script>" not in response.text
        assert "&lt;script&gt;" in response.text


class TestLandingPage:
    def test_vote_buttons_follow_login_state(self, open_client):
        client = open_client(make_backend_client(logged_in=False, balance_games=[make_balance_game(5)]))

        response = client.get("/")

        assert response.status_code == 200
        assert "평생 여름 vs 평생 겨울" in response.text
        assert 'href="/login"' in response.text
        assert "무료로 검사하기" in response.text
        assert "INTJ" in response.text

    def test_vote_buttons_for_ready_user(self, open_client):
        client = open_client(make_backend_client(balance_games=[make_balance_game(5)]))

        response = client.get("/")

        assert 'href="/community/balance/5"' in response.text

    def test_no_game(self, test_client):
        response = test_client.get("/")
        assert "현재 진행 중인 게임이 없습니다" in response.text


class TestAccountPages:
    def test_login_page_for_anonymous(self, open_client):
        client = open_client(make_backend_client(logged_in=False))

        response = client.get("/login?next=/chat")

        assert response.status_code == 200
        assert "oauth/login?next=%2Fchat" in response.text

    def test_login_redirects_logged_in_user(self, test_client):
        response = test_client.get("/login?next=/mypage", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == "/mypage"

    def test_login_ignores_external_next(self, test_client):
        response = test_client.get("/login?next=//evil.example.com", follow_redirects=False)
        assert response.headers["location"] == "/"

    def test_mypage(self, test_client):
        response = test_client.get("/mypage")

        assert response.status_code == 200
        assert "tester@example.com" in response.text
        assert "INFJ" in response.text
        assert "여성" in response.text
        assert "MBTI 다시 검사하기" in response.text

    def test_mbti_test_page_for_anonymous(self, open_client):
        client = open_client(make_backend_client(logged_in=False))

        response = client.get("/mbti-test")

        assert response.status_code == 200
        assert LOGIN_REQUIRED in response.text
        assert "AI MBTI 검사" in response.text

    def test_mbti_test_page(self, test_client):
        response = test_client.get("/mbti-test")

        assert "검사 시작하기" in response.text
        assert "총 24개 질문" in response.text


def test_health(test_client):
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unknown_page_renders_html(test_client):
    response = test_client.get("/no-such-page")

    assert response.status_code == 404
    assert "페이지를 찾을 수 없습니다." in response.text


def test_unknown_api_returns_json(test_client):
    response = test_client.get("/api/no-such-endpoint")

    assert response.status_code == 404
    assert response.json() == {"detail": "Resource not found"}
