"""설정 관리자 테스트"""

from mbtitalk.config_manager import ConfigManager


def test_defaults(monkeypatch, tmp_path):
    for name in ("BACKEND_BASE_URL", "BACKEND_LOGIN_URL", "MBTI_TOTAL_QUESTIONS", "MBTI_HUMAN_QUESTIONS",
                 "MATCH_SIMULATED_PARTNER", "PORT", "AUTH_COOKIE_NAMES"):
        monkeypatch.delenv(name, raising=False)

    config = ConfigManager(env_file=str(tmp_path / "missing.env"))

    assert config.backend.base_url == "http://localhost:8000"
    assert config.backend.login_url == "http://localhost:8000/oauth/login"
    assert config.backend.auth_cookie_names == ["access_token", "refresh_token"]
    assert config.webserver.port == 3000
    assert config.mbti_test.total_questions == 24
    assert config.mbti_test.human_questions == 12
    assert config.matching.simulated_partner == "ENFP"
    assert config.validate_config()["valid"]


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("BACKEND_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("AUTH_COOKIE_NAMES", "session, csrf")
    monkeypatch.setenv("MBTI_TOTAL_QUESTIONS", "5")
    monkeypatch.setenv("MBTI_HUMAN_QUESTIONS", "0")
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.setenv("DEBUG", "false")

    config = ConfigManager(env_file=str(tmp_path / "missing.env"))

    assert config.backend.base_url == "https://api.example.com"
    assert config.backend.login_url == "https://api.example.com/oauth/login"
    assert config.backend.auth_cookie_names == ["session", "csrf"]
    assert config.mbti_test.total_questions == 5
    assert config.is_production()
    assert not config.is_testing()


def test_env_file_is_loaded(monkeypatch, tmp_path):
    monkeypatch.delenv("MATCH_DAILY_FREE_LIMIT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("MATCH_DAILY_FREE_LIMIT=5\n", encoding="utf-8")

    config = ConfigManager(env_file=str(env_file))

    assert config.matching.daily_free_limit == 5


def test_invalid_values_are_reported(monkeypatch, tmp_path):
    monkeypatch.setenv("MATCH_SIMULATED_PARTNER", "ABCD")
    monkeypatch.setenv("MBTI_TOTAL_QUESTIONS", "5")
    monkeypatch.setenv("MBTI_HUMAN_QUESTIONS", "12")

    result = ConfigManager(env_file=str(tmp_path / "missing.env")).validate_config()

    assert not result["valid"]
    assert len(result["issues"]) == 2
