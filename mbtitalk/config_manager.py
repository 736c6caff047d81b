"""
설정 관리 시스템
- 환경별 설정 관리 (개발/운영/테스트)
- 백엔드 연동 및 시뮬레이션 설정
- 설정 검증 및 요약
"""

import os
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    file_path: str = 'mbtitalk.log'
    max_bytes: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5
    console_enabled: bool = True

@dataclass
class BackendConfig:
    """백엔드 API 설정"""
    base_url: str = "http://localhost:8000"
    timeout: int = 10
    login_url: str = "http://localhost:8000/oauth/login"
    auth_cookie_names: list = field(default_factory=lambda: ["access_token", "refresh_token"])

@dataclass
class WebServerConfig:
    """웹 서버 설정"""
    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    workers: int = 1
    cors_enabled: bool = True
    cors_origins: list = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

@dataclass
class MatchingConfig:
    """매칭 설정"""
    # 매칭 결과 푸시/폴링 계약이 없어 지연 후 매칭 성공으로 처리
    simulation_delay: float = 5.0  # 초
    simulated_partner: str = "ENFP"
    daily_free_limit: int = 3

@dataclass
class MbtiTestConfig:
    """MBTI 검사 설정"""
    total_questions: int = 24
    human_questions: int = 12  # 1-12번: 사람이 만든 질문, 이후: AI 질문
    result_delay: float = 2.0  # 초
    simulated_result: str = "INFP"

@dataclass
class SessionConfig:
    """사용자 세션 설정"""
    idle_hours: int = 24
    sweep_minutes: int = 30

@dataclass
class SystemConfig:
    """시스템 설정"""
    environment: str = "development"  # development, production, testing
    debug: bool = True

class ConfigManager:
    """설정 관리자"""

    def __init__(self, env_file: Optional[str] = None):
        self._env_file = env_file or '.env'
        self._load_environment()
        self._initialize_configs()

    def _load_environment(self):
        """환경 변수 로드"""
        if Path(self._env_file).exists():
            load_dotenv(self._env_file)
            logger.info(f"✅ 환경 설정 로드 완료: {self._env_file}")
        else:
            logger.warning(f"⚠️ 환경 파일 없음: {self._env_file} (기본값 사용)")

    def _initialize_configs(self):
        """설정 초기화"""
        environment = os.getenv('ENVIRONMENT', 'development').lower()

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            file_path=os.getenv('LOG_FILE', 'mbtitalk.log'),
            console_enabled=os.getenv('LOG_CONSOLE', 'true').lower() == 'true'
        )

        base_url = os.getenv('BACKEND_BASE_URL', 'http://localhost:8000').rstrip('/')
        cookie_names_str = os.getenv('AUTH_COOKIE_NAMES', 'access_token,refresh_token')
        self.backend = BackendConfig(
            base_url=base_url,
            timeout=int(os.getenv('BACKEND_TIMEOUT', '10')),
            login_url=os.getenv('BACKEND_LOGIN_URL', f"{base_url}/oauth/login"),
            auth_cookie_names=[name.strip() for name in cookie_names_str.split(',') if name.strip()]
        )

        cors_origins_str = os.getenv('CORS_ORIGINS', '')
        self.webserver = WebServerConfig(
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '3000')),
            reload=os.getenv('RELOAD', 'false').lower() == 'true',
            workers=int(os.getenv('WORKERS', '1'))
        )
        if cors_origins_str:
            self.webserver.cors_origins = [origin.strip() for origin in cors_origins_str.split(',')]

        self.matching = MatchingConfig(
            simulation_delay=float(os.getenv('MATCH_SIMULATION_DELAY', '5.0')),
            simulated_partner=os.getenv('MATCH_SIMULATED_PARTNER', 'ENFP').upper(),
            daily_free_limit=int(os.getenv('MATCH_DAILY_FREE_LIMIT', '3'))
        )

        self.mbti_test = MbtiTestConfig(
            total_questions=int(os.getenv('MBTI_TOTAL_QUESTIONS', '24')),
            human_questions=int(os.getenv('MBTI_HUMAN_QUESTIONS', '12')),
            result_delay=float(os.getenv('MBTI_RESULT_DELAY', '2.0')),
            simulated_result=os.getenv('MBTI_SIMULATED_RESULT', 'INFP').upper()
        )

        self.session = SessionConfig(
            idle_hours=int(os.getenv('SESSION_IDLE_HOURS', '24')),
            sweep_minutes=int(os.getenv('SESSION_SWEEP_MINUTES', '30'))
        )

        self.system = SystemConfig(
            environment=environment,
            debug=os.getenv('DEBUG', 'true').lower() == 'true'
        )

        logger.info(f"⚙️ 설정 초기화 완료 - 환경: {environment}, 백엔드: {self.backend.base_url}")

    def get_config_summary(self) -> Dict[str, Any]:
        """설정 요약 정보 반환"""
        return {
            "environment": self.system.environment,
            "debug": self.system.debug,
            "webserver_port": self.webserver.port,
            "backend_base_url": self.backend.base_url,
            "matching": {
                "simulation_delay": self.matching.simulation_delay,
                "simulated_partner": self.matching.simulated_partner
            },
            "mbti_test": {
                "total_questions": self.mbti_test.total_questions,
                "human_questions": self.mbti_test.human_questions,
                "result_delay": self.mbti_test.result_delay
            }
        }

    def validate_config(self) -> Dict[str, Any]:
        """설정 유효성 검증"""
        from mbtitalk.models.mbti import is_valid_mbti

        issues = []
        warnings = []

        if not self.backend.base_url:
            issues.append("백엔드 주소가 설정되지 않음")

        if self.backend.timeout <= 0:
            issues.append(f"백엔드 타임아웃이 유효하지 않음: {self.backend.timeout}")

        if self.mbti_test.total_questions <= 0:
            issues.append(f"전체 질문 수가 유효하지 않음: {self.mbti_test.total_questions}")

        if not 0 <= self.mbti_test.human_questions <= self.mbti_test.total_questions:
            issues.append(f"사람 질문 수가 유효하지 않음: {self.mbti_test.human_questions}")

        if not is_valid_mbti(self.matching.simulated_partner):
            issues.append(f"시뮬레이션 매칭 상대 MBTI가 유효하지 않음: {self.matching.simulated_partner}")

        if not is_valid_mbti(self.mbti_test.simulated_result):
            issues.append(f"시뮬레이션 검사 결과 MBTI가 유효하지 않음: {self.mbti_test.simulated_result}")

        if self.system.environment == 'production' and self.system.debug:
            warnings.append("운영 환경에서 디버그 모드가 활성화됨")

        if self.system.environment == 'production':
            warnings.append("매칭 결과/검사 결과가 시뮬레이션으로 처리됨")

        return {
            "valid": len(issues) == 0,
            "issues": issues,
            "warnings": warnings
        }

    def is_production(self) -> bool:
        """운영 환경 여부 확인"""
        return self.system.environment == 'production'

    def is_testing(self) -> bool:
        """테스트 환경 여부 확인"""
        return self.system.environment == 'testing'

# 전역 설정 관리자 인스턴스
config_manager = ConfigManager()
