"""
mbtitalk 웹 애플리케이션 진입점
- MBTI 기반 채팅 매칭, 밸런스 게임, AI MBTI 검사
- 인증/데이터는 백엔드 API 서버에 위임
"""

import logging
import os

# 설정 관리자를 가장 먼저 초기화
from mbtitalk.config_manager import config_manager
from mbtitalk.app_factory import create_application

logger = logging.getLogger(__name__)

def main():
    """메인 애플리케이션 진입점"""

    environment = os.getenv('ENVIRONMENT', 'development').lower()

    app = create_application(environment)

    logger.info(f"🚀 mbtitalk 시작 - 환경: {environment}")
    logger.info(f"📊 설정 요약:")
    for key, value in config_manager.get_config_summary().items():
        logger.info(f"   {key}: {value}")

    return app

# FastAPI 애플리케이션 인스턴스 생성
app = main()

# 개발 서버 실행을 위한 진입점
if __name__ == "__main__":
    import uvicorn

    if config_manager.is_production():
        uvicorn.run(
            "main:app",
            host=config_manager.webserver.host,
            port=config_manager.webserver.port,
            workers=config_manager.webserver.workers,
            reload=False,
            log_level="info",
            access_log=True
        )
    else:
        uvicorn.run(
            "main:app",
            host=config_manager.webserver.host,
            port=config_manager.webserver.port,
            reload=config_manager.webserver.reload,
            log_level="debug" if config_manager.system.debug else "info",
            access_log=True
        )
