"""
애플리케이션 생명주기 관리 모듈
- 백엔드 API 세션 관리
- 유휴 사용자 세션 정리 작업
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from mbtitalk.api_client import BackendAPI
from mbtitalk.config_manager import config_manager
from mbtitalk.session import session_manager

logger = logging.getLogger(__name__)

# 앱 전체에서 공유하는 백엔드 전송 계층
backend_api = BackendAPI(
    base_url=config_manager.backend.base_url,
    timeout=config_manager.backend.timeout,
)


class SessionSweeper:
    """유휴 세션 주기적 정리"""

    def __init__(self, interval_minutes: int, max_idle_hours: int):
        self.interval_minutes = interval_minutes
        self.max_idle_hours = max_idle_hours
        self._task: Optional[asyncio.Task] = None

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_minutes * 60)
            try:
                session_manager.cleanup_expired_sessions(self.max_idle_hours)
            except Exception as e:
                logger.error(f"❌ 세션 정리 오류: {str(e)}", exc_info=True)

    def start(self):
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._run())
            logger.info(f"🕐 세션 정리 작업 시작 ({self.interval_minutes}분 주기, 유휴 {self.max_idle_hours}시간)")

    async def stop(self):
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("⏹️ 세션 정리 작업 중지")
        self._task = None


class ApplicationLifecycle:
    """애플리케이션 생명주기 총괄 관리"""

    def __init__(self):
        self.sweeper = SessionSweeper(
            interval_minutes=config_manager.session.sweep_minutes,
            max_idle_hours=config_manager.session.idle_hours,
        )

    async def startup(self):
        """애플리케이션 시작 시 초기화 작업"""
        logger.info("🚀 mbtitalk 웹 시작")
        logger.info(f"🌐 백엔드: {config_manager.backend.base_url}")
        self.sweeper.start()

    async def shutdown(self):
        """애플리케이션 종료 시 정리 작업"""
        logger.info("🛑 mbtitalk 웹 종료")
        await self.sweeper.stop()
        session_manager.cleanup_all()
        await backend_api.close()


# 전역 인스턴스
app_lifecycle = ApplicationLifecycle()


@asynccontextmanager
async def lifespan_manager(app):
    """FastAPI 애플리케이션 생명주기 관리"""
    try:
        await app_lifecycle.startup()
        yield
    except Exception as e:
        logger.error(f"❌ 시스템 시작 중 오류: {str(e)}")
        raise
    finally:
        await app_lifecycle.shutdown()
