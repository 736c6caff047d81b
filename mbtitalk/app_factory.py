"""
FastAPI 애플리케이션 팩토리
- 로깅/미들웨어/예외 처리/라우터 구성
- 환경(development, production, testing)별 앱 생성
"""

import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from mbtitalk import __version__
from mbtitalk.api_client import BackendAPIError
from mbtitalk.app_lifecycle import lifespan_manager
from mbtitalk.config_manager import config_manager
from mbtitalk.router_registry import router_registry
from mbtitalk.session import session_manager

logger = logging.getLogger(__name__)

# 요청마다 로그를 남기는 외부 라이브러리
NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "uvicorn.access")


def setup_logging():
    """루트 로거 구성 (파일 + 콘솔)"""
    log_config = config_manager.logging
    handlers = []

    if log_config.file_path:
        handlers.append(RotatingFileHandler(
            log_config.file_path,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
            encoding="utf-8"
        ))

    if log_config.console_enabled:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, log_config.level, logging.INFO),
        format=log_config.format,
        handlers=handlers,
        force=True
    )

    if not config_manager.system.debug:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def setup_middleware(app: FastAPI):
    """CORS (페이지 스크립트가 쿠키를 실어 호출)"""
    if not config_manager.webserver.cors_enabled:
        return

    origins = config_manager.webserver.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT"],
        allow_headers=["*"],
    )
    logger.info(f"✅ CORS 허용 출처 {len(origins)}개 등록")


def _is_api_request(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _error_page(status_code: int, message: str) -> HTMLResponse:
    from mbtitalk.views.layout import render_page

    body = f"""
    <div class="card"><div class="card-body center">
        <p style="font-size:40px; margin-bottom:16px;">😵</p>
        <p class="muted" style="margin-bottom:16px;">{message}</p>
        <a class="btn" href="/">홈으로</a>
    </div></div>
    """
    return HTMLResponse(render_page("오류", body), status_code=status_code)


def setup_exception_handlers(app: FastAPI):
    """API 경로는 JSON, 페이지 경로는 HTML 오류 화면"""

    @app.exception_handler(BackendAPIError)
    async def backend_error_handler(request: Request, exc: BackendAPIError):
        # 워크플로우에서 처리되지 않은 백엔드 오류
        logger.error(f"❌ 백엔드 오류 ({request.method} {request.url.path}): {str(exc)}")
        if _is_api_request(request):
            return JSONResponse(status_code=502, content={"success": False, "message": "백엔드 서버 응답 오류"})
        return _error_page(502, "잠시 후 다시 시도해주세요.")

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception):
        if _is_api_request(request):
            return JSONResponse(status_code=404, content={"detail": "Resource not found"})
        return _error_page(404, "페이지를 찾을 수 없습니다.")

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"❌ 서버 내부 오류 ({request.method} {request.url.path}): {str(exc)}", exc_info=True)
        if _is_api_request(request):
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})
        return _error_page(500, "일시적인 오류가 발생했습니다.")


def add_system_endpoints(app: FastAPI):
    """헬스 체크 / 설정 요약"""

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "environment": config_manager.system.environment,
            "version": __version__,
            "backend": config_manager.backend.base_url,
            "active_sessions": session_manager.get_active_sessions_count()
        }

    @app.get("/config")
    async def get_config_summary():
        return config_manager.get_config_summary()


def create_application(environment: str = None) -> FastAPI:
    """
    FastAPI 애플리케이션 생성

    Args:
        environment: development, production, testing 중 하나 (없으면 ENVIRONMENT 값)

    Returns:
        FastAPI: 라우터와 생명주기가 연결된 애플리케이션

    Raises:
        ValueError: 설정 검증 실패
    """
    if environment:
        config_manager.system.environment = environment
        config_manager.system.debug = environment != "production"

    setup_logging()
    logger.info(f"🚀 mbtitalk 앱 구성 시작 - 환경: {config_manager.system.environment}")

    validation = config_manager.validate_config()
    if not validation["valid"]:
        logger.error(f"❌ 설정 검증 실패: {validation['issues']}")
        raise ValueError(f"Invalid configuration: {validation['issues']}")
    for warning in validation["warnings"]:
        logger.warning(f"⚠️ 설정 경고: {warning}")

    app = FastAPI(
        title="mbtitalk",
        description="MBTI 기반 채팅 매칭 · 밸런스 게임 · AI MBTI 검사",
        version=__version__,
        debug=config_manager.system.debug,
        lifespan=lifespan_manager
    )

    setup_middleware(app)
    setup_exception_handlers(app)

    results = router_registry.register_all_routers(app)
    add_system_endpoints(app)

    failed = [name for group in results.values() for name, ok in group.items() if not ok]
    if failed:
        logger.warning(f"⚠️ 등록되지 않은 라우터: {', '.join(failed)}")
    logger.info("✅ mbtitalk 앱 구성 완료")

    return app
