"""
인증 뷰 라우터
- 로그인은 백엔드 인증 서비스가 담당, 여기서는 안내 페이지만 제공
"""

import logging
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from ..auth.middleware import AuthContext, get_auth_context
from ..config_manager import config_manager
from .layout import e, render_page

logger = logging.getLogger(__name__)
auth_views_router = APIRouter()


def safe_next_path(next_path: str) -> str:
    """같은 사이트 내부 경로만 허용 (오픈 리다이렉트 방지)"""
    if not next_path or not next_path.startswith("/") or next_path.startswith("//"):
        return "/"
    return next_path


@auth_views_router.get("/login", response_class=HTMLResponse)
async def login_page(
    next: str = Query("/"),
    context: AuthContext = Depends(get_auth_context),
):
    """로그인 안내 페이지"""
    next_path = safe_next_path(next)

    if context.is_logged_in:
        return RedirectResponse(url=next_path, status_code=302)

    login_url = f"{config_manager.backend.login_url}?next={quote(next_path, safe='')}"

    body = f"""
    <div class="card">
        <div class="card-header grad-pink"><span>🔐 로그인</span></div>
        <div class="card-body center">
            <p style="font-size:40px; margin-bottom:16px;">💬</p>
            <h1 style="font-size:20px; margin-bottom:8px;">mbtitalk에 오신 것을 환영해요</h1>
            <p class="muted" style="margin-bottom:24px;">로그인하고 MBTI 매칭과 검사를 시작해보세요</p>
            <a class="btn" href="{e(login_url)}">로그인하러 가기</a>
            <a class="btn gray" style="margin-top:12px;" href="/">홈으로</a>
        </div>
    </div>
    """
    return HTMLResponse(render_page("로그인", body, context))
