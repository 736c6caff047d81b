"""
채팅 뷰 라우터
- 채팅 목록 + 매칭 패널 (대기 전 / 대기 중 / 매칭 완료)
- 채팅방 페이지
"""

import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..auth.middleware import AuthContext, auth_middleware, get_auth_context
from ..config_manager import config_manager
from ..models.chat import ChatRoom, MatchingStatus
from ..services.chat_service import get_chat_room, list_chat_rooms
from ..services.matching_service import MatchingWorkflow
from ..session import session_manager
from .layout import e, render_page

logger = logging.getLogger(__name__)
chat_views_router = APIRouter()


def render_matching_panel(matching: MatchingWorkflow) -> str:
    """매칭 상태별 패널 HTML"""
    error = f'<p class="error">{e(matching.error)}</p>' if matching.error else ""

    if matching.status == MatchingStatus.WAITING:
        return f"""
        <div class="center" data-status="waiting">
            <div class="spinner" style="margin-bottom:16px;"></div>
            <p style="font-weight:600; margin-bottom:8px;">매칭 중... 대기 인원: {matching.wait_count}명</p>
            {error}
            <button class="btn gray" onclick="matchingAction('cancel')">매칭 취소</button>
        </div>
        """

    if matching.status == MatchingStatus.MATCHED:
        return f"""
        <div class="center" data-status="matched">
            <p style="font-size:40px; margin-bottom:8px;">🎉</p>
            <p style="font-size:20px; font-weight:700; margin-bottom:16px;">매칭 성공!</p>
            <p class="muted">상대방 MBTI</p>
            <p style="font-size:28px; font-weight:800; color:#a855f7; margin-bottom:24px;">{e(matching.matched_mbti)}</p>
            <div class="btn-row">
                <a class="btn" href="{e(matching.chat_destination())}">채팅 시작</a>
                <button class="btn gray" onclick="matchingAction('reset')">다시 매칭</button>
            </div>
        </div>
        """

    return f"""
    <div class="center" data-status="idle">
        <p class="muted" style="margin-bottom:16px;">무료 사용자는 하루 {config_manager.matching.daily_free_limit}회까지 매칭할 수 있습니다</p>
        {error}
        <button class="btn" onclick="matchingAction('start')">매칭 시작하기</button>
    </div>
    """


def render_chat_room_row(room: ChatRoom) -> str:
    unread = ""
    if room.unread_count > 0:
        unread = f'<span class="badge" style="background:#ec4899; color:white;">{room.unread_count}</span>'
    return f"""
    <a class="row" href="/chat/{e(room.id)}">
        <div style="display:flex; align-items:center; gap:12px;">
            <div style="width:48px; height:48px; border-radius:50%; background:linear-gradient(135deg,#f472b6,#c084fc);
                        color:white; font-weight:700; display:flex; align-items:center; justify-content:center;">
                {e(room.avatar_label)}
            </div>
            <div>
                <p style="font-weight:600;">{e(room.partner_mbti)}</p>
                <p class="muted">{e(room.last_message)}</p>
            </div>
        </div>
        <div style="text-align:right;">
            <p class="muted" style="margin-bottom:4px;">{e(room.last_message_time)}</p>
            {unread}
        </div>
    </a>
    """


def render_chat_room_list(rooms) -> str:
    if not rooms:
        return """
        <div class="center" style="padding:32px 0;">
            <p style="font-size:40px; margin-bottom:8px;">💭</p>
            <p style="font-weight:600; margin-bottom:4px;">아직 채팅방이 없어요</p>
            <p class="muted">위에서 매칭을 시작해보세요!</p>
        </div>
        """
    return "".join(render_chat_room_row(room) for room in rooms)


MATCHING_SCRIPT = """
let pollTimer = null;

async function refreshPanel() {
    const response = await fetch('/matching/panel');
    if (response.redirected) {
        window.location.href = response.url;
        return;
    }
    const panel = document.getElementById('matchingPanel');
    panel.innerHTML = await response.text();
    schedulePolling();
}

async function matchingAction(action) {
    document.querySelectorAll('#matchingPanel button').forEach(b => b.disabled = true);
    try {
        const response = await fetch(`/api/matching/${action}`, { method: 'POST' });
        if (response.status === 401) {
            window.location.href = '/login?next=' + encodeURIComponent(window.location.pathname);
            return;
        }
        const data = await response.json();
        if (!data.success && data.redirect) {
            window.location.href = data.redirect;
            return;
        }
    } catch (error) {
        console.error('매칭 요청 오류:', error);
    }
    await refreshPanel();
}

function schedulePolling() {
    if (pollTimer) {
        clearTimeout(pollTimer);
        pollTimer = null;
    }
    const current = document.querySelector('#matchingPanel [data-status]');
    if (!current || current.dataset.status !== 'waiting') return;

    pollTimer = setTimeout(async () => {
        try {
            const response = await fetch('/api/matching/status');
            const data = await response.json();
            if (data.state && data.state.status !== 'waiting') {
                await refreshPanel();
                return;
            }
        } catch (error) {
            console.error('매칭 상태 조회 오류:', error);
        }
        schedulePolling();
    }, 2000);
}

schedulePolling();
"""


def render_chat_page(context: AuthContext) -> str:
    matching = session_manager.get_or_create_session(context.user_id).matching
    rooms = list_chat_rooms(context.user_id)

    body = f"""
    <div class="card">
        <div class="card-header grad-pink">
            <span>💞 MBTI 매칭</span>
            <span style="font-size:14px; font-weight:400;">내 MBTI: {e(context.profile.mbti)}</span>
        </div>
        <div class="card-body" id="matchingPanel">{render_matching_panel(matching)}</div>
    </div>

    <div class="card">
        <div class="card-header grad-purple"><span>💬 채팅 목록</span></div>
        <div class="card-body">{render_chat_room_list(rooms)}</div>
    </div>
    """
    return render_page("채팅", body, context, script=MATCHING_SCRIPT)


@chat_views_router.get("/chat", response_class=HTMLResponse)
async def chat_page(request: Request, context: AuthContext = Depends(get_auth_context)):
    """채팅 목록 + 매칭"""
    redirect = auth_middleware.require_mbti_redirect(request, context)
    if redirect:
        return redirect
    return HTMLResponse(render_chat_page(context))


@chat_views_router.get("/matching", response_class=HTMLResponse)
async def matching_page(request: Request, context: AuthContext = Depends(get_auth_context)):
    """매칭 페이지 (채팅 목록과 동일 화면)"""
    redirect = auth_middleware.require_mbti_redirect(request, context)
    if redirect:
        return redirect
    return HTMLResponse(render_chat_page(context))


@chat_views_router.get("/matching/panel", response_class=HTMLResponse)
async def matching_panel(request: Request, context: AuthContext = Depends(get_auth_context)):
    """매칭 패널 조각 (상태 변경 후 갱신용)"""
    redirect = auth_middleware.require_mbti_redirect(request, context)
    if redirect:
        return redirect
    matching = session_manager.get_or_create_session(context.user_id).matching
    return HTMLResponse(render_matching_panel(matching))


@chat_views_router.get("/chat/{room_id}", response_class=HTMLResponse)
async def chat_room_page(room_id: str, request: Request, context: AuthContext = Depends(get_auth_context)):
    """채팅방"""
    redirect = auth_middleware.require_mbti_redirect(request, context)
    if redirect:
        return redirect

    room = get_chat_room(context.user_id, room_id)
    partner = room.partner_mbti if room else None
    if partner is None:
        # 방금 매칭된 방은 목록에 없으므로 매칭 상태에서 상대 MBTI 확인
        matching = session_manager.get_or_create_session(context.user_id).matching
        if matching.matched_room_id == room_id:
            partner = matching.matched_mbti

    if partner is None:
        logger.info(f"🔎 존재하지 않는 채팅방 조회: {room_id} (user_id={context.user_id})")
        body = """
        <div class="card"><div class="card-body center">
            <p class="muted" style="margin-bottom:16px;">채팅방을 찾을 수 없습니다.</p>
            <a class="btn" href="/chat">채팅 목록으로</a>
        </div></div>
        """
        return HTMLResponse(render_page("채팅", body, context), status_code=404)

    body = f"""
    <div class="card">
        <div class="card-header grad-purple">
            <span>💬 {e(partner)}님과의 대화</span>
            <a href="/chat" style="font-size:14px; font-weight:400;">← 목록</a>
        </div>
        <div class="card-body center">
            <p style="font-size:40px; margin-bottom:8px;">🚧</p>
            <p class="muted">채팅 기능은 준비 중입니다.</p>
        </div>
    </div>
    """
    return HTMLResponse(render_page(f"{partner} 채팅", body, context))
