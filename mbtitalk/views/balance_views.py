"""
밸런스 게임 뷰 라우터
- 게임 목록 (로딩 실패/빈 목록/목록)
- 게임 상세
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..api_client import UserAPIClient
from ..auth.middleware import AuthContext, get_api_client, get_auth_context
from ..models.backend import BalanceGameListItem
from ..models.view_state import LoadStatus
from ..services.balance_game_service import find_balance_game, load_balance_games, percent_label
from .layout import e, render_page

logger = logging.getLogger(__name__)
balance_views_router = APIRouter()


def render_balance_bar(game: BalanceGameListItem, height: int = 24) -> str:
    """투표 비율 막대"""
    return f"""
    <div class="bar" style="height: {height}px;">
        <div class="left" style="width: {game.left_percentage}%;">{percent_label(game.left_percentage)}</div>
        <div class="right" style="width: {game.right_percentage}%;">{percent_label(game.right_percentage)}</div>
    </div>
    """


def render_votable_badge(game: BalanceGameListItem) -> str:
    if game.is_votable:
        return '<span class="badge open">투표 가능</span>'
    return '<span class="badge closed">마감됨</span>'


def render_game_card(game: BalanceGameListItem) -> str:
    """목록 카드 1개"""
    return f"""
    <a href="/community/balance/{game.id}">
        <div class="card"><div class="card-body">
            <div style="display:flex; justify-content:space-between; margin-bottom:12px;">
                <span class="muted">{e(game.week_of)}</span>
                {render_votable_badge(game)}
            </div>
            <h3 style="font-size:18px; margin-bottom:16px;">{e(game.question)}</h3>
            <div style="display:flex; justify-content:space-between; font-size:14px; font-weight:600; margin-bottom:8px;">
                <span style="color:#db2777;">{e(game.option_left)}</span>
                <span style="color:#9333ea;">{e(game.option_right)}</span>
            </div>
            {render_balance_bar(game)}
            <p class="muted" style="margin-top:16px;">💬 댓글 {game.comment_count}개</p>
        </div></div>
    </a>
    """


@balance_views_router.get("/community/balance", response_class=HTMLResponse)
async def balance_game_list(
    context: AuthContext = Depends(get_auth_context),
    client: UserAPIClient = Depends(get_api_client),
):
    """밸런스 게임 목록"""
    state = await load_balance_games(client)

    if state.status == LoadStatus.ERROR:
        body = f"""
        <div class="card"><div class="card-body center">
            <p class="error">{e(state.error)}</p>
        </div></div>
        """
    elif state.status == LoadStatus.EMPTY:
        body = """
        <div class="card"><div class="card-body center">
            <p style="font-size:40px; margin-bottom:16px;">⚖️</p>
            <h1 style="font-size:20px; margin-bottom:8px;">밸런스 게임</h1>
            <p class="muted">아직 밸런스 게임이 없습니다.</p>
        </div></div>
        """
    else:
        cards = "".join(render_game_card(game) for game in state.items)
        body = f"""
        <div class="card">
            <div class="card-header grad-pink"><span>⚖️ 밸런스 게임</span></div>
            <div class="card-body">
                <p style="color:#4b5563; font-size:14px;">MBTI별 선택을 비교해보세요! 30일 이내 게임에만 투표할 수 있습니다.</p>
            </div>
        </div>
        {cards}
        """

    return HTMLResponse(render_page("밸런스 게임", body, context))


@balance_views_router.get("/community/balance/{game_id}", response_class=HTMLResponse)
async def balance_game_detail(
    game_id: int,
    context: AuthContext = Depends(get_auth_context),
    client: UserAPIClient = Depends(get_api_client),
):
    """밸런스 게임 상세"""
    state = await load_balance_games(client)

    if state.status == LoadStatus.ERROR:
        body = f'<div class="card"><div class="card-body center"><p class="error">{e(state.error)}</p></div></div>'
        return HTMLResponse(render_page("밸런스 게임", body, context), status_code=502)

    game = find_balance_game(state, game_id)
    if game is None:
        logger.info(f"🔎 존재하지 않는 밸런스 게임 조회: {game_id}")
        body = """
        <div class="card"><div class="card-body center">
            <p class="muted" style="margin-bottom:16px;">밸런스 게임을 찾을 수 없습니다.</p>
            <a class="btn" href="/community/balance">목록으로</a>
        </div></div>
        """
        return HTMLResponse(render_page("밸런스 게임", body, context), status_code=404)

    body = f"""
    <div class="card">
        <div class="card-header grad-pink">
            <span>⚖️ 밸런스 게임</span>
            {render_votable_badge(game)}
        </div>
        <div class="card-body">
            <p class="muted" style="margin-bottom:8px;">{e(game.week_of)}</p>
            <h1 style="font-size:22px; text-align:center; margin:16px 0 32px;">{e(game.question)}</h1>
            <div style="display:flex; justify-content:space-between; font-weight:700; margin-bottom:8px;">
                <span style="color:#db2777;">{e(game.option_left)}</span>
                <span style="color:#9333ea;">{e(game.option_right)}</span>
            </div>
            {render_balance_bar(game, height=48)}
            <p class="muted" style="margin-top:16px;">💬 댓글 {game.comment_count}개</p>
            <a class="btn gray" style="margin-top:24px;" href="/community/balance">목록으로</a>
        </div>
    </div>
    """
    return HTMLResponse(render_page(game.question, body, context))
