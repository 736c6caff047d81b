"""
메인 뷰 라우터
- 랜딩 페이지: 이번 주 밸런스 게임, 메시지 변환 예시, MBTI 검사 안내
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..api_client import UserAPIClient
from ..auth.middleware import AuthContext, get_api_client, get_auth_context
from ..config_manager import config_manager
from ..models.view_state import LoadStatus
from ..services.balance_game_service import load_balance_games, resolve_vote_destination
from .balance_views import render_balance_bar
from .layout import e, render_page

logger = logging.getLogger(__name__)
main_views_router = APIRouter()

CONVERSION_SOURCE = "저번에 말한 프로젝트 자료 아직인가요? 다음 주 회의 전까지 필요한데 언제쯤 받을 수 있을까요?"

# (MBTI, 말투, 변환 예시, 색상)
CONVERSION_EXAMPLES = [
    ("INTJ", "논리적 · 직접적",
     "프로젝트 자료 진행 상황 확인드립니다. 다음 주 회의 준비를 위해 금요일까지 공유 가능하신지 확인 부탁드려요.",
     "#a855f7"),
    ("ENFP", "친근한 · 감성적",
     "저번에 말씀드린 자료 준비 어떻게 되고 있어요~? 바쁘시겠지만 다음 주 회의 전에 같이 볼 수 있으면 좋겠어요!",
     "#ec4899"),
    ("ISTJ", "정중한 · 체계적",
     "안녕하세요. 요청드린 프로젝트 자료 전달 일정 확인 요청드립니다. 회의 일정상 이번 주 내 수령이 필요합니다.",
     "#3b82f6"),
]


def render_balance_preview(state, context: AuthContext) -> str:
    """이번 주 밸런스 게임 카드 본문"""
    if state.status != LoadStatus.LOADED:
        return '<div class="center muted" style="padding:48px 0;"><p>현재 진행 중인 게임이 없습니다</p></div>'

    game = state.items[0]
    destination = resolve_vote_destination(context, game)
    return f"""
    <h2 style="font-size:22px; text-align:center; margin-bottom:40px; line-height:1.6;">{e(game.question)}</h2>
    <div style="margin-bottom:32px;">{render_balance_bar(game, height=48)}</div>
    <div class="btn-row">
        <a class="btn" style="background:#ec4899;" href="{e(destination)}">{e(game.option_left)}</a>
        <a class="btn" style="background:#a855f7;" href="{e(destination)}">{e(game.option_right)}</a>
    </div>
    """


def render_conversion_examples() -> str:
    """메시지 변환 예시"""
    rows = "".join(
        f"""
        <div style="background:#faf5ff; border-left:4px solid {color}; border-radius:16px; padding:20px; margin-bottom:12px;">
            <div style="margin-bottom:12px;">
                <span class="badge" style="background:{color}; color:white; font-weight:700;">{mbti}</span>
                <span style="font-size:12px; color:{color};">{tone}</span>
            </div>
            <p style="line-height:1.6;">"{e(text)}"</p>
        </div>
        """
        for mbti, tone, text, color in CONVERSION_EXAMPLES
    )
    return f"""
    <p style="font-size:18px; text-align:center; margin-bottom:32px;">같은 말도 MBTI에 따라 다르게 들려요</p>
    <div style="background:#f3f4f6; border-radius:16px; padding:20px; margin-bottom:16px;">
        <p class="muted" style="margin-bottom:12px;">내가 보내려는 말</p>
        <p style="line-height:1.6;">"{e(CONVERSION_SOURCE)}"</p>
    </div>
    {rows}
    <a class="btn grad-purple" style="margin-top:20px;" href="/convert">내 메시지 변환하기</a>
    """


@main_views_router.get("/", response_class=HTMLResponse)
async def landing(
    context: AuthContext = Depends(get_auth_context),
    client: UserAPIClient = Depends(get_api_client),
):
    """랜딩 페이지"""
    # 목록 조회 실패 시 진행 중인 게임 없음으로 표시
    balance_state = await load_balance_games(client)
    total_questions = config_manager.mbti_test.total_questions

    body = f"""
    <section class="card">
        <div class="card-header grad-amber">
            <span>⚖️ 이번 주 밸런스 게임</span>
            <a href="/community/balance" style="font-size:14px; font-weight:400;">전체보기 →</a>
        </div>
        <div class="card-body">{render_balance_preview(balance_state, context)}</div>
    </section>

    <section class="card">
        <div class="card-header grad-purple"><span>✨ 메시지 변환</span></div>
        <div class="card-body">{render_conversion_examples()}</div>
    </section>

    <section class="card">
        <div class="card-header grad-indigo"><span>🧠 MBTI 검사</span></div>
        <div class="card-body">
            <p style="font-size:18px; text-align:center; margin-bottom:32px;">AI와 대화하며 알아보는 정확한 MBTI</p>
            <div style="display:flex; justify-content:center; gap:32px; margin-bottom:32px; text-align:center;">
                <div><div style="font-size:28px;">💬</div><div class="muted">채팅형</div></div>
                <div><div style="font-size:28px;">{total_questions}</div><div class="muted">질문</div></div>
                <div><div style="font-size:28px;">10분</div><div class="muted">소요</div></div>
            </div>
            <a class="btn grad-indigo" href="/mbti-test">무료로 검사하기</a>
        </div>
    </section>
    """
    return HTMLResponse(render_page("홈", body, context))
