"""밸런스 게임 목록 조회 및 화면 상태 변환"""

import logging
from typing import Optional

from mbtitalk.api_client import BackendAPIError
from mbtitalk.models.backend import BalanceGameListItem
from mbtitalk.models.view_state import BalanceGameListState

logger = logging.getLogger(__name__)

LOAD_FAILED = "밸런스 게임 목록을 불러오는데 실패했습니다."

# 이 비율 이하인 쪽은 막대 안에 퍼센트를 표시하지 않음
PERCENT_LABEL_MIN = 15


async def load_balance_games(client) -> BalanceGameListState:
    """밸런스 게임 목록 조회 - 에러/빈 목록/로드 완료 상태 반환"""
    try:
        response = await client.get_balance_game_list()
    except BackendAPIError as e:
        logger.error(f"❌ 밸런스 게임 목록 조회 실패: {str(e)}")
        return BalanceGameListState.failed(LOAD_FAILED)
    return BalanceGameListState.loaded(response.items)


def find_balance_game(state: BalanceGameListState, game_id: int) -> Optional[BalanceGameListItem]:
    """목록에서 게임 조회"""
    for game in state.items:
        if game.id == game_id:
            return game
    return None


def percent_label(percentage: float) -> str:
    """막대 안 퍼센트 라벨 (좁은 쪽은 빈 문자열)"""
    if percentage > PERCENT_LABEL_MIN:
        return f"{percentage:.0f}%"
    return ""


def resolve_vote_destination(auth_context, game: BalanceGameListItem) -> str:
    """투표 버튼 이동 경로 - 비로그인: /login, MBTI 미설정: /mypage, 그 외: 게임 상세"""
    if not auth_context.is_logged_in:
        return "/login"
    if not auth_context.profile.has_mbti:
        return "/mypage"
    return f"/community/balance/{game.id}"
