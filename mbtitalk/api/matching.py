"""매칭 관련 API 라우터"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..api_client import UserAPIClient
from ..auth.middleware import AuthContext, get_api_client, require_auth
from ..services.matching_service import MatchingStateError
from ..session import session_manager

logger = logging.getLogger(__name__)

router = APIRouter()

MBTI_REQUIRED = "MBTI를 먼저 설정해주세요."


def _state_response(matching, success: bool, message: str) -> Dict[str, Any]:
    return {"success": success, "message": message, "state": matching.to_dict()}


@router.get("/status")
async def get_matching_status(context: AuthContext = Depends(require_auth)):
    """매칭 상태 조회 (대기 화면 폴링용)"""
    matching = session_manager.get_or_create_session(context.user_id).matching
    return _state_response(matching, True, matching.status.value)


@router.post("/start")
async def start_matching(
    context: AuthContext = Depends(require_auth),
    client: UserAPIClient = Depends(get_api_client),
):
    """매칭 시작"""
    matching = session_manager.get_or_create_session(context.user_id).matching

    if not context.profile.has_mbti:
        return {"success": False, "message": MBTI_REQUIRED, "redirect": "/profile", "state": matching.to_dict()}

    try:
        await matching.start(client, context.user_id, context.profile.mbti)
    except MatchingStateError as e:
        logger.warning(f"⚠️ 매칭 시작 거부 (user_id={context.user_id}): {str(e)}")
        return _state_response(matching, False, str(e))

    if matching.error:
        return _state_response(matching, False, matching.error)
    return _state_response(matching, True, "매칭을 시작했습니다")


@router.post("/cancel")
async def cancel_matching(
    context: AuthContext = Depends(require_auth),
    client: UserAPIClient = Depends(get_api_client),
):
    """매칭 취소"""
    matching = session_manager.get_or_create_session(context.user_id).matching

    if not context.profile.has_mbti:
        # 프로필 조회 실패 시 대기 상태를 유지하고 재시도 유도
        logger.warning(f"⚠️ 매칭 취소 보류 - MBTI 정보 없음 (user_id={context.user_id})")
        return {"success": False, "message": MBTI_REQUIRED, "state": matching.to_dict()}

    try:
        await matching.cancel(client, context.user_id, context.profile.mbti)
    except MatchingStateError as e:
        logger.warning(f"⚠️ 매칭 취소 거부 (user_id={context.user_id}): {str(e)}")
        return _state_response(matching, False, str(e))

    if matching.error:
        return _state_response(matching, False, matching.error)
    return _state_response(matching, True, "매칭을 취소했습니다")


@router.post("/reset")
async def reset_matching(context: AuthContext = Depends(require_auth)):
    """다시 매칭 (매칭 완료 → 대기 전 상태)"""
    matching = session_manager.get_or_create_session(context.user_id).matching

    try:
        matching.reset()
    except MatchingStateError as e:
        return _state_response(matching, False, str(e))
    return _state_response(matching, True, "다시 매칭할 수 있습니다")
