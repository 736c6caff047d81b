"""MBTI 검사 API 라우터"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..api_client import UserAPIClient
from ..auth.middleware import AuthContext, get_api_client, require_auth
from ..services.mbti_test_service import MbtiTestError
from ..session import session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class AnswerRequest(BaseModel):
    answer: str = Field(..., max_length=2000)


@router.get("/state")
async def get_test_state(context: AuthContext = Depends(require_auth)):
    """검사 진행 상태 조회 (결과 분석 대기 폴링용)"""
    test = session_manager.get_or_create_session(context.user_id).mbti_test
    return {"success": True, "state": test.to_dict()}


@router.post("/start")
async def start_test(
    context: AuthContext = Depends(require_auth),
    client: UserAPIClient = Depends(get_api_client),
):
    """검사 시작 (진행 중이던 검사는 새로 시작)"""
    test = session_manager.get_or_create_session(context.user_id).reset_mbti_test()
    started = await test.start(client, context.user_id)
    return {
        "success": started,
        "message": test.error or "검사를 시작했습니다",
        "state": test.to_dict(),
    }


@router.post("/answer")
async def submit_answer(
    payload: AnswerRequest,
    context: AuthContext = Depends(require_auth),
    client: UserAPIClient = Depends(get_api_client),
):
    """답변 제출"""
    test = session_manager.get_or_create_session(context.user_id).mbti_test

    try:
        success = await test.submit_answer(client, payload.answer)
    except MbtiTestError as e:
        logger.warning(f"⚠️ 답변 제출 거부 (user_id={context.user_id}): {str(e)}")
        return {"success": False, "message": str(e), "state": test.to_dict()}

    return {
        "success": success,
        "message": test.error or test.phase_text,
        "state": test.to_dict(),
    }
