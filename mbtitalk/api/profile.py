"""프로필 API 라우터"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..api_client import UserAPIClient
from ..auth.middleware import AuthContext, get_api_client, require_auth
from ..models.mbti import InvalidMbtiError, MBTI_AXES
from ..models.user import Gender
from ..services.profile_service import ProfileValidationError
from ..session import session_manager

logger = logging.getLogger(__name__)

router = APIRouter()


class ProfileSaveRequest(BaseModel):
    """축별 선택 글자 (미선택은 null) + 성별"""
    letters: List[Optional[str]] = Field(..., min_length=len(MBTI_AXES), max_length=len(MBTI_AXES))
    gender: Optional[Gender] = None


@router.get("")
async def get_profile(context: AuthContext = Depends(require_auth)):
    """현재 프로필 및 편집 버퍼 조회"""
    editor = session_manager.get_or_create_session(context.user_id).profile_editor
    if not editor.is_editing:
        editor.start_editing(context.profile)
    return {
        "success": True,
        "profile": {
            "mbti": context.profile.mbti,
            "gender": context.profile.gender.value if context.profile.gender else None,
        },
        "editor": editor.to_dict(),
    }


@router.post("")
async def save_profile(
    payload: ProfileSaveRequest,
    context: AuthContext = Depends(require_auth),
    client: UserAPIClient = Depends(get_api_client),
):
    """프로필 저장 - MBTI 4글자와 성별이 모두 선택되어야 함"""
    editor = session_manager.get_or_create_session(context.user_id).profile_editor
    if not editor.is_editing:
        editor.start_editing(context.profile)

    try:
        editor.select_letters([letter or None for letter in payload.letters])
        editor.select_gender(payload.gender)
        saved = await editor.save(client, context)
    except (ProfileValidationError, InvalidMbtiError) as e:
        return {"success": False, "message": str(e), "editor": editor.to_dict()}

    if not saved:
        return {"success": False, "message": editor.error, "editor": editor.to_dict()}

    return {
        "success": True,
        "message": "프로필이 저장되었습니다",
        "profile": {
            "mbti": context.profile.mbti,
            "gender": context.profile.gender.value if context.profile.gender else None,
        },
        "editor": editor.to_dict(),
    }
