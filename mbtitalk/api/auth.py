"""인증 상태 API 라우터"""

from fastapi import APIRouter, Depends

from ..auth.middleware import AuthContext, get_auth_context

router = APIRouter()


@router.get("/me")
async def get_me(context: AuthContext = Depends(get_auth_context)):
    """로그인 사용자 및 프로필 조회"""
    if not context.is_logged_in:
        return {"logged_in": False, "user": None, "profile": None}

    return {
        "logged_in": True,
        "user": {"id": context.user.id, "email": context.user.email},
        "profile": {
            "mbti": context.profile.mbti,
            "gender": context.profile.gender.value if context.profile.gender else None,
        },
    }
