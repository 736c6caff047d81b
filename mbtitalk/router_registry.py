"""
라우터 등록
- JSON API 라우터(/api/...)와 HTML 화면 라우터를 모듈 경로로 로드
- 화면 추가 시 VIEW_ROUTERS에 한 줄 추가
"""

import importlib
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from fastapi import FastAPI
from fastapi.routing import APIRouter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RouterSpec:
    """등록할 라우터 위치"""
    name: str
    module_path: str
    attribute: str = "router"
    prefix: str = ""
    tags: List[str] = field(default_factory=list)


API_ROUTERS = [
    RouterSpec("auth", "mbtitalk.api.auth", prefix="/api/auth", tags=["Auth"]),
    RouterSpec("matching", "mbtitalk.api.matching", prefix="/api/matching", tags=["Matching"]),
    RouterSpec("mbti_test", "mbtitalk.api.mbti_test", prefix="/api/mbti-test", tags=["MBTI Test"]),
    RouterSpec("profile", "mbtitalk.api.profile", prefix="/api/profile", tags=["Profile"]),
]

VIEW_ROUTERS = [
    RouterSpec("main", "mbtitalk.views.main_views", "main_views_router", tags=["Views"]),
    RouterSpec("auth", "mbtitalk.views.auth_views", "auth_views_router", tags=["Views"]),
    RouterSpec("chat", "mbtitalk.views.chat_views", "chat_views_router", tags=["Views"]),
    RouterSpec("balance", "mbtitalk.views.balance_views", "balance_views_router", tags=["Views"]),
    RouterSpec("mbti_test", "mbtitalk.views.mbti_test_views", "mbti_test_views_router", tags=["Views"]),
    RouterSpec("profile", "mbtitalk.views.profile_views", "profile_views_router", tags=["Views"]),
]


class RouterLoadError(Exception):
    """라우터 모듈/속성 로드 실패"""


def load_router(spec: RouterSpec) -> APIRouter:
    try:
        module = importlib.import_module(spec.module_path)
    except ImportError as e:
        raise RouterLoadError(f"{spec.module_path} import 실패: {str(e)}")

    router = getattr(module, spec.attribute, None)
    if not isinstance(router, APIRouter):
        raise RouterLoadError(f"{spec.module_path}.{spec.attribute} 는 APIRouter가 아님")
    return router


class RouterRegistry:
    """API/화면 라우터 등록 관리"""

    def __init__(self, api_routers: Optional[List[RouterSpec]] = None,
                 view_routers: Optional[List[RouterSpec]] = None):
        self.api_routers = list(api_routers if api_routers is not None else API_ROUTERS)
        self.view_routers = list(view_routers if view_routers is not None else VIEW_ROUTERS)

    def _register(self, app: FastAPI, specs: List[RouterSpec], kind: str) -> Dict[str, bool]:
        results = {}
        for spec in specs:
            try:
                router = load_router(spec)
            except RouterLoadError as e:
                logger.error(f"❌ {kind} 라우터 로드 실패: {spec.name} - {str(e)}")
                results[spec.name] = False
                continue

            app.include_router(router, prefix=spec.prefix, tags=spec.tags)
            logger.info(f"✅ {kind} 라우터 등록: {spec.name} ({spec.prefix or '/'})")
            results[spec.name] = True
        return results

    def register_all_routers(self, app: FastAPI) -> Dict[str, Dict[str, bool]]:
        """API → 화면 순서로 등록"""
        results = {
            "api": self._register(app, self.api_routers, "API"),
            "views": self._register(app, self.view_routers, "View"),
        }
        logger.info(
            f"🎯 라우터 등록 완료 - API: {sum(results['api'].values())}/{len(self.api_routers)}, "
            f"View: {sum(results['views'].values())}/{len(self.view_routers)}"
        )
        return results


# 전역 라우터 레지스트리 인스턴스
router_registry = RouterRegistry()
