"""라우터 등록 테스트"""

from fastapi import FastAPI

from mbtitalk.router_registry import API_ROUTERS, VIEW_ROUTERS, RouterRegistry, RouterSpec


def test_registers_every_router():
    app = FastAPI()

    results = RouterRegistry().register_all_routers(app)

    assert all(results["api"].values())
    assert all(results["views"].values())
    assert len(results["api"]) == len(API_ROUTERS)
    paths = {route.path for route in app.routes}
    assert "/api/matching/start" in paths
    assert "/community/balance/{game_id}" in paths
    assert "/mbti-test" in paths


def test_broken_router_is_reported_not_raised():
    app = FastAPI()
    registry = RouterRegistry(
        api_routers=[
            RouterSpec("missing", "mbtitalk.api.does_not_exist"),
            RouterSpec("wrong_attr", "mbtitalk.api.matching", attribute="MBTI_REQUIRED"),
        ],
        view_routers=VIEW_ROUTERS[:1],
    )

    results = registry.register_all_routers(app)

    assert results["api"] == {"missing": False, "wrong_attr": False}
    assert results["views"] == {"main": True}
