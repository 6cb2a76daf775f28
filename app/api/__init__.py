"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates the member and team routers
into a single router for inclusion in the FastAPI application.

Included routers:
    - members: 회원 검색 및 관리 (Member search and management)
    - teams: 팀 관리 (Team management)
"""

from fastapi import APIRouter

from app.api.members import router as members_router
from app.api.teams import router as teams_router

api_router: APIRouter = APIRouter()

api_router.include_router(members_router, prefix="/members", tags=["Members"])
api_router.include_router(teams_router, prefix="/teams", tags=["Teams"])
