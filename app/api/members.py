"""회원 라우터 — 회원 검색 및 CRUD 엔드포인트.

Member Router — Search and CRUD endpoints for members.

Endpoints:
    - GET /search: 조건 검색, 전체 결과 (Unbounded filtered search)
    - GET /search/page: 조건 검색 페이지 (Paginated filtered search)
    - GET /statistics: 나이 집계 (Age aggregates)
    - GET /team-averages: 팀별 평균 나이 (Average age per team)
    - GET/POST /, GET/DELETE /{member_id}: 회원 CRUD (Member CRUD)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import PageParams, get_search_condition
from app.database import get_db
from app.schemas.common import MessageResponse
from app.schemas.member import (
    AgeStatistics,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamResponse,
    TeamAgeAverage,
)
from app.services.member_service import member_service
from app.utils.pagination import Page, to_offset

router: APIRouter = APIRouter()


@router.get("/search", response_model=list[MemberTeamResponse])
async def search_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
) -> list[MemberTeamResponse]:
    """조건에 맞는 모든 회원을 팀 정보와 함께 조회합니다.

    Search members with their team; absent filters match everything.
    """
    return await member_service.search(db, condition)


@router.get("/search/page", response_model=Page[MemberTeamResponse])
async def search_members_page(
    db: Annotated[AsyncSession, Depends(get_db)],
    condition: Annotated[MemberSearchCondition, Depends(get_search_condition)],
    paging: Annotated[PageParams, Depends()],
    optimized_count: Annotated[bool, Query(description="첫 페이지가 모자라면 COUNT 생략")] = True,
) -> Page[MemberTeamResponse]:
    """조건 검색 결과를 페이지 단위로 조회합니다.

    Paginated member search. Set optimized_count=false to always run the count query.
    """
    return await member_service.search_page(
        db,
        condition,
        offset=to_offset(paging.page, paging.per_page),
        page_size=paging.per_page,
        optimized_count=optimized_count,
    )


@router.get("/statistics", response_model=AgeStatistics)
async def get_statistics(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AgeStatistics:
    """전체 회원 나이 집계 (Count/sum/avg/max/min of member age)."""
    return await member_service.get_statistics(db)


@router.get("/team-averages", response_model=list[TeamAgeAverage])
async def get_team_averages(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TeamAgeAverage]:
    """팀별 평균 나이 (Average member age per team)."""
    return await member_service.get_team_averages(db)


@router.get("", response_model=list[MemberResponse])
async def list_members(
    db: Annotated[AsyncSession, Depends(get_db)],
    username: Annotated[str | None, Query(description="회원 이름 필터")] = None,
) -> list[MemberResponse]:
    """회원 목록을 조회합니다 (List members, optionally by username)."""
    return await member_service.list_members(db, username)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """회원 상세 정보를 조회합니다 (Retrieve a member by id)."""
    return await member_service.get_member(db, member_id)


@router.post("", response_model=MemberResponse, status_code=201)
async def create_member(
    data: MemberCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MemberResponse:
    """새 회원을 생성합니다 (Create a member)."""
    result: MemberResponse = await member_service.create_member(db, data)
    await db.commit()
    return result


@router.delete("/{member_id}", response_model=MessageResponse)
async def delete_member(
    member_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """회원을 삭제합니다 (Delete a member by id)."""
    await member_service.delete_member(db, member_id)
    await db.commit()
    return MessageResponse(message="Member deleted")
