"""회원 서비스 — 회원 CRUD 및 검색 비즈니스 로직.

Member Service — Business logic for member CRUD and search.
Delegates queries to member_repository and translates missing rows
into NotFoundError for the API layer.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member import Member
from app.repositories.member_repository import member_repository
from app.repositories.team_repository import team_repository
from app.schemas.member import (
    AgeStatistics,
    MemberCreate,
    MemberResponse,
    MemberSearchCondition,
    MemberTeamResponse,
    TeamAgeAverage,
)
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page


class MemberService:
    """회원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling member business logic.
    """

    def _to_response(self, member: Member) -> MemberResponse:
        return MemberResponse.model_validate(member)

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamResponse]:
        """조건에 맞는 모든 회원을 조회합니다 (Unbounded search)."""
        return await member_repository.search(db, condition)

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        offset: int,
        page_size: int,
        optimized_count: bool = True,
    ) -> Page[MemberTeamResponse]:
        """조건 검색 결과를 페이지 단위로 조회합니다.

        Paginated search. optimized_count=True skips the count query when
        the first page is already shorter than page_size.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            offset: 조회 시작 위치 (Row offset, 0-based)
            page_size: 페이지 크기 (Rows per page)
            optimized_count: COUNT 생략 최적화 사용 여부 (Enable count skipping)

        Returns:
            Page[MemberTeamResponse]: 페이지 결과 (Page of projections)
        """
        if optimized_count:
            return await member_repository.search_page_optimized_count(
                db, condition, offset, page_size
            )
        return await member_repository.search_page(db, condition, offset, page_size)

    async def get_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> MemberResponse:
        """회원 상세 정보를 조회합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        member: Member | None = await member_repository.get_by_id(db, member_id)
        if member is None:
            raise NotFoundError("Member not found")
        return self._to_response(member)

    async def list_members(
        self,
        db: AsyncSession,
        username: str | None = None,
    ) -> list[MemberResponse]:
        """회원 목록을 조회합니다. username이 있으면 이름으로 필터링.

        List members, optionally only those with the given username.
        """
        if username is not None:
            members = await member_repository.get_by_username(db, username)
        else:
            members = await member_repository.get_all(db)
        return [self._to_response(m) for m in members]

    async def create_member(
        self,
        db: AsyncSession,
        data: MemberCreate,
    ) -> MemberResponse:
        """새 회원을 생성합니다.

        Create a member. The referenced team must exist when team_id is given.

        Raises:
            NotFoundError: 팀을 찾을 수 없을 때 (Team not found)
        """
        if data.team_id is not None:
            team = await team_repository.get_by_id(db, data.team_id)
            if team is None:
                raise NotFoundError("Team not found")

        member: Member = await member_repository.create(db, data.model_dump())
        return self._to_response(member)

    async def delete_member(
        self,
        db: AsyncSession,
        member_id: int,
    ) -> None:
        """회원을 삭제합니다.

        Raises:
            NotFoundError: 회원을 찾을 수 없을 때 (Member not found)
        """
        deleted: bool = await member_repository.delete(db, member_id)
        if not deleted:
            raise NotFoundError("Member not found")

    async def get_statistics(self, db: AsyncSession) -> AgeStatistics:
        return await member_repository.age_statistics(db)

    async def get_team_averages(self, db: AsyncSession) -> list[TeamAgeAverage]:
        return await member_repository.team_age_averages(db)


# 싱글턴 인스턴스 — Singleton instance
member_service: MemberService = MemberService()
