"""회원 레포지토리 — 동적 검색, 페이지네이션, 집계 쿼리.

Member Repository — Dynamic search, pagination, and aggregation queries.
Extends BaseRepository with the member/team search operations:

    - search: 조건 검색, 전체 결과 (unbounded filtered search)
    - search_page: 조건 검색 + 항상 COUNT 실행 (page + unconditional count)
    - search_page_optimized_count: 첫 페이지가 모자라면 COUNT 생략
      (page, count query skipped when the first page is short)

All three share a single query builder: members LEFT OUTER JOIN teams,
filtered by the optional predicates of MemberSearchCondition.
"""

from typing import Any

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.models.member import Member
from app.models.team import Team
from app.repositories.base import BaseRepository
from app.schemas.member import (
    AgeStatistics,
    MemberAgeBand,
    MemberSearchCondition,
    MemberTeamResponse,
    TeamAgeAverage,
)
from app.utils.pagination import Page, get_page
from app.utils.predicates import Predicate, all_of, present, when_present, when_text


# === 검색 조건별 WHERE 절 — Per-field optional predicates ===

def username_eq(username: str | None) -> Predicate:
    return when_text(username, lambda v: Member.username == v)


def team_name_eq(team_name: str | None) -> Predicate:
    return when_text(team_name, lambda v: Team.name == v)


def age_goe(age: int | None) -> Predicate:
    return when_present(age, lambda v: Member.age >= v)


def age_loe(age: int | None) -> Predicate:
    return when_present(age, lambda v: Member.age <= v)


def search_filter(condition: MemberSearchCondition) -> Predicate:
    """검색 조건을 하나의 AND 조건으로 결합합니다. 조건이 없으면 None."""
    return all_of(
        username_eq(condition.username),
        team_name_eq(condition.team_name),
        age_goe(condition.age_goe),
        age_loe(condition.age_loe),
    )


class MemberRepository(BaseRepository[Member]):
    """회원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the members table.
    Search operations are read-only; SQLAlchemy errors propagate unchanged.
    """

    def __init__(self) -> None:
        super().__init__(Member)

    def _search_query(self, condition: MemberSearchCondition) -> Select[Any]:
        """회원-팀 프로젝션 조회 쿼리를 생성합니다.

        Build the projection query. Team columns are selected from the
        outer join itself, so no per-row relationship load happens.
        """
        return (
            select(
                Member.id.label("member_id"),
                Member.username,
                Member.age,
                Team.id.label("team_id"),
                Team.name.label("team_name"),
            )
            .select_from(Member)
            .outerjoin(Member.team)
            .where(*present(search_filter(condition)))
            .order_by(Member.id)
        )

    async def _fetch(self, db: AsyncSession, query: Select[Any]) -> list[MemberTeamResponse]:
        result = await db.execute(query)
        return [MemberTeamResponse.model_validate(dict(row)) for row in result.mappings().all()]

    async def search(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> list[MemberTeamResponse]:
        """조건에 맞는 모든 회원-팀 행을 조회합니다 (페이지네이션 없음).

        Return every member/team row matching the present condition fields.
        Absent fields impose no constraint; an empty condition returns all
        members, including those without a team.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)

        Returns:
            list[MemberTeamResponse]: 조회 결과 (Matching rows, ordered by member id)
        """
        return await self._fetch(db, self._search_query(condition))

    async def count(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
    ) -> int:
        """조건에 맞는 전체 회원 수를 조회합니다 (COUNT 쿼리).

        Count the members matching the condition over the same join.
        """
        query: Select = (
            select(func.count(Member.id))
            .select_from(Member)
            .outerjoin(Member.team)
            .where(*present(search_filter(condition)))
        )
        return (await db.execute(query)).scalar_one()

    async def search_page(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        offset: int,
        page_size: int,
    ) -> Page[MemberTeamResponse]:
        """조건 검색 결과의 한 페이지와 전체 개수를 조회합니다.

        Fetch one page (OFFSET/LIMIT) and always run the count query.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            condition: 검색 조건 (Search condition)
            offset: 조회 시작 위치 (Row offset, 0-based)
            page_size: 페이지 크기 (Rows per page)

        Returns:
            Page[MemberTeamResponse]: 페이지 결과 (Page with total count)
        """
        items = await self._fetch(
            db, self._search_query(condition).offset(offset).limit(page_size)
        )
        total: int = await self.count(db, condition)
        return Page(items=items, total=total, offset=offset, page_size=page_size)

    async def search_page_optimized_count(
        self,
        db: AsyncSession,
        condition: MemberSearchCondition,
        offset: int,
        page_size: int,
    ) -> Page[MemberTeamResponse]:
        """search_page와 같지만 불필요한 COUNT 쿼리를 생략합니다.

        Same result contract as search_page. When offset is 0 and fewer
        than page_size rows came back, the total is the number of rows
        fetched and the count query is never issued.
        """
        items = await self._fetch(
            db, self._search_query(condition).offset(offset).limit(page_size)
        )
        return await get_page(items, offset, page_size, lambda: self.count(db, condition))

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
    ) -> list[Member]:
        """이름으로 회원을 조회합니다 (Members with exactly this username)."""
        query: Select = (
            select(Member).where(Member.username == username).order_by(Member.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_sorted(
        self,
        db: AsyncSession,
        age: int | None = None,
    ) -> list[Member]:
        """나이 내림차순, 이름 오름차순(NULL은 마지막)으로 정렬된 회원 목록.

        Members sorted by age descending, then username ascending with
        NULL usernames last. Optionally restricted to a single age.
        """
        query: Select = (
            select(Member)
            .where(*present(when_present(age, lambda v: Member.age == v)))
            .order_by(Member.age.desc(), Member.username.asc().nulls_last())
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # === 집계 및 서브쿼리 — Aggregation and subquery examples ===

    async def age_statistics(self, db: AsyncSession) -> AgeStatistics:
        """전체 회원 나이의 COUNT/SUM/AVG/MAX/MIN을 계산합니다."""
        query: Select = select(
            func.count(Member.id),
            func.coalesce(func.sum(Member.age), 0),
            func.coalesce(func.avg(Member.age), 0),
            func.max(Member.age),
            func.min(Member.age),
        )
        count, total, average, maximum, minimum = (await db.execute(query)).one()
        return AgeStatistics(
            count=count,
            total=total,
            average=float(average),
            maximum=maximum,
            minimum=minimum,
        )

    async def team_age_averages(self, db: AsyncSession) -> list[TeamAgeAverage]:
        """팀 이름별 평균 나이를 조회합니다.

        Inner join members to teams, GROUP BY team name, ordered by name.
        Members without a team are excluded.
        """
        query: Select = (
            select(Team.name, func.avg(Member.age))
            .select_from(Member)
            .join(Member.team)
            .group_by(Team.name)
            .order_by(Team.name)
        )
        result = await db.execute(query)
        return [
            TeamAgeAverage(team_name=name, average_age=float(average))
            for name, average in result.all()
        ]

    async def get_oldest(self, db: AsyncSession) -> list[Member]:
        """나이가 가장 많은 회원을 조회합니다 (age = MAX(age) subquery)."""
        member_sub = aliased(Member)
        max_age = select(func.max(member_sub.age)).scalar_subquery()
        query: Select = select(Member).where(Member.age == max_age).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_at_least_average_age(self, db: AsyncSession) -> list[Member]:
        """나이가 평균 이상인 회원을 조회합니다 (age >= AVG(age) subquery)."""
        member_sub = aliased(Member)
        avg_age = select(func.avg(member_sub.age)).scalar_subquery()
        query: Select = select(Member).where(Member.age >= avg_age).order_by(Member.id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def age_bands(self, db: AsyncSession) -> list[MemberAgeBand]:
        """CASE 식으로 회원의 나이대를 구분합니다.

        Label each member with an age band: "0~20", "21~30", otherwise "etc".
        """
        band = case(
            (Member.age.between(0, 20), "0~20"),
            (Member.age.between(21, 30), "21~30"),
            else_="etc",
        )
        query: Select = (
            select(Member.username, Member.age, band.label("band")).order_by(Member.id)
        )
        result = await db.execute(query)
        return [MemberAgeBand.model_validate(dict(row)) for row in result.mappings().all()]


# 싱글턴 인스턴스 — Singleton instance
member_repository: MemberRepository = MemberRepository()
