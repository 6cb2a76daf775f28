"""FastAPI 의존성 주입 모듈 — 검색 조건 및 페이지 파라미터.

FastAPI dependency injection module — Search condition and paging parameters.
Collects the optional query-string filters into a MemberSearchCondition
and validates page bounds against settings.
"""

from typing import Annotated

from fastapi import Query

from app.config import settings
from app.schemas.member import MemberSearchCondition


def get_search_condition(
    username: Annotated[str | None, Query(description="회원 이름 일치")] = None,
    team_name: Annotated[str | None, Query(description="팀 이름 일치")] = None,
    age_goe: Annotated[int | None, Query(description="최소 나이 (이상)")] = None,
    age_loe: Annotated[int | None, Query(description="최대 나이 (이하)")] = None,
) -> MemberSearchCondition:
    """쿼리 파라미터로 검색 조건을 구성합니다.

    Build a MemberSearchCondition from query parameters. Missing parameters
    stay None; blank strings are passed through and treated as absent by
    the repository.
    """
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


class PageParams:
    """페이지 파라미터 — 1부터 시작하는 page와 per_page.

    Paging parameters: 1-based page number and items per page,
    bounded by settings.MAX_PAGE_SIZE.
    """

    def __init__(
        self,
        page: Annotated[int, Query(ge=1, description="페이지 번호 (1부터 시작)")] = 1,
        per_page: Annotated[
            int,
            Query(ge=1, le=settings.MAX_PAGE_SIZE, description="페이지당 항목 수"),
        ] = settings.DEFAULT_PAGE_SIZE,
    ) -> None:
        self.page: int = page
        self.per_page: int = per_page
