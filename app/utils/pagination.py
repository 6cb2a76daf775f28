"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the Page response model and helpers that assemble a page from
fetched content and a total count, optionally skipping the count query.
"""

import math
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.
    Contains the items of the requested window and the total matching count.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        offset: 조회 시작 위치, 0부터 시작 (Row offset, 0-based)
        page_size: 페이지당 항목 수 (Requested items per page)
    """

    items: list[T]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    offset: int  # 조회 시작 위치 (Row offset)
    page_size: int  # 페이지당 항목 수 (Items per page)

    @property
    def pages(self) -> int:
        """전체 페이지 수 — ceil(total / page_size)."""
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total / self.page_size)


def to_offset(page: int, per_page: int) -> int:
    """1부터 시작하는 페이지 번호를 오프셋으로 변환합니다 (1-based page to row offset)."""
    return (page - 1) * per_page


async def get_page(
    content: Sequence[T],
    offset: int,
    page_size: int,
    count: Callable[[], Awaitable[int]],
) -> Page[T]:
    """조회 결과로 페이지를 구성하고, 필요할 때만 COUNT 쿼리를 실행합니다.

    Assemble a Page, awaiting the count callback only when it is needed.
    When the first page (offset 0) came back shorter than page_size,
    every matching row is already in hand and the total is derived
    locally as offset + len(content). In every other case the count
    callback is awaited.

    The derived total is not guaranteed to agree with a concurrent
    writer between the content and count queries.

    Args:
        content: 현재 페이지 조회 결과 (Rows fetched for the page)
        offset: 조회 시작 위치 (Row offset used for the fetch)
        page_size: 요청 페이지 크기 (Requested page size / LIMIT)
        count: 전체 개수 조회 콜백 (Awaitable factory running the count query)

    Returns:
        Page[T]: 페이지 결과 (Assembled page)
    """
    items: list[T] = list(content)
    if offset == 0 and len(items) < page_size:
        total: int = offset + len(items)
    else:
        total = await count()
    return Page(items=items, total=total, offset=offset, page_size=page_size)
