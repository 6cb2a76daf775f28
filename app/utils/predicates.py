"""동적 WHERE 조건 조립 유틸리티 모듈.

Dynamic WHERE-clause composition utilities.
Each optional filter builder returns either a SQLAlchemy boolean clause
or None (absence marker). Absence markers are dropped before the clauses
are combined by conjunction, so a missing filter never short-circuits
the whole query.

Usage:
    def username_eq(username: str | None) -> Predicate:
        return when_text(username, lambda v: Member.username == v)

    query = query.where(*present(username_eq(name), age_goe(age)))
"""

from typing import Callable, TypeVar

from sqlalchemy import ColumnElement, and_

V = TypeVar("V")

# 선택적 조건 — 조건 절 또는 None (Optional clause: clause or absence marker)
Predicate = ColumnElement[bool] | None


def has_text(value: str | None) -> bool:
    """공백이 아닌 문자가 하나라도 있는지 확인합니다.

    Return True when the string is non-None and not blank/whitespace-only.
    """
    return value is not None and value.strip() != ""


def when_present(value: V | None, build: Callable[[V], ColumnElement[bool]]) -> Predicate:
    """값이 있으면 조건을 생성하고, 없으면 None을 반환합니다.

    Build a clause from value when it is not None, else return None.
    """
    return build(value) if value is not None else None


def when_text(value: str | None, build: Callable[[str], ColumnElement[bool]]) -> Predicate:
    """문자열 값이 비어있지 않을 때만 조건을 생성합니다.

    Build a clause when the string has text; blank strings count as absent.
    """
    return build(value) if has_text(value) else None


def present(*predicates: Predicate) -> list[ColumnElement[bool]]:
    """None 조건을 제거한 조건 목록 — Drop absence markers, keep order."""
    return [p for p in predicates if p is not None]


def all_of(*predicates: Predicate) -> Predicate:
    """존재하는 조건만 AND로 결합합니다.

    Fold the present clauses into a single conjunction.
    Returns None when no clause is present, so the result can itself be
    passed on as an optional predicate.

    Args:
        predicates: 선택적 조건들 (Optional clauses)

    Returns:
        Predicate: 결합된 조건 또는 None (Conjunction, or None if all absent)
    """
    clauses: list[ColumnElement[bool]] = present(*predicates)
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return and_(*clauses)
