"""회원 관련 Pydantic 요청/응답 스키마 정의.

Member Pydantic request/response schema definitions.
Covers member CRUD, the dynamic search condition, the member-team
projection, and the result shapes of the aggregation queries.
"""

from pydantic import BaseModel, ConfigDict


# === 회원 (Member) 스키마 ===

class MemberCreate(BaseModel):
    """회원 생성 요청 스키마.

    Member creation request schema. team_id is optional.

    Attributes:
        username: 회원 이름 (Member name, nullable)
        age: 나이 (Age)
        team_id: 소속 팀 ID (Team identifier, optional)
    """

    username: str | None = None  # 회원 이름 (Member name)
    age: int = 0  # 나이 (Age)
    team_id: int | None = None  # 소속 팀 ID — None이면 무소속 (No team when null)


class MemberResponse(BaseModel):
    """회원 응답 스키마."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str | None
    age: int
    team_id: int | None


# === 검색 조건 (Search Condition) 스키마 ===

class MemberSearchCondition(BaseModel):
    """회원 동적 검색 조건 스키마.

    Dynamic member search condition. Every field is optional; an absent
    field (None, or a blank string for text fields) does not constrain
    the query. All fields absent matches every member.

    Attributes:
        username: 회원 이름 일치 (Member name equals)
        team_name: 팀 이름 일치 (Team name equals)
        age_goe: 최소 나이, 이상 (Age greater than or equal)
        age_loe: 최대 나이, 이하 (Age less than or equal)
    """

    username: str | None = None
    team_name: str | None = None
    age_goe: int | None = None
    age_loe: int | None = None


class MemberTeamResponse(BaseModel):
    """회원-팀 프로젝션 응답 스키마.

    Flattened read-only view of a member joined with its team.
    Built directly from the labelled columns of the joined query,
    so team fields are None for members without a team.

    Attributes:
        member_id: 회원 ID (Member identifier)
        username: 회원 이름 (Member name)
        age: 나이 (Age)
        team_id: 팀 ID (Team identifier, nullable)
        team_name: 팀 이름 (Team name, nullable)
    """

    member_id: int
    username: str | None
    age: int
    team_id: int | None
    team_name: str | None


# === 집계 (Aggregation) 스키마 ===

class AgeStatistics(BaseModel):
    """회원 나이 집계 결과 (Member age aggregates)."""

    count: int
    total: int  # SUM(age)
    average: float
    maximum: int | None
    minimum: int | None


class TeamAgeAverage(BaseModel):
    """팀별 평균 나이 (Average member age per team)."""

    team_name: str
    average_age: float


class MemberAgeBand(BaseModel):
    """회원 나이대 구분 (Member labelled by age band)."""

    username: str | None
    age: int
    band: str
