"""팀 서비스 — 팀 생성/조회 비즈니스 로직.

Team Service — Business logic for team creation and listing.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.team import Team
from app.repositories.team_repository import team_repository
from app.schemas.team import TeamCreate, TeamResponse
from app.utils.exceptions import DuplicateError


class TeamService:
    """팀 관련 비즈니스 로직을 처리하는 서비스.

    Service handling team business logic.
    """

    async def list_teams(self, db: AsyncSession) -> list[TeamResponse]:
        """모든 팀을 ID 순으로 조회합니다 (All teams ordered by id)."""
        teams = await team_repository.get_all(db)
        return [TeamResponse.model_validate(t) for t in teams]

    async def create_team(
        self,
        db: AsyncSession,
        data: TeamCreate,
    ) -> TeamResponse:
        """새 팀을 생성합니다.

        Create a new team.

        Raises:
            DuplicateError: 같은 이름의 팀이 이미 존재할 때
                            (When a team with the same name already exists)
        """
        # 팀 이름 중복 확인 — Check team name uniqueness
        if await team_repository.exists(db, {"name": data.name}):
            raise DuplicateError("A team with this name already exists")

        team: Team = await team_repository.create(db, {"name": data.name})
        return TeamResponse.model_validate(team)


# 싱글턴 인스턴스 — Singleton instance
team_service: TeamService = TeamService()
