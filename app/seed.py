"""초기 데이터 시드 스크립트 — 팀과 회원 생성.

Seed script — Creates sample teams and members for local runs.

Usage:
    python -m app.seed

Creates:
    - 2개 팀: teamA, teamB (2 teams)
    - 100명 회원: member0 ~ member99, 나이 0~99, 짝수는 teamA / 홀수는 teamB
      (100 members alternating between the two teams)
"""

import asyncio

from sqlalchemy import select

from app.database import async_session, engine, Base
from app.models import Member, Team

MEMBER_COUNT: int = 100


async def seed() -> None:
    """데이터베이스를 샘플 데이터로 시드합니다.

    Create tables if missing, then insert the sample teams and members.
    Idempotent: 팀이 이미 있으면 건너뜁니다 (Skips if any team exists).
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(Team).limit(1))
        if result.scalar_one_or_none():
            print("Already seeded. Skipping.")
            return

        team_a: Team = Team(name="teamA")
        team_b: Team = Team(name="teamB")
        db.add_all([team_a, team_b])
        await db.flush()  # flush로 team.id 생성 (Flush to generate team ids)

        for i in range(MEMBER_COUNT):
            team: Team = team_a if i % 2 == 0 else team_b
            db.add(Member(username=f"member{i}", age=i, team_id=team.id))

        await db.commit()
        print(f"Seeded: teams=2, members={MEMBER_COUNT}")


if __name__ == "__main__":
    asyncio.run(seed())
