"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh engine (StaticPool keeps the single in-memory
connection alive), so no cleanup between tests is needed.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEBUG", "false")

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Member, Team  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성합니다."""
    eng = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def teams(db: AsyncSession) -> dict[str, Team]:
    """teamA, teamB 두 팀을 생성합니다."""
    result = {}
    for name in ("teamA", "teamB"):
        team = Team(name=name)
        db.add(team)
        await db.flush()
        await db.refresh(team)
        result[name] = team
    return result


@pytest_asyncio.fixture
async def members(db: AsyncSession, teams) -> list[Member]:
    """회원 4명을 생성합니다: member1/2는 teamA(10, 20), member3/4는 teamB(30, 40)."""
    rows = [
        ("member1", 10, teams["teamA"]),
        ("member2", 20, teams["teamA"]),
        ("member3", 30, teams["teamB"]),
        ("member4", 40, teams["teamB"]),
    ]
    result = []
    for username, age, team in rows:
        member = Member(username=username, age=age, team_id=team.id)
        db.add(member)
        await db.flush()
        await db.refresh(member)
        result.append(member)
    await db.commit()
    return result


@pytest_asyncio.fixture
async def teamless_member(db: AsyncSession, members) -> Member:
    """팀이 없는 회원을 추가로 생성합니다."""
    member = Member(username="loner", age=50)
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return member
