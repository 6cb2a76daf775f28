"""회원 SQLAlchemy ORM 모델 정의.

Member SQLAlchemy ORM model definition.

Tables:
    - members: 회원 (Member with optional team foreign key)
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Member(Base):
    """회원 모델 — 팀에 선택적으로 소속됩니다.

    Member model — Optionally belongs to a single Team (many-to-one).
    The team relationship is a plain foreign key without cascade rules.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        username: 회원 이름 (Member name, nullable)
        age: 나이 (Age)
        team_id: 소속 팀 FK (Team foreign key, nullable)

    Relationships:
        team: 소속 팀 (Owning team, lazy-loaded)
    """

    __tablename__ = "members"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    team_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("teams.id"), nullable=True)

    team = relationship("Team", back_populates="members")

    def __repr__(self) -> str:
        return f"Member(id={self.id}, username={self.username!r}, age={self.age})"
