"""팀 SQLAlchemy ORM 모델 정의.

Team SQLAlchemy ORM model definition.

Tables:
    - teams: 회원이 소속되는 팀 (Team that members belong to)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Team(Base):
    """팀 모델 — 회원의 소속 단위.

    Team model — Group that members optionally belong to.

    Attributes:
        id: 고유 식별자 (Auto-increment primary key)
        name: 팀 이름 (Team name)

    Relationships:
        members: 소속 회원 목록 (Members assigned to this team)
    """

    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    members = relationship("Member", back_populates="team")

    def __repr__(self) -> str:
        return f"Team(id={self.id}, name={self.name!r})"
