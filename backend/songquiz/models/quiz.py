"""Quiz ORM — persists the aggregate root of one guessing round.

Invariants:
    - id is autoincrement integer primary key
    - status is one of open | closed | guessing | completed (QuizStatus values)
    - closed_at is set iff status != open
    - status only changes through LifecycleHandlers.transition (compare-and-set)

Design Decisions:
    - cascade delete for submissions, participants, admins: quiz owns all of them
    - selectin loading: async sessions cannot lazy-load, and delete cascades need
      the children in the identity map
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from songquiz.core.domain_types import QuizStatus
from songquiz.db.base import Base


class Quiz(Base):
    """Quiz aggregate root — owns submissions, guesses, participants, admins."""
    __tablename__ = "quizzes"
    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'closed', 'guessing', 'completed')",
            name="ck_quizzes_status",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=QuizStatus.OPEN.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    closed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    # Relationships
    submissions: Mapped[list["SongSubmission"]] = relationship(
        "SongSubmission", back_populates="quiz",
        cascade="all, delete-orphan", lazy="selectin",
    )
    participants: Mapped[list["QuizParticipant"]] = relationship(
        "QuizParticipant", back_populates="quiz",
        cascade="all, delete-orphan", lazy="selectin",
    )
    admins: Mapped[list["QuizAdmin"]] = relationship(
        "QuizAdmin", back_populates="quiz",
        cascade="all, delete-orphan", lazy="selectin",
    )
