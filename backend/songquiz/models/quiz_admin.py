"""QuizAdmin ORM — grants status-transition rights beyond the creator.

Invariants:
    - Unique on (quiz_id, user_id)
    - added_by records who granted the right (creator or another admin)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from songquiz.db.base import Base


class QuizAdmin(Base):
    __tablename__ = "quiz_admins"
    __table_args__ = (
        UniqueConstraint("quiz_id", "user_id", name="uq_quiz_admin"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    added_by: Mapped[str | None] = mapped_column(
        String(255), ForeignKey("users.id"), nullable=True,
    )
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="admins")
