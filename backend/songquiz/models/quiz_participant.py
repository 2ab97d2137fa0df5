"""QuizParticipant ORM — membership of a user in a quiz.

Invariants:
    - Unique on (quiz_id, user_id): joining twice is a no-op for the shell
    - Required to submit songs and to guess
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from songquiz.db.base import Base


class QuizParticipant(Base):
    __tablename__ = "quiz_participants"
    __table_args__ = (
        UniqueConstraint("quiz_id", "user_id", name="uq_quiz_participant"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="participants")
