"""Guess ORM — one participant's claim about who submitted a song.

Invariants:
    - quiz_id equals the target submission's quiz_id (checked by the core, not the DB)
    - is_correct is written once at acceptance and never recomputed
    - No uniqueness on (guesser_id, song_submission_id): every guess counts

Design Decisions:
    - quiz_id denormalized onto the guess: leaderboard reads one table by quiz
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from songquiz.db.base import Base


class Guess(Base):
    """Guess ledger row."""
    __tablename__ = "guesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    guesser_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    song_submission_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("song_submissions.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    # Not a FK: a guess may name someone who never signed in here
    guessed_user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    is_correct: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    guessed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    submission: Mapped["SongSubmission"] = relationship(
        "SongSubmission", back_populates="guesses",
    )
