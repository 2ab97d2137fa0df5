"""SongSubmission ORM — one song entered anonymously by a participant.

Invariants:
    - Always belongs to a Quiz (quiz_id FK, ON DELETE CASCADE)
    - Created only while the quiz is open; immutable afterwards
    - No uniqueness on (quiz_id, user_id): several songs per participant allowed

Design Decisions:
    - Owns its guesses (cascade): deleting a quiz removes guesses before songs
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from songquiz.db.base import Base


class SongSubmission(Base):
    """Song submission — link plus optional title/artist."""
    __tablename__ = "song_submissions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    quiz_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("quizzes.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
    )
    song_link: Mapped[str] = mapped_column(Text, nullable=False)
    song_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    artist: Mapped[str | None] = mapped_column(String(300), nullable=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    quiz: Mapped["Quiz"] = relationship("Quiz", back_populates="submissions")
    guesses: Mapped[list["Guess"]] = relationship(
        "Guess", back_populates="submission",
        cascade="all, delete-orphan", lazy="selectin",
    )
