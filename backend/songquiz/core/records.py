"""Quiz Records — plain, immutable shapes passed between shell and core.

Invariants:
    - Records are frozen: the core never mutates what the shell hands it
    - Quiz.closed_at is set iff Quiz.status != open
    - Guess.is_correct is fixed when the guess is accepted, never recomputed

Design Decisions:
    - Frozen dataclasses over ORM objects: core stays importable without SQLAlchemy
      and testable without a DB
    - State changes return new records (dataclasses.replace), the shell persists them
"""

from dataclasses import dataclass
from datetime import datetime

from songquiz.core.domain_types import (
    QuizId, SubmissionId, GuessId, UserId, QuizStatus,
)


@dataclass(frozen=True)
class Quiz:
    id: QuizId
    name: str
    created_by: UserId
    status: QuizStatus = QuizStatus.OPEN
    description: str | None = None
    created_at: datetime | None = None
    closed_at: datetime | None = None


@dataclass(frozen=True)
class SongSubmission:
    id: SubmissionId
    quiz_id: QuizId
    user_id: UserId
    song_link: str
    song_title: str | None = None
    artist: str | None = None
    submitted_at: datetime | None = None


@dataclass(frozen=True)
class Guess:
    id: GuessId
    quiz_id: QuizId
    guesser_id: UserId
    song_submission_id: SubmissionId
    guessed_user_id: UserId
    is_correct: bool | None = None
    guessed_at: datetime | None = None


@dataclass(frozen=True)
class Participant:
    quiz_id: QuizId
    user_id: UserId
    joined_at: datetime | None = None


@dataclass(frozen=True)
class Admin:
    quiz_id: QuizId
    user_id: UserId
    added_by: UserId | None = None
    added_at: datetime | None = None
