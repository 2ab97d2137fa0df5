"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - QuizId, SubmissionId, GuessId wrap storage-assigned integers
    - UserId wraps the identity provider's opaque string id
    - Quiz lifecycle order is fixed: open -> closed -> guessing -> completed

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

QuizId = NewType("QuizId", int)
SubmissionId = NewType("SubmissionId", int)
GuessId = NewType("GuessId", int)
UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class QuizStatus(str, Enum):
    """Quiz lifecycle states — maps to DB `status` column."""
    OPEN = "open"
    CLOSED = "closed"
    GUESSING = "guessing"
    COMPLETED = "completed"


STATUS_ORDER: tuple[QuizStatus, ...] = (
    QuizStatus.OPEN,
    QuizStatus.CLOSED,
    QuizStatus.GUESSING,
    QuizStatus.COMPLETED,
)

# Leaderboards exist once guessing starts
RESULTS_VISIBLE_STATUSES: frozenset[QuizStatus] = frozenset(
    {QuizStatus.GUESSING, QuizStatus.COMPLETED},
)

# Submitters and per-guess correctness are the answers: players see them
# only after the quiz is completed, managers already while guessing
ANSWERS_PUBLIC_STATUSES: frozenset[QuizStatus] = frozenset(
    {QuizStatus.COMPLETED},
)
