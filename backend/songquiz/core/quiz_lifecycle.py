"""Quiz Lifecycle — validates and applies status transitions.

Invariants:
    - Transitions go exactly one step forward: open -> closed -> guessing -> completed
    - No back-transitions, no skips, no re-entering the current state
    - Only the creator or an admin may trigger a transition
    - Entering closed stamps closed_at; later transitions keep it
    - All functions are PURE: the shell re-reads status and writes with compare-and-set

Design Decisions:
    - Rights checked before the edge: a stranger learns nothing about quiz state
    - Raise typed errors (not error dicts): the HTTP layer maps them uniformly
"""

from collections.abc import Collection
from dataclasses import replace
from datetime import datetime

from songquiz.core.domain_types import QuizStatus, STATUS_ORDER, UserId
from songquiz.core.errors import (
    ErrorContext, ForbiddenError, InvalidTransitionError,
)
from songquiz.core.records import Quiz


def next_status(status: QuizStatus) -> QuizStatus | None:
    """Immediate successor of status, or None for the terminal state."""
    index = STATUS_ORDER.index(status)
    if index + 1 >= len(STATUS_ORDER):
        return None
    return STATUS_ORDER[index + 1]


def can_manage(
    quiz: Quiz, user_id: UserId, admin_ids: Collection[UserId],
) -> bool:
    return user_id == quiz.created_by or user_id in admin_ids


def check_transition(
    quiz: Quiz,
    acting_user_id: UserId,
    admin_ids: Collection[UserId],
    target: QuizStatus,
) -> None:
    """Raise unless acting_user_id may move quiz to target right now."""
    context = ErrorContext(quiz_id=quiz.id, user_id=acting_user_id)
    if not can_manage(quiz, acting_user_id, admin_ids):
        raise ForbiddenError("change the quiz status", context)

    if target != next_status(quiz.status):
        raise InvalidTransitionError(quiz.status.value, target.value, context)


def apply_transition(quiz: Quiz, target: QuizStatus, now: datetime) -> Quiz:
    """Return quiz moved to target. Caller must have run check_transition."""
    closed_at = now if target == QuizStatus.CLOSED else quiz.closed_at
    return replace(quiz, status=target, closed_at=closed_at)
