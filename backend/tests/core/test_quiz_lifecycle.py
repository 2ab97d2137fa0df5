"""Quiz lifecycle tests — pure tests for transition rights and edges.

Tests cover:
    - next_status along open -> closed -> guessing -> completed
    - Creator and admins may transition, others get FORBIDDEN
    - Every non-successor target yields INVALID_TRANSITION
    - closed_at stamped on entering closed and kept afterwards
"""

from datetime import datetime, timezone

import pytest

from songquiz.core.domain_types import QuizId, QuizStatus, STATUS_ORDER, UserId
from songquiz.core.errors import (
    ErrorCode, ForbiddenError, InvalidTransitionError,
)
from songquiz.core.quiz_lifecycle import (
    apply_transition, can_manage, check_transition, next_status,
)
from songquiz.core.records import Quiz


OWNER = UserId("owner")
ADMIN = UserId("admin")
STRANGER = UserId("stranger")
NOW = datetime(2026, 5, 1, 20, 0, tzinfo=timezone.utc)


def _quiz(status: QuizStatus = QuizStatus.OPEN, closed_at=None) -> Quiz:
    return Quiz(
        id=QuizId(1), name="Friday songs", created_by=OWNER,
        status=status, closed_at=closed_at,
    )


# --- next_status --------------------------------------------------------------

def test_next_status_walks_the_chain():
    assert next_status(QuizStatus.OPEN) == QuizStatus.CLOSED
    assert next_status(QuizStatus.CLOSED) == QuizStatus.GUESSING
    assert next_status(QuizStatus.GUESSING) == QuizStatus.COMPLETED


def test_completed_is_terminal():
    assert next_status(QuizStatus.COMPLETED) is None


# --- rights -------------------------------------------------------------------

def test_creator_can_manage():
    assert can_manage(_quiz(), OWNER, set())


def test_admin_can_manage():
    assert can_manage(_quiz(), ADMIN, {ADMIN})


def test_stranger_cannot_manage():
    assert not can_manage(_quiz(), STRANGER, {ADMIN})


def test_stranger_transition_is_forbidden():
    with pytest.raises(ForbiddenError) as exc:
        check_transition(_quiz(), STRANGER, {ADMIN}, QuizStatus.CLOSED)
    assert exc.value.code == ErrorCode.FORBIDDEN
    assert exc.value.http_status == 403


def test_rights_checked_before_edge():
    # Invalid edge AND no rights: the rights failure wins
    with pytest.raises(ForbiddenError):
        check_transition(_quiz(), STRANGER, set(), QuizStatus.COMPLETED)


def test_admin_may_transition():
    check_transition(_quiz(), ADMIN, {ADMIN}, QuizStatus.CLOSED)


# --- edges --------------------------------------------------------------------

@pytest.mark.parametrize("current", list(QuizStatus))
@pytest.mark.parametrize("target", list(QuizStatus))
def test_only_immediate_successor_is_allowed(current, target):
    quiz = _quiz(current)
    if target == next_status(current):
        check_transition(quiz, OWNER, set(), target)
    else:
        with pytest.raises(InvalidTransitionError) as exc:
            check_transition(quiz, OWNER, set(), target)
        assert exc.value.code == ErrorCode.INVALID_TRANSITION
        assert exc.value.current == current.value
        assert exc.value.target == target.value


def test_same_state_is_invalid():
    with pytest.raises(InvalidTransitionError):
        check_transition(_quiz(QuizStatus.CLOSED), OWNER, set(), QuizStatus.CLOSED)


def test_backward_is_invalid():
    with pytest.raises(InvalidTransitionError):
        check_transition(_quiz(QuizStatus.GUESSING), OWNER, set(), QuizStatus.OPEN)


def test_skip_is_invalid():
    with pytest.raises(InvalidTransitionError):
        check_transition(_quiz(QuizStatus.OPEN), OWNER, set(), QuizStatus.GUESSING)


# --- apply_transition ---------------------------------------------------------

def test_entering_closed_stamps_closed_at():
    moved = apply_transition(_quiz(), QuizStatus.CLOSED, NOW)
    assert moved.status == QuizStatus.CLOSED
    assert moved.closed_at == NOW


def test_later_transitions_keep_closed_at():
    later = datetime(2026, 5, 2, tzinfo=timezone.utc)
    closed = _quiz(QuizStatus.CLOSED, closed_at=NOW)
    guessing = apply_transition(closed, QuizStatus.GUESSING, later)
    completed = apply_transition(guessing, QuizStatus.COMPLETED, later)
    assert guessing.closed_at == NOW
    assert completed.closed_at == NOW


def test_apply_does_not_mutate_input():
    quiz = _quiz()
    apply_transition(quiz, QuizStatus.CLOSED, NOW)
    assert quiz.status == QuizStatus.OPEN
    assert quiz.closed_at is None


def test_full_walk_keeps_closed_at_invariant():
    quiz = _quiz()
    assert quiz.closed_at is None
    for target in STATUS_ORDER[1:]:
        check_transition(quiz, OWNER, set(), target)
        quiz = apply_transition(quiz, target, NOW)
        assert quiz.closed_at is not None
    assert quiz.status == QuizStatus.COMPLETED
