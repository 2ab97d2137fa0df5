"""Transition compare-and-set tests — a stale writer never double-advances.

Tests cover:
    - Second identical transition fails with INVALID_TRANSITION
    - _compare_and_set refuses a write whose expected status is stale
    - Rejected transitions leave status and closed_at untouched
"""

from datetime import datetime, timezone

import pytest

from songquiz.core.domain_types import QuizStatus, UserId
from songquiz.core.errors import ForbiddenError, InvalidTransitionError
from songquiz.core.quiz_lifecycle import apply_transition
from songquiz.services.handle_lifecycle import LifecycleHandlers
from songquiz.services.identity import Identity
from songquiz.services.quiz_queries import get_quiz_or_404
from songquiz.services.record_mapping import quiz_record


OWNER = Identity(user_id=UserId("owner"), display_name="Owner")


async def test_second_identical_transition_fails(test_db):
    handlers = LifecycleHandlers(test_db)
    quiz = await handlers.create_quiz(OWNER, "race", None)

    moved = await handlers.transition(quiz.id, OWNER, QuizStatus.CLOSED)
    assert moved.status == QuizStatus.CLOSED

    with pytest.raises(InvalidTransitionError) as exc:
        await handlers.transition(quiz.id, OWNER, QuizStatus.CLOSED)
    assert exc.value.current == "closed"
    assert exc.value.target == "closed"


async def test_stale_compare_and_set_writes_nothing(test_db):
    handlers = LifecycleHandlers(test_db)
    quiz = await handlers.create_quiz(OWNER, "race", None)
    stale = quiz_record(await get_quiz_or_404(test_db, quiz.id))

    await handlers.transition(quiz.id, OWNER, QuizStatus.CLOSED)

    late = apply_transition(stale, QuizStatus.CLOSED, datetime.now(timezone.utc))
    assert await handlers._compare_and_set(stale, late) is False
    await test_db.rollback()

    current = quiz_record(await get_quiz_or_404(test_db, quiz.id))
    assert current.status == QuizStatus.CLOSED


async def test_forbidden_transition_writes_nothing(test_db):
    handlers = LifecycleHandlers(test_db)
    quiz = await handlers.create_quiz(OWNER, "race", None)
    outsider = Identity(user_id=UserId("outsider"))

    with pytest.raises(ForbiddenError):
        await handlers.transition(quiz.id, outsider, QuizStatus.CLOSED)

    current = quiz_record(await get_quiz_or_404(test_db, quiz.id))
    assert current.status == QuizStatus.OPEN
    assert current.closed_at is None
