"""Domain Types — verifies identity wrappers, status enum, and lifecycle order."""

from songquiz.core.domain_types import (
    QuizId, SubmissionId, GuessId, UserId,
    QuizStatus, STATUS_ORDER, RESULTS_VISIBLE_STATUSES,
)


def test_identity_types_wrap_primitives():
    assert QuizId(1) == 1
    assert SubmissionId(2) == 2
    assert GuessId(3) == 3
    assert UserId("u-1") == "u-1"


def test_quiz_status_has_four_states():
    assert set(QuizStatus) == {
        QuizStatus.OPEN,
        QuizStatus.CLOSED,
        QuizStatus.GUESSING,
        QuizStatus.COMPLETED,
    }


def test_status_order_is_fixed():
    assert [s.value for s in STATUS_ORDER] == [
        "open", "closed", "guessing", "completed",
    ]


def test_status_values_round_trip_from_db_strings():
    assert QuizStatus("guessing") is QuizStatus.GUESSING


def test_results_visible_only_after_guessing_starts():
    assert RESULTS_VISIBLE_STATUSES == {QuizStatus.GUESSING, QuizStatus.COMPLETED}
