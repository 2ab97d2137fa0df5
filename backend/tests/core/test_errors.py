"""Error hierarchy tests — codes, HTTP statuses, response envelope."""

import pytest

from songquiz.core.errors import (
    AuthenticationRequiredError,
    DatabaseError,
    ErrorCategory,
    ErrorCode,
    ErrorContext,
    ErrorSeverity,
    ForbiddenError,
    InvalidTransitionError,
    NotParticipantError,
    QuizCompletedError,
    QuizNotInGuessingPhaseError,
    QuizNotOpenError,
    ResourceNotFoundError,
    ResultsNotAvailableError,
    SelfGuessForbiddenError,
    SongQuizError,
    SubmissionNotInQuizError,
)


@pytest.mark.parametrize(
    ("error", "code", "status"),
    [
        (ForbiddenError("do that"), ErrorCode.FORBIDDEN, 403),
        (InvalidTransitionError("open", "guessing"), ErrorCode.INVALID_TRANSITION, 409),
        (QuizNotOpenError("closed"), ErrorCode.QUIZ_NOT_OPEN, 409),
        (QuizNotInGuessingPhaseError("open"), ErrorCode.QUIZ_NOT_IN_GUESSING_PHASE, 409),
        (NotParticipantError(), ErrorCode.NOT_PARTICIPANT, 403),
        (SubmissionNotInQuizError(), ErrorCode.SUBMISSION_NOT_IN_QUIZ, 400),
        (SelfGuessForbiddenError(), ErrorCode.SELF_GUESS_FORBIDDEN, 400),
        (QuizCompletedError(), ErrorCode.QUIZ_COMPLETED, 409),
        (ResultsNotAvailableError("open"), ErrorCode.RESULTS_NOT_AVAILABLE, 409),
        (AuthenticationRequiredError(), ErrorCode.AUTHENTICATION_REQUIRED, 401),
        (ResourceNotFoundError("Quiz", "9"), ErrorCode.RESOURCE_NOT_FOUND, 404),
        (DatabaseError("boom", "commit"), ErrorCode.DATABASE_ERROR, 503),
    ],
)
def test_error_code_and_status(error, code, status):
    assert isinstance(error, SongQuizError)
    assert error.code == code
    assert error.http_status == status


def test_invalid_transition_keeps_both_statuses():
    error = InvalidTransitionError("open", "guessing")
    assert (error.current, error.target) == ("open", "guessing")
    assert "open" in error.message and "guessing" in error.message


def test_response_envelope_carries_context():
    error = NotParticipantError(ErrorContext(quiz_id=4, user_id="bob"))
    body = error.to_response()["error"]
    assert body["code"] == "NOT_PARTICIPANT"
    assert body["category"] == ErrorCategory.AUTHORIZATION.value
    assert body["severity"] == ErrorSeverity.WARNING.value
    assert body["context"] == {"quiz_id": 4, "user_id": "bob", "submission_id": None}
    assert "timestamp" in body


def test_database_error_is_critical():
    assert DatabaseError("gone", "query").severity == ErrorSeverity.CRITICAL
