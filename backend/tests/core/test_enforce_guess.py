"""Guess enforcement tests — phase, ownership, membership, self-guess, correctness.

Tests cover:
    - Each rejection with its error code, in the documented check order
    - Correctness frozen from the submission owner
    - Guesses about non-participants pass and are simply wrong
    - guessable_submissions hides the caller's own songs
"""

import pytest

from songquiz.core.domain_types import QuizId, QuizStatus, SubmissionId, UserId
from songquiz.core.enforce_guess import evaluate_guess, guessable_submissions
from songquiz.core.errors import (
    ErrorCode,
    NotParticipantError,
    QuizNotInGuessingPhaseError,
    SelfGuessForbiddenError,
    SubmissionNotInQuizError,
)
from songquiz.core.records import Quiz, SongSubmission


ALICE = UserId("alice")
BOB = UserId("bob")
CAROL = UserId("carol")
MEMBERS = {ALICE, BOB, CAROL}


def _quiz(status: QuizStatus = QuizStatus.GUESSING, quiz_id: int = 1) -> Quiz:
    return Quiz(id=QuizId(quiz_id), name="Q", created_by=ALICE, status=status)


def _song(owner: UserId = ALICE, quiz_id: int = 1, song_id: int = 10) -> SongSubmission:
    return SongSubmission(
        id=SubmissionId(song_id), quiz_id=QuizId(quiz_id),
        user_id=owner, song_link="https://example.com/song",
    )


def test_correct_guess_returns_true():
    assert evaluate_guess(_quiz(), BOB, _song(ALICE), ALICE, MEMBERS) is True


def test_wrong_guess_returns_false():
    assert evaluate_guess(_quiz(), BOB, _song(ALICE), CAROL, MEMBERS) is False


def test_guess_about_non_participant_is_accepted_and_wrong():
    assert evaluate_guess(
        _quiz(), BOB, _song(ALICE), UserId("ghost"), MEMBERS,
    ) is False


@pytest.mark.parametrize(
    "status", [QuizStatus.OPEN, QuizStatus.CLOSED, QuizStatus.COMPLETED],
)
def test_guess_outside_guessing_phase_fails(status):
    with pytest.raises(QuizNotInGuessingPhaseError) as exc:
        evaluate_guess(_quiz(status), BOB, _song(), ALICE, MEMBERS)
    assert exc.value.code == ErrorCode.QUIZ_NOT_IN_GUESSING_PHASE


def test_submission_from_other_quiz_fails():
    with pytest.raises(SubmissionNotInQuizError) as exc:
        evaluate_guess(_quiz(quiz_id=1), BOB, _song(quiz_id=2), ALICE, MEMBERS)
    assert exc.value.code == ErrorCode.SUBMISSION_NOT_IN_QUIZ
    assert exc.value.context.submission_id == 10


def test_non_participant_guesser_fails():
    with pytest.raises(NotParticipantError):
        evaluate_guess(_quiz(), UserId("lurker"), _song(), ALICE, MEMBERS)


def test_self_guess_fails_even_when_guessing():
    with pytest.raises(SelfGuessForbiddenError) as exc:
        evaluate_guess(_quiz(), ALICE, _song(ALICE), ALICE, MEMBERS)
    assert exc.value.code == ErrorCode.SELF_GUESS_FORBIDDEN


def test_self_guess_fails_whoever_is_accused():
    with pytest.raises(SelfGuessForbiddenError):
        evaluate_guess(_quiz(), ALICE, _song(ALICE), BOB, MEMBERS)


def test_phase_checked_before_ownership():
    with pytest.raises(QuizNotInGuessingPhaseError):
        evaluate_guess(
            _quiz(QuizStatus.OPEN, quiz_id=1), ALICE, _song(ALICE, quiz_id=2),
            ALICE, set(),
        )


def test_guessable_submissions_excludes_own_and_sorts():
    songs = [
        _song(BOB, song_id=30), _song(ALICE, song_id=5), _song(CAROL, song_id=12),
    ]
    result = guessable_submissions(songs, ALICE)
    assert [s.id for s in result] == [12, 30]
