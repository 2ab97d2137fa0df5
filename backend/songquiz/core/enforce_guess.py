"""Guess Enforcement — validates a guess and freezes its correctness.

Invariants:
    - Guesses are accepted only while the quiz is in the guessing phase
    - The target submission must belong to the same quiz as the guess
    - Only participants may guess, and never on their own submission
    - The guessed user does NOT have to be a participant (the guess is simply wrong)
    - is_correct is computed once, here, and stored with the guess

Design Decisions:
    - Check order is fixed (phase, ownership, membership, self-guess) so the same
      request always reports the same error
    - Repeated guesses on the same submission are allowed and all of them count;
      there is no "latest guess wins"
"""

from collections.abc import Collection, Iterable

from songquiz.core.domain_types import QuizStatus, UserId
from songquiz.core.errors import (
    ErrorContext,
    NotParticipantError,
    QuizNotInGuessingPhaseError,
    SelfGuessForbiddenError,
    SubmissionNotInQuizError,
)
from songquiz.core.records import Quiz, SongSubmission


def evaluate_guess(
    quiz: Quiz,
    guesser_id: UserId,
    submission: SongSubmission,
    guessed_user_id: UserId,
    participant_ids: Collection[UserId],
) -> bool:
    """Raise if the guess is not acceptable; otherwise return its correctness."""
    context = ErrorContext(
        quiz_id=quiz.id, user_id=guesser_id, submission_id=submission.id,
    )
    if quiz.status != QuizStatus.GUESSING:
        raise QuizNotInGuessingPhaseError(quiz.status.value, context)

    if submission.quiz_id != quiz.id:
        raise SubmissionNotInQuizError(context)

    if guesser_id not in participant_ids:
        raise NotParticipantError(context)

    if guesser_id == submission.user_id:
        raise SelfGuessForbiddenError(context)

    return guessed_user_id == submission.user_id


def guessable_submissions(
    submissions: Iterable[SongSubmission], user_id: UserId,
) -> list[SongSubmission]:
    """Submissions user_id may guess on: everything but their own, id ascending."""
    return sorted(
        (s for s in submissions if s.user_id != user_id),
        key=lambda s: s.id,
    )
