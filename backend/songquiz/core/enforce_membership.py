"""Membership Enforcement — joining, admin grants, deletion, and who sees what.

Invariants:
    - Joining is allowed in every phase except completed
    - Only the creator or an existing admin may grant admin rights
    - Only the creator may delete a quiz
    - Song listings and leaderboards are for participants and managers only
    - Leaderboards are visible from guessing onwards
    - Answers (submitters, per-bucket correctness) reach players only once the
      quiz is completed; managers see them during guessing to run the reveal

Design Decisions:
    - Late joiners are allowed: they can still guess once guessing starts,
      they just missed the submission window
    - A player asking for answers mid-game gets RESULTS_NOT_AVAILABLE, the same
      code as asking for a leaderboard before guessing: "not yet", not "never"
"""

from collections.abc import Collection

from songquiz.core.domain_types import (
    ANSWERS_PUBLIC_STATUSES, QuizStatus, RESULTS_VISIBLE_STATUSES, UserId,
)
from songquiz.core.errors import (
    ErrorContext,
    ForbiddenError,
    NotParticipantError,
    QuizCompletedError,
    ResultsNotAvailableError,
)
from songquiz.core.quiz_lifecycle import can_manage
from songquiz.core.records import Quiz


def check_can_join(quiz: Quiz, user_id: UserId) -> None:
    if quiz.status == QuizStatus.COMPLETED:
        raise QuizCompletedError(ErrorContext(quiz_id=quiz.id, user_id=user_id))


def check_can_add_admin(
    quiz: Quiz, acting_user_id: UserId, admin_ids: Collection[UserId],
) -> None:
    if not can_manage(quiz, acting_user_id, admin_ids):
        raise ForbiddenError(
            "add quiz admins",
            ErrorContext(quiz_id=quiz.id, user_id=acting_user_id),
        )


def check_can_delete(quiz: Quiz, acting_user_id: UserId) -> None:
    if acting_user_id != quiz.created_by:
        raise ForbiddenError(
            "delete this quiz",
            ErrorContext(quiz_id=quiz.id, user_id=acting_user_id),
        )


def check_is_member(
    quiz: Quiz,
    viewer_id: UserId,
    participant_ids: Collection[UserId],
    admin_ids: Collection[UserId],
) -> None:
    """Raise NOT_PARTICIPANT unless viewer_id has joined or manages quiz."""
    if viewer_id not in participant_ids and not can_manage(
        quiz, viewer_id, admin_ids,
    ):
        raise NotParticipantError(ErrorContext(quiz_id=quiz.id, user_id=viewer_id))


def check_results_visible(
    quiz: Quiz,
    viewer_id: UserId,
    participant_ids: Collection[UserId],
    admin_ids: Collection[UserId],
    reveals_answers: bool = False,
) -> None:
    """Raise unless viewer_id may see results now.

    reveals_answers marks views that name submitters or correctness
    (distribution, combined results); the leaderboard does not.
    """
    context = ErrorContext(quiz_id=quiz.id, user_id=viewer_id)
    if quiz.status not in RESULTS_VISIBLE_STATUSES:
        raise ResultsNotAvailableError(quiz.status.value, context)
    check_is_member(quiz, viewer_id, participant_ids, admin_ids)
    if (
        reveals_answers
        and quiz.status not in ANSWERS_PUBLIC_STATUSES
        and not can_manage(quiz, viewer_id, admin_ids)
    ):
        raise ResultsNotAvailableError(quiz.status.value, context)
