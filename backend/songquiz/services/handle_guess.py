"""Guess Handlers — the write side of the guess ledger.

Invariants:
    - is_correct is computed by evaluate_guess at acceptance and stored as-is
    - A submission id that does not exist at all is RESOURCE_NOT_FOUND;
      one that exists in another quiz is SUBMISSION_NOT_IN_QUIZ
    - Every accepted guess is a new row; earlier guesses are never replaced
    - An accepted guess refreshes the guesser's display name in the directory
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core import records
from songquiz.core.domain_types import QuizId, SubmissionId, UserId
from songquiz.core.enforce_guess import evaluate_guess
from songquiz.core.errors import ErrorContext, ResourceNotFoundError
from songquiz.models.guess import Guess
from songquiz.models.song_submission import SongSubmission
from songquiz.services.identity import Identity, UserDirectory
from songquiz.services.quiz_queries import get_quiz_or_404, participant_ids
from songquiz.services.record_mapping import (
    guess_record, quiz_record, submission_record,
)

logger = logging.getLogger(__name__)


class GuessHandlers:
    """Guess ledger writes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = UserDirectory(db)

    async def record_guess(
        self,
        quiz_id: QuizId,
        identity: Identity,
        submission_id: SubmissionId,
        guessed_user_id: UserId,
    ) -> records.Guess:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        submission_row = await self.db.get(SongSubmission, submission_id)
        if submission_row is None:
            raise ResourceNotFoundError(
                "Song submission", str(submission_id),
                ErrorContext(quiz_id=quiz_id, submission_id=submission_id),
            )

        is_correct = evaluate_guess(
            quiz,
            identity.user_id,
            submission_record(submission_row),
            guessed_user_id,
            await participant_ids(self.db, quiz_id),
        )
        await self.directory.remember(identity)
        row = Guess(
            quiz_id=quiz_id,
            guesser_id=identity.user_id,
            song_submission_id=submission_id,
            guessed_user_id=guessed_user_id,
            is_correct=is_correct,
        )
        self.db.add(row)
        await self.db.commit()
        logger.info(
            "Guess recorded",
            extra={
                "quiz_id": quiz_id,
                "user_id": identity.user_id,
                "submission_id": submission_id,
            },
        )
        return guess_record(row)
