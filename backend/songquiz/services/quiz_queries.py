"""Quiz Queries — shared reads used by every handler.

Invariants:
    - Reads only; never flush or commit
    - get_quiz_or_404 always hits the DB (populate_existing): status gates must
      see the committed state, not a stale identity-map copy
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core.domain_types import QuizId, UserId
from songquiz.core.errors import ErrorContext, ResourceNotFoundError
from songquiz.models.guess import Guess
from songquiz.models.quiz import Quiz
from songquiz.models.quiz_admin import QuizAdmin
from songquiz.models.quiz_participant import QuizParticipant
from songquiz.models.song_submission import SongSubmission


async def get_quiz_or_404(db: AsyncSession, quiz_id: QuizId) -> Quiz:
    result = await db.execute(
        select(Quiz)
        .where(Quiz.id == quiz_id)
        .execution_options(populate_existing=True),
    )
    quiz = result.scalar_one_or_none()
    if quiz is None:
        raise ResourceNotFoundError(
            "Quiz", str(quiz_id), ErrorContext(quiz_id=quiz_id),
        )
    return quiz


async def participant_ids(db: AsyncSession, quiz_id: QuizId) -> set[UserId]:
    result = await db.execute(
        select(QuizParticipant.user_id).where(QuizParticipant.quiz_id == quiz_id),
    )
    return {UserId(uid) for uid in result.scalars().all()}


async def admin_ids(db: AsyncSession, quiz_id: QuizId) -> set[UserId]:
    result = await db.execute(
        select(QuizAdmin.user_id).where(QuizAdmin.quiz_id == quiz_id),
    )
    return {UserId(uid) for uid in result.scalars().all()}


async def submissions_for(
    db: AsyncSession, quiz_id: QuizId,
) -> list[SongSubmission]:
    result = await db.execute(
        select(SongSubmission)
        .where(SongSubmission.quiz_id == quiz_id)
        .order_by(SongSubmission.id),
    )
    return list(result.scalars().all())


async def guesses_for(db: AsyncSession, quiz_id: QuizId) -> list[Guess]:
    result = await db.execute(
        select(Guess)
        .where(Guess.quiz_id == quiz_id)
        .order_by(Guess.guessed_at, Guess.id),
    )
    return list(result.scalars().all())
