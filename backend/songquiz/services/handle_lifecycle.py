"""Lifecycle Handlers — create, list, inspect, delete, and advance quizzes.

Invariants:
    - New quizzes start open; the creator is recorded as owner and auto-joined
    - transition() re-reads the quiz before deciding, then writes with
      compare-and-set on (id, expected status): of two concurrent identical
      transitions exactly one succeeds, the other gets INVALID_TRANSITION
    - Nothing is written when a check fails

Design Decisions:
    - Compare-and-set over row locks: works the same on PostgreSQL and SQLite,
      and the losing writer gets the same error as any stale request
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core import records
from songquiz.core.domain_types import QuizId, QuizStatus
from songquiz.core.enforce_membership import check_can_delete
from songquiz.core.errors import ErrorContext, InvalidTransitionError
from songquiz.core.quiz_lifecycle import (
    apply_transition, can_manage, check_transition, next_status,
)
from songquiz.models.quiz import Quiz as QuizModel
from songquiz.models.quiz_participant import QuizParticipant
from songquiz.models.song_submission import SongSubmission
from songquiz.services.identity import Identity, UserDirectory
from songquiz.services.quiz_queries import (
    admin_ids, get_quiz_or_404, participant_ids,
)
from songquiz.services.record_mapping import quiz_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuizOverview:
    """Quiz plus the counts and viewer flags the detail page shows."""
    quiz: records.Quiz
    participant_count: int
    submission_count: int
    is_participant: bool
    can_manage: bool
    next_status: QuizStatus | None


class LifecycleHandlers:
    """Quiz CRUD and status transitions."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = UserDirectory(db)

    async def create_quiz(
        self, identity: Identity, name: str, description: str | None,
    ) -> records.Quiz:
        await self.directory.remember(identity)
        row = QuizModel(
            name=name,
            description=description,
            created_by=identity.user_id,
            status=QuizStatus.OPEN.value,
            participants=[QuizParticipant(user_id=identity.user_id)],
        )
        self.db.add(row)
        await self.db.commit()
        logger.info(
            f"Quiz created: {name}",
            extra={"quiz_id": row.id, "user_id": identity.user_id},
        )
        return quiz_record(row)

    async def list_quizzes(
        self, limit: int, offset: int, status: QuizStatus | None = None,
    ) -> list[records.Quiz]:
        query = select(QuizModel).order_by(
            QuizModel.created_at.desc(), QuizModel.id.desc(),
        )
        if status is not None:
            query = query.where(QuizModel.status == status.value)
        result = await self.db.execute(query.limit(limit).offset(offset))
        return [quiz_record(row) for row in result.scalars().all()]

    async def get_overview(
        self, quiz_id: QuizId, identity: Identity,
    ) -> QuizOverview:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        members = await participant_ids(self.db, quiz_id)
        admins = await admin_ids(self.db, quiz_id)
        submission_count = await self.db.scalar(
            select(func.count(SongSubmission.id))
            .where(SongSubmission.quiz_id == quiz_id),
        )
        return QuizOverview(
            quiz=quiz,
            participant_count=len(members),
            submission_count=submission_count or 0,
            is_participant=identity.user_id in members,
            can_manage=can_manage(quiz, identity.user_id, admins),
            next_status=next_status(quiz.status),
        )

    async def delete_quiz(self, quiz_id: QuizId, identity: Identity) -> None:
        row = await get_quiz_or_404(self.db, quiz_id)
        check_can_delete(quiz_record(row), identity.user_id)
        await self.db.delete(row)
        await self.db.commit()
        logger.info(
            "Quiz deleted", extra={"quiz_id": quiz_id, "user_id": identity.user_id},
        )

    async def transition(
        self, quiz_id: QuizId, identity: Identity, target: QuizStatus,
    ) -> records.Quiz:
        """Advance quiz one step. Raises FORBIDDEN or INVALID_TRANSITION."""
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        admins = await admin_ids(self.db, quiz_id)
        check_transition(quiz, identity.user_id, admins, target)

        moved = apply_transition(quiz, target, datetime.now(timezone.utc))
        if not await self._compare_and_set(quiz, moved):
            raise InvalidTransitionError(
                quiz.status.value, target.value,
                ErrorContext(quiz_id=quiz_id, user_id=identity.user_id),
            )
        await self.db.commit()
        logger.info(
            f"Quiz moved {quiz.status.value} -> {moved.status.value}",
            extra={
                "quiz_id": quiz_id,
                "user_id": identity.user_id,
                "target_status": moved.status.value,
            },
        )
        return moved

    async def _compare_and_set(
        self, expected: records.Quiz, moved: records.Quiz,
    ) -> bool:
        """Write moved only if the row still has expected's status."""
        result = await self.db.execute(
            update(QuizModel)
            .where(
                QuizModel.id == expected.id,
                QuizModel.status == expected.status.value,
            )
            .values(status=moved.status.value, closed_at=moved.closed_at)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount == 1
