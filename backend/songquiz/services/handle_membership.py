"""Membership Handlers — join a quiz, list participants, grant and list admins.

Invariants:
    - join() is idempotent, also under concurrency: the row is written with
      INSERT .. ON CONFLICT DO NOTHING and then read back, so two simultaneous
      joins both return the same membership
    - add_admin() is idempotent the same way and requires creator or admin rights
    - Both record the acting user in the directory so names resolve later
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core import records
from songquiz.core.domain_types import QuizId, UserId
from songquiz.core.enforce_membership import check_can_add_admin, check_can_join
from songquiz.core.view_models import display_name
from songquiz.models.quiz_admin import QuizAdmin
from songquiz.models.quiz_participant import QuizParticipant
from songquiz.services.conflict_insert import conflict_insert
from songquiz.services.identity import Identity, UserDirectory
from songquiz.services.quiz_queries import admin_ids, get_quiz_or_404
from songquiz.services.record_mapping import (
    admin_record, participant_record, quiz_record,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NamedMember:
    user_id: UserId
    user_name: str
    since: datetime | None


class MembershipHandlers:
    """Participants and admins of a quiz."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = UserDirectory(db)

    async def join(self, quiz_id: QuizId, identity: Identity) -> records.Participant:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        if await self._participant(quiz_id, identity.user_id) is None:
            check_can_join(quiz, identity.user_id)

        await self.directory.remember(identity)
        result = await self.db.execute(
            conflict_insert(self.db, QuizParticipant.__table__)
            .values(
                quiz_id=quiz_id,
                user_id=identity.user_id,
                joined_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["quiz_id", "user_id"]),
        )
        await self.db.commit()
        if result.rowcount == 1:
            logger.info(
                "Participant joined",
                extra={"quiz_id": quiz_id, "user_id": identity.user_id},
            )
        return participant_record(
            await self._participant(quiz_id, identity.user_id),
        )

    async def list_participants(self, quiz_id: QuizId) -> list[NamedMember]:
        await get_quiz_or_404(self.db, quiz_id)
        result = await self.db.execute(
            select(QuizParticipant)
            .where(QuizParticipant.quiz_id == quiz_id)
            .order_by(QuizParticipant.joined_at, QuizParticipant.id),
        )
        rows = [participant_record(r) for r in result.scalars().all()]
        names = await self.directory.resolve_display_names(
            r.user_id for r in rows
        )
        return [
            NamedMember(r.user_id, display_name(names, r.user_id), r.joined_at)
            for r in rows
        ]

    async def add_admin(
        self, quiz_id: QuizId, identity: Identity, user_id: UserId,
    ) -> records.Admin:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        check_can_add_admin(
            quiz, identity.user_id, await admin_ids(self.db, quiz_id),
        )
        await self.directory.require(user_id)

        result = await self.db.execute(
            conflict_insert(self.db, QuizAdmin.__table__)
            .values(
                quiz_id=quiz_id,
                user_id=user_id,
                added_by=identity.user_id,
                added_at=datetime.now(timezone.utc),
            )
            .on_conflict_do_nothing(index_elements=["quiz_id", "user_id"]),
        )
        await self.db.commit()
        if result.rowcount == 1:
            logger.info(
                f"Admin {user_id} added",
                extra={"quiz_id": quiz_id, "user_id": identity.user_id},
            )
        row = await self.db.scalar(
            select(QuizAdmin)
            .where(QuizAdmin.quiz_id == quiz_id, QuizAdmin.user_id == user_id)
            .execution_options(populate_existing=True),
        )
        return admin_record(row)

    async def list_admins(self, quiz_id: QuizId) -> list[NamedMember]:
        await get_quiz_or_404(self.db, quiz_id)
        result = await self.db.execute(
            select(QuizAdmin)
            .where(QuizAdmin.quiz_id == quiz_id)
            .order_by(QuizAdmin.added_at, QuizAdmin.id),
        )
        rows = [admin_record(r) for r in result.scalars().all()]
        names = await self.directory.resolve_display_names(
            r.user_id for r in rows
        )
        return [
            NamedMember(r.user_id, display_name(names, r.user_id), r.added_at)
            for r in rows
        ]

    async def _participant(
        self, quiz_id: QuizId, user_id: UserId,
    ) -> QuizParticipant | None:
        return await self.db.scalar(
            select(QuizParticipant).where(
                QuizParticipant.quiz_id == quiz_id,
                QuizParticipant.user_id == user_id,
            )
            .execution_options(populate_existing=True),
        )
