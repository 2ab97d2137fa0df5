"""Submission Handlers — submit songs, list songs for guessing, list own songs.

Invariants:
    - submit() persists only after check_submission_allowed passes
    - The stored record is returned unchanged (no computed fields)
    - list_for_guessing() is for participants and managers only; it never
      exposes who submitted what and hides the caller's own songs
    - submit() refreshes the caller's display name in the directory
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core import records
from songquiz.core.domain_types import QuizId
from songquiz.core.enforce_guess import guessable_submissions
from songquiz.core.enforce_membership import check_is_member
from songquiz.core.enforce_submission import (
    check_submission_allowed, normalize_song_fields,
)
from songquiz.models.song_submission import SongSubmission
from songquiz.services.identity import Identity, UserDirectory
from songquiz.services.quiz_queries import (
    admin_ids, get_quiz_or_404, participant_ids, submissions_for,
)
from songquiz.services.record_mapping import quiz_record, submission_record

logger = logging.getLogger(__name__)


class SubmissionHandlers:
    """Song submission registry."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.directory = UserDirectory(db)

    async def submit(
        self,
        quiz_id: QuizId,
        identity: Identity,
        song_link: str,
        song_title: str | None = None,
        artist: str | None = None,
    ) -> records.SongSubmission:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        check_submission_allowed(
            quiz, identity.user_id, await participant_ids(self.db, quiz_id),
        )

        await self.directory.remember(identity)
        link, title, artist = normalize_song_fields(song_link, song_title, artist)
        row = SongSubmission(
            quiz_id=quiz_id,
            user_id=identity.user_id,
            song_link=link,
            song_title=title,
            artist=artist,
        )
        self.db.add(row)
        await self.db.commit()
        logger.info(
            "Song submitted",
            extra={
                "quiz_id": quiz_id,
                "user_id": identity.user_id,
                "submission_id": row.id,
            },
        )
        return submission_record(row)

    async def list_for_guessing(
        self, quiz_id: QuizId, identity: Identity,
    ) -> list[records.SongSubmission]:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        check_is_member(
            quiz,
            identity.user_id,
            await participant_ids(self.db, quiz_id),
            await admin_ids(self.db, quiz_id),
        )
        rows = await submissions_for(self.db, quiz_id)
        return guessable_submissions(
            (submission_record(r) for r in rows), identity.user_id,
        )

    async def list_mine(
        self, quiz_id: QuizId, identity: Identity,
    ) -> list[records.SongSubmission]:
        await get_quiz_or_404(self.db, quiz_id)
        result = await self.db.execute(
            select(SongSubmission)
            .where(
                SongSubmission.quiz_id == quiz_id,
                SongSubmission.user_id == identity.user_id,
            )
            .order_by(SongSubmission.id),
        )
        return [submission_record(r) for r in result.scalars().all()]
