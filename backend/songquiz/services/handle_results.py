"""Results Handlers — read-only projections for the reveal and leaderboard screens.

Invariants:
    - Never write: load a snapshot, resolve names once, call pure aggregators
    - Display names resolved with ONE resolver call per request
    - Visible only from guessing onwards, to participants and managers
    - distribution() and results() name submitters: during guessing only
      managers get them, players wait for completed

Design Decisions:
    - Resolver injected (DisplayNameResolver): the directory is the default,
      tests and other identity providers can pass their own
"""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.core import records
from songquiz.core.distribution import build_distribution, collect_user_ids
from songquiz.core.domain_types import QuizId
from songquiz.core.enforce_membership import check_results_visible
from songquiz.core.leaderboard import build_leaderboard
from songquiz.core.quiz_stats import compute_quiz_stats
from songquiz.core.repository_protocols import DisplayNameResolver
from songquiz.core.view_models import LeaderboardEntry, QuizStats, SubmissionView
from songquiz.services.identity import Identity, UserDirectory
from songquiz.services.quiz_queries import (
    admin_ids, get_quiz_or_404, guesses_for, participant_ids, submissions_for,
)
from songquiz.services.record_mapping import (
    guess_record, quiz_record, submission_record,
)


@dataclass(frozen=True)
class QuizResults:
    quiz: records.Quiz
    stats: QuizStats
    leaderboard: list[LeaderboardEntry]
    submissions: list[SubmissionView]


@dataclass(frozen=True)
class _Snapshot:
    quiz: records.Quiz
    submissions: list[records.SongSubmission]
    guesses: list[records.Guess]


class ResultsHandlers:
    """Distribution, leaderboard, and combined results."""

    def __init__(
        self, db: AsyncSession, resolver: DisplayNameResolver | None = None,
    ):
        self.db = db
        self.resolver = resolver or UserDirectory(db)

    async def distribution(
        self, quiz_id: QuizId, identity: Identity,
    ) -> list[SubmissionView]:
        snap = await self._snapshot(quiz_id, identity, reveals_answers=True)
        names = await self.resolver.resolve_display_names(
            collect_user_ids(snap.submissions, snap.guesses),
        )
        return build_distribution(snap.quiz, snap.submissions, snap.guesses, names)

    async def leaderboard(
        self, quiz_id: QuizId, identity: Identity,
    ) -> list[LeaderboardEntry]:
        snap = await self._snapshot(quiz_id, identity)
        names = await self.resolver.resolve_display_names(
            g.guesser_id for g in snap.guesses
        )
        return build_leaderboard(snap.quiz, snap.guesses, names)

    async def results(self, quiz_id: QuizId, identity: Identity) -> QuizResults:
        snap = await self._snapshot(quiz_id, identity, reveals_answers=True)
        names = await self.resolver.resolve_display_names(
            collect_user_ids(snap.submissions, snap.guesses),
        )
        return QuizResults(
            quiz=snap.quiz,
            stats=compute_quiz_stats(snap.quiz, snap.submissions, snap.guesses),
            leaderboard=build_leaderboard(snap.quiz, snap.guesses, names),
            submissions=build_distribution(
                snap.quiz, snap.submissions, snap.guesses, names,
            ),
        )

    async def _snapshot(
        self, quiz_id: QuizId, identity: Identity, reveals_answers: bool = False,
    ) -> _Snapshot:
        quiz = quiz_record(await get_quiz_or_404(self.db, quiz_id))
        check_results_visible(
            quiz,
            identity.user_id,
            await participant_ids(self.db, quiz_id),
            await admin_ids(self.db, quiz_id),
            reveals_answers,
        )
        return _Snapshot(
            quiz=quiz,
            submissions=[
                submission_record(r) for r in await submissions_for(self.db, quiz_id)
            ],
            guesses=[guess_record(r) for r in await guesses_for(self.db, quiz_id)],
        )
