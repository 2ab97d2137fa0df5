"""Results Routes — guess distribution, leaderboard, and combined results.

Invariants:
    - Read-only; safe to call repeatedly during a reveal
    - Available from guessing onwards to participants and quiz managers
    - Distribution and combined results name submitters, so players get them
      only once the quiz is completed; the leaderboard is open while guessing
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.api.dependencies import get_identity
from songquiz.core.domain_types import QuizId
from songquiz.infrastructure.database import get_db
from songquiz.schemas.results import (
    LeaderboardEntryResponse, ResultsResponse, SubmissionViewResponse,
)
from songquiz.services.handle_results import ResultsHandlers
from songquiz.services.identity import Identity

router = APIRouter(prefix="/api/v1/quizzes", tags=["results"])


@router.get(
    "/{quiz_id}/distribution", response_model=list[SubmissionViewResponse],
)
async def get_distribution(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Per-song guess distribution for the reveal screen."""
    views = await ResultsHandlers(db).distribution(QuizId(quiz_id), identity)
    return [SubmissionViewResponse.model_validate(v) for v in views]


@router.get(
    "/{quiz_id}/leaderboard", response_model=list[LeaderboardEntryResponse],
)
async def get_leaderboard(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    entries = await ResultsHandlers(db).leaderboard(QuizId(quiz_id), identity)
    return [LeaderboardEntryResponse.model_validate(e) for e in entries]


@router.get("/{quiz_id}/results", response_model=ResultsResponse)
async def get_results(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Summary stats, leaderboard, and distribution in one response."""
    results = await ResultsHandlers(db).results(QuizId(quiz_id), identity)
    return ResultsResponse.model_validate(results)
