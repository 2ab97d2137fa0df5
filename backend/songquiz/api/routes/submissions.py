"""Submission & Guess Routes — the write side of a quiz plus the guessing list.

Invariants:
    - GET /submissions is anonymous: no submitter ids, caller's own songs hidden
    - POST /guesses never reveals whether the guess was correct
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.api.dependencies import get_identity
from songquiz.core.domain_types import QuizId, SubmissionId, UserId
from songquiz.infrastructure.database import get_db
from songquiz.schemas.submission import (
    AnonymousSubmissionResponse,
    GuessCreate,
    GuessResponse,
    SubmissionCreate,
    SubmissionResponse,
)
from songquiz.services.handle_guess import GuessHandlers
from songquiz.services.handle_submission import SubmissionHandlers
from songquiz.services.identity import Identity

router = APIRouter(prefix="/api/v1/quizzes", tags=["submissions"])


@router.post(
    "/{quiz_id}/submissions",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_song(
    quiz_id: int,
    body: SubmissionCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    submission = await SubmissionHandlers(db).submit(
        QuizId(quiz_id), identity, body.song_link, body.song_title, body.artist,
    )
    return SubmissionResponse.model_validate(submission)


@router.get(
    "/{quiz_id}/submissions",
    response_model=list[AnonymousSubmissionResponse],
)
async def list_guessable_songs(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Songs the caller can guess on, without submitters. Members only."""
    submissions = await SubmissionHandlers(db).list_for_guessing(
        QuizId(quiz_id), identity,
    )
    return [AnonymousSubmissionResponse.from_record(s) for s in submissions]


@router.get(
    "/{quiz_id}/submissions/mine",
    response_model=list[SubmissionResponse],
)
async def list_my_songs(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    submissions = await SubmissionHandlers(db).list_mine(QuizId(quiz_id), identity)
    return [SubmissionResponse.model_validate(s) for s in submissions]


@router.post(
    "/{quiz_id}/guesses",
    response_model=GuessResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_guess(
    quiz_id: int,
    body: GuessCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    guess = await GuessHandlers(db).record_guess(
        QuizId(quiz_id),
        identity,
        SubmissionId(body.song_submission_id),
        UserId(body.guessed_user_id),
    )
    return GuessResponse.model_validate(guess)
