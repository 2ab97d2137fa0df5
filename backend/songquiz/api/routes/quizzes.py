"""Quiz Routes — create, list, inspect, delete, and advance quizzes.

Invariants:
    - Status changes only through POST /{quiz_id}/transition
    - Every endpoint requires an identity (X-User-Id by default)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.api.dependencies import get_identity
from songquiz.config import get_settings
from songquiz.core.domain_types import QuizId, QuizStatus
from songquiz.infrastructure.database import get_db
from songquiz.schemas.quiz import (
    Pagination,
    QuizCreate,
    QuizDetailResponse,
    QuizListResponse,
    QuizResponse,
    TransitionRequest,
)
from songquiz.services.handle_lifecycle import LifecycleHandlers
from songquiz.services.identity import Identity

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/quizzes", tags=["quizzes"])


@router.post(
    "", response_model=QuizResponse, status_code=status.HTTP_201_CREATED,
)
async def create_quiz(
    body: QuizCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Create a new quiz in the open state."""
    quiz = await LifecycleHandlers(db).create_quiz(
        identity, body.name, body.description,
    )
    return QuizResponse.model_validate(quiz)


@router.get("", response_model=QuizListResponse)
async def list_quizzes(
    limit: int | None = Query(None, ge=1, le=100),
    offset: int = Query(0, ge=0),
    status_filter: QuizStatus | None = Query(None, alias="status"),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """List quizzes, newest first."""
    limit = limit or get_settings().default_page_size
    quizzes = await LifecycleHandlers(db).list_quizzes(limit, offset, status_filter)
    return QuizListResponse(
        quizzes=[QuizResponse.model_validate(q) for q in quizzes],
        pagination=Pagination(limit=limit, offset=offset),
    )


@router.get("/{quiz_id}", response_model=QuizDetailResponse)
async def get_quiz(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    overview = await LifecycleHandlers(db).get_overview(QuizId(quiz_id), identity)
    return QuizDetailResponse(
        **QuizResponse.model_validate(overview.quiz).model_dump(),
        participant_count=overview.participant_count,
        submission_count=overview.submission_count,
        is_participant=overview.is_participant,
        can_manage=overview.can_manage,
        next_status=overview.next_status,
    )


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quiz(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Delete a quiz and everything in it. Creator only."""
    await LifecycleHandlers(db).delete_quiz(QuizId(quiz_id), identity)


@router.post("/{quiz_id}/transition", response_model=QuizResponse)
async def transition_quiz(
    quiz_id: int,
    body: TransitionRequest,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Move the quiz one step forward in its lifecycle."""
    quiz = await LifecycleHandlers(db).transition(
        QuizId(quiz_id), identity, body.target_status,
    )
    return QuizResponse.model_validate(quiz)
