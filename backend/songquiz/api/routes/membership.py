"""Membership Routes — participants and admins of a quiz."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from songquiz.api.dependencies import get_identity
from songquiz.core.domain_types import QuizId, UserId
from songquiz.infrastructure.database import get_db
from songquiz.schemas.quiz import (
    AdminCreate, AdminResponse, MemberResponse, ParticipantResponse,
)
from songquiz.services.handle_membership import MembershipHandlers
from songquiz.services.identity import Identity

router = APIRouter(prefix="/api/v1/quizzes", tags=["membership"])


@router.post(
    "/{quiz_id}/participants",
    response_model=ParticipantResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_quiz(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Join the quiz as the acting user. Joining twice is harmless."""
    participant = await MembershipHandlers(db).join(QuizId(quiz_id), identity)
    return ParticipantResponse.model_validate(participant)


@router.get("/{quiz_id}/participants", response_model=list[MemberResponse])
async def list_participants(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    members = await MembershipHandlers(db).list_participants(QuizId(quiz_id))
    return [MemberResponse.model_validate(m) for m in members]


@router.post(
    "/{quiz_id}/admins",
    response_model=AdminResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_admin(
    quiz_id: int,
    body: AdminCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Grant transition rights to another known user."""
    admin = await MembershipHandlers(db).add_admin(
        QuizId(quiz_id), identity, UserId(body.user_id),
    )
    return AdminResponse.model_validate(admin)


@router.get("/{quiz_id}/admins", response_model=list[MemberResponse])
async def list_admins(
    quiz_id: int,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    admins = await MembershipHandlers(db).list_admins(QuizId(quiz_id))
    return [MemberResponse.model_validate(a) for a in admins]
