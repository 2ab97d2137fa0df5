"""Quiz Schemas — quiz creation, transitions, membership, and quiz responses.

Invariants:
    - QuizCreate.name: 1-200 chars after stripping
    - TransitionRequest.target_status must be a QuizStatus value (Pydantic rejects others)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from songquiz.core.domain_types import QuizStatus


class QuizCreate(BaseModel):
    """Quiz creation — validates name length and whitespace."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class QuizResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    created_by: str
    status: QuizStatus
    created_at: datetime | None = None
    closed_at: datetime | None = None


class QuizDetailResponse(QuizResponse):
    participant_count: int
    submission_count: int
    is_participant: bool
    can_manage: bool
    next_status: QuizStatus | None = None


class Pagination(BaseModel):
    limit: int
    offset: int


class QuizListResponse(BaseModel):
    quizzes: list[QuizResponse]
    pagination: Pagination


class TransitionRequest(BaseModel):
    target_status: QuizStatus


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    user_name: str
    since: datetime | None = None


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: int
    user_id: str
    joined_at: datetime | None = None


class AdminCreate(BaseModel):
    user_id: str = Field(min_length=1, max_length=255)


class AdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: int
    user_id: str
    added_by: str | None = None
    added_at: datetime | None = None
