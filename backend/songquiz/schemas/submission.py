"""Submission & Guess Schemas — song and guess payloads.

Invariants:
    - song_link must be an http(s) URL, at most 2000 chars
    - GuessCreate names a submission id and the accused user id
    - Guess responses never echo is_correct while guessing is running

Design Decisions:
    - Anonymous listing schema drops user_id: the guessing screen must not
      leak submitters
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from songquiz.core.enforce_submission import extract_spotify_track_id
from songquiz.core.records import SongSubmission


class SubmissionCreate(BaseModel):
    song_link: str = Field(min_length=1, max_length=2000)
    song_title: str | None = Field(None, max_length=300)
    artist: str | None = Field(None, max_length=300)

    @field_validator("song_link")
    @classmethod
    def require_http_link(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("song_link must be an http(s) URL")
        return v


class SubmissionResponse(BaseModel):
    """Full submission — only ever returned to its submitter."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    user_id: str
    song_link: str
    song_title: str | None = None
    artist: str | None = None
    submitted_at: datetime | None = None


class AnonymousSubmissionResponse(BaseModel):
    id: int
    song_link: str
    song_title: str | None = None
    artist: str | None = None
    spotify_track_id: str | None = None

    @classmethod
    def from_record(
        cls, submission: SongSubmission,
    ) -> "AnonymousSubmissionResponse":
        return cls(
            id=submission.id,
            song_link=submission.song_link,
            song_title=submission.song_title,
            artist=submission.artist,
            spotify_track_id=extract_spotify_track_id(submission.song_link),
        )


class GuessCreate(BaseModel):
    song_submission_id: int = Field(ge=1)
    guessed_user_id: str = Field(min_length=1, max_length=255)


class GuessResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    song_submission_id: int
    guessed_user_id: str
    guessed_at: datetime | None = None
