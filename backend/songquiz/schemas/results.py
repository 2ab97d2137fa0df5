"""Results Schemas — reveal-screen distribution and leaderboard responses.

Invariants:
    - Field names and order mirror core/view_models.py one-to-one
    - Read straight from the frozen view models (from_attributes)
"""

from pydantic import BaseModel, ConfigDict

from songquiz.schemas.quiz import QuizResponse


class GuessBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participant_id: str
    participant_name: str
    guess_count: int
    guessers: list[str]
    is_correct: bool


class SubmissionViewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    submission_id: int
    song_link: str
    song_title: str | None = None
    artist: str | None = None
    spotify_track_id: str | None = None
    submitter_id: str
    submitter_name: str
    guess_count: int
    guess_distribution: list[GuessBucketResponse]


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    placement: int
    user_id: str
    user_name: str
    correct_guesses: int
    total_guesses: int
    accuracy_percent: int


class QuizStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    participants_who_guessed: int
    songs: int
    total_guesses: int
    correct_guesses: int


class ResultsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz: QuizResponse
    stats: QuizStatsResponse
    leaderboard: list[LeaderboardEntryResponse]
    submissions: list[SubmissionViewResponse]
