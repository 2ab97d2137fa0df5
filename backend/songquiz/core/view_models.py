"""View Models — fully computed, serializable results handed to presentation.

Invariants:
    - Frozen dataclasses with only plain fields (str, int, bool, None, tuples)
    - No hidden mutable state: safe to cache for the duration of a reveal session

Design Decisions:
    - Tuples for sequences: immutability all the way down, byte-identical reruns
    - Display names resolved by the shell in one batch and passed in as a mapping
"""

from collections.abc import Mapping
from dataclasses import dataclass

from songquiz.core.domain_types import SubmissionId, UserId


@dataclass(frozen=True)
class GuessBucket:
    """All guesses on one song that accused the same user."""
    participant_id: UserId
    participant_name: str
    guess_count: int
    guessers: tuple[str, ...]
    is_correct: bool


@dataclass(frozen=True)
class SubmissionView:
    """One song on the reveal screen with its guess distribution."""
    submission_id: SubmissionId
    song_link: str
    song_title: str | None
    artist: str | None
    spotify_track_id: str | None
    submitter_id: UserId
    submitter_name: str
    guess_count: int
    guess_distribution: tuple[GuessBucket, ...]


@dataclass(frozen=True)
class LeaderboardEntry:
    placement: int
    user_id: UserId
    user_name: str
    correct_guesses: int
    total_guesses: int
    accuracy_percent: int


@dataclass(frozen=True)
class QuizStats:
    participants_who_guessed: int
    songs: int
    total_guesses: int
    correct_guesses: int


def display_name(names: Mapping[UserId, str], user_id: UserId) -> str:
    """Resolved name, falling back to the raw id for unknown users."""
    return names.get(user_id) or user_id
