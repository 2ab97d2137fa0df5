"""Submission Enforcement — gates song submissions on quiz state and membership.

Invariants:
    - Submissions are accepted only while the quiz is open
    - Only participants may submit
    - No dedup: a participant may submit any number of songs to the same quiz

Design Decisions:
    - Status checked before membership: a closed quiz reports QUIZ_NOT_OPEN to everyone
    - Allowing several songs per participant is deliberate; the storage schema has
      no uniqueness constraint for it either
"""

import re
from collections.abc import Collection

from songquiz.core.domain_types import QuizStatus, UserId
from songquiz.core.errors import (
    ErrorContext, NotParticipantError, QuizNotOpenError,
)
from songquiz.core.records import Quiz


_SPOTIFY_TRACK = re.compile(r"track/([a-zA-Z0-9]+)")


def check_submission_allowed(
    quiz: Quiz, user_id: UserId, participant_ids: Collection[UserId],
) -> None:
    """Raise unless user_id may submit a song to quiz now."""
    context = ErrorContext(quiz_id=quiz.id, user_id=user_id)
    if quiz.status != QuizStatus.OPEN:
        raise QuizNotOpenError(quiz.status.value, context)
    if user_id not in participant_ids:
        raise NotParticipantError(context)


def normalize_song_fields(
    song_link: str, song_title: str | None, artist: str | None,
) -> tuple[str, str | None, str | None]:
    """Strip whitespace; blank optional fields become None."""
    return song_link.strip(), _blank_to_none(song_title), _blank_to_none(artist)


def extract_spotify_track_id(song_link: str) -> str | None:
    """Track id from an open.spotify.com/track/<id> link, else None."""
    match = _SPOTIFY_TRACK.search(song_link)
    return match.group(1) if match else None


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
