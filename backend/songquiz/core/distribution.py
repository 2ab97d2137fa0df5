"""Guess Distribution — per-song breakdown of who was accused, by whom, how often.

Invariants:
    - One SubmissionView per submission, submission id ascending
    - Per submission, bucket guess_counts sum to the number of guesses on it
    - Every guess lands in exactly one bucket (the one for its guessed user);
      repeated guesses by the same guesser are all listed
    - Buckets ordered by guess_count desc, then display name asc, then user id asc
    - Guessers listed in guess timestamp order (ties by guess id)
    - PURE: identical input gives identical output

Design Decisions:
    - Guesses for other quizzes or unknown submissions are skipped, not errors:
      the projection is read-only and must never fail a reveal screen
    - Display names come in as one mapping; collect_user_ids tells the shell
      which ids to resolve so name lookups stay O(distinct users)
"""

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import datetime

from songquiz.core.domain_types import SubmissionId, UserId
from songquiz.core.enforce_submission import extract_spotify_track_id
from songquiz.core.records import Guess, Quiz, SongSubmission
from songquiz.core.view_models import (
    GuessBucket, SubmissionView, display_name,
)


_NO_TIMESTAMP = datetime.min


def collect_user_ids(
    submissions: Iterable[SongSubmission], guesses: Iterable[Guess],
) -> set[UserId]:
    """Every user id a distribution or leaderboard will need a name for."""
    ids: set[UserId] = {s.user_id for s in submissions}
    for guess in guesses:
        ids.add(guess.guesser_id)
        ids.add(guess.guessed_user_id)
    return ids


def build_distribution(
    quiz: Quiz,
    submissions: Iterable[SongSubmission],
    guesses: Iterable[Guess],
    names: Mapping[UserId, str],
) -> list[SubmissionView]:
    """Build the reveal-screen view for every submission in quiz."""
    own = sorted(
        (s for s in submissions if s.quiz_id == quiz.id), key=lambda s: s.id,
    )
    by_submission: dict[SubmissionId, list[Guess]] = defaultdict(list)
    known = {s.id for s in own}
    for guess in _in_guess_order(guesses):
        if guess.quiz_id == quiz.id and guess.song_submission_id in known:
            by_submission[guess.song_submission_id].append(guess)

    return [
        _submission_view(s, by_submission.get(s.id, []), names) for s in own
    ]


def _submission_view(
    submission: SongSubmission,
    guesses: list[Guess],
    names: Mapping[UserId, str],
) -> SubmissionView:
    return SubmissionView(
        submission_id=submission.id,
        song_link=submission.song_link,
        song_title=submission.song_title,
        artist=submission.artist,
        spotify_track_id=extract_spotify_track_id(submission.song_link),
        submitter_id=submission.user_id,
        submitter_name=display_name(names, submission.user_id),
        guess_count=len(guesses),
        guess_distribution=_buckets(submission, guesses, names),
    )


def _buckets(
    submission: SongSubmission,
    guesses: list[Guess],
    names: Mapping[UserId, str],
) -> tuple[GuessBucket, ...]:
    groups: dict[UserId, list[Guess]] = defaultdict(list)
    for guess in guesses:
        groups[guess.guessed_user_id].append(guess)

    buckets = [
        GuessBucket(
            participant_id=accused,
            participant_name=display_name(names, accused),
            guess_count=len(group),
            guessers=tuple(display_name(names, g.guesser_id) for g in group),
            is_correct=accused == submission.user_id,
        )
        for accused, group in groups.items()
    ]
    buckets.sort(
        key=lambda b: (-b.guess_count, b.participant_name, b.participant_id),
    )
    return tuple(buckets)


def _in_guess_order(guesses: Iterable[Guess]) -> list[Guess]:
    # Naive and aware timestamps never meet: one ledger comes from one store
    return sorted(
        guesses,
        key=lambda g: (
            g.guessed_at is None, g.guessed_at or _NO_TIMESTAMP, g.id,
        ),
    )
