"""Record Mapping — ORM rows to core records.

Invariants:
    - Output records are frozen dataclasses with no reference back to the session
    - Status strings from the DB become QuizStatus (unknown values raise ValueError)

Design Decisions:
    - Explicit field-by-field mapping over generic reflection: a renamed column
      breaks here, loudly, instead of silently dropping data
"""

from songquiz.core.domain_types import (
    QuizId, SubmissionId, GuessId, UserId, QuizStatus,
)
from songquiz.core import records
from songquiz.models.quiz import Quiz as QuizModel
from songquiz.models.song_submission import SongSubmission as SongSubmissionModel
from songquiz.models.guess import Guess as GuessModel
from songquiz.models.quiz_participant import QuizParticipant
from songquiz.models.quiz_admin import QuizAdmin


def quiz_record(row: QuizModel) -> records.Quiz:
    return records.Quiz(
        id=QuizId(row.id),
        name=row.name,
        description=row.description,
        created_by=UserId(row.created_by),
        status=QuizStatus(row.status),
        created_at=row.created_at,
        closed_at=row.closed_at,
    )


def submission_record(row: SongSubmissionModel) -> records.SongSubmission:
    return records.SongSubmission(
        id=SubmissionId(row.id),
        quiz_id=QuizId(row.quiz_id),
        user_id=UserId(row.user_id),
        song_link=row.song_link,
        song_title=row.song_title,
        artist=row.artist,
        submitted_at=row.submitted_at,
    )


def guess_record(row: GuessModel) -> records.Guess:
    return records.Guess(
        id=GuessId(row.id),
        quiz_id=QuizId(row.quiz_id),
        guesser_id=UserId(row.guesser_id),
        song_submission_id=SubmissionId(row.song_submission_id),
        guessed_user_id=UserId(row.guessed_user_id),
        is_correct=row.is_correct,
        guessed_at=row.guessed_at,
    )


def participant_record(row: QuizParticipant) -> records.Participant:
    return records.Participant(
        quiz_id=QuizId(row.quiz_id),
        user_id=UserId(row.user_id),
        joined_at=row.joined_at,
    )


def admin_record(row: QuizAdmin) -> records.Admin:
    return records.Admin(
        quiz_id=QuizId(row.quiz_id),
        user_id=UserId(row.user_id),
        added_by=UserId(row.added_by) if row.added_by else None,
        added_at=row.added_at,
    )
