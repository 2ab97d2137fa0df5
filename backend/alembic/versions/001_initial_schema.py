"""Initial schema — users, quizzes, song_submissions, guesses, participants, admins.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

Every quiz-scoped table cascades on quiz deletion. No uniqueness on
song_submissions (user_id) or guesses (guesser_id, song_submission_id):
repeated submissions and guesses are allowed.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "quizzes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("created_by", sa.String(255), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('open', 'closed', 'guessing', 'completed')",
            name="ck_quizzes_status",
        ),
    )

    op.create_table(
        "song_submissions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer, sa.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("song_link", sa.Text, nullable=False),
        sa.Column("song_title", sa.String(300), nullable=True),
        sa.Column("artist", sa.String(300), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_song_submissions_quiz_id", "song_submissions", ["quiz_id"])

    op.create_table(
        "guesses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer, sa.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("guesser_id", sa.String(255), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("song_submission_id", sa.Integer, sa.ForeignKey("song_submissions.id", ondelete="CASCADE"), nullable=False),
        sa.Column("guessed_user_id", sa.String(255), nullable=False),
        sa.Column("is_correct", sa.Boolean, nullable=True),
        sa.Column("guessed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_guesses_quiz_id", "guesses", ["quiz_id"])
    op.create_index("ix_guesses_song_submission_id", "guesses", ["song_submission_id"])

    op.create_table(
        "quiz_participants",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer, sa.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("quiz_id", "user_id", name="uq_quiz_participant"),
    )

    op.create_table(
        "quiz_admins",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("quiz_id", sa.Integer, sa.ForeignKey("quizzes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(255), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("added_by", sa.String(255), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("quiz_id", "user_id", name="uq_quiz_admin"),
    )


def downgrade() -> None:
    op.drop_table("quiz_admins")
    op.drop_table("quiz_participants")
    op.drop_index("ix_guesses_song_submission_id", table_name="guesses")
    op.drop_index("ix_guesses_quiz_id", table_name="guesses")
    op.drop_table("guesses")
    op.drop_index("ix_song_submissions_quiz_id", table_name="song_submissions")
    op.drop_table("song_submissions")
    op.drop_table("quizzes")
    op.drop_table("users")
