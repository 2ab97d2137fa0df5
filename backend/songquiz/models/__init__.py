"""ORM Models — SQLAlchemy declarative models for all quiz entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Quiz is the aggregate root; submissions, guesses, participants, admins scoped by quiz_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from songquiz.models.user import User  # noqa: F401
from songquiz.models.quiz import Quiz  # noqa: F401
from songquiz.models.song_submission import SongSubmission  # noqa: F401
from songquiz.models.guess import Guess  # noqa: F401
from songquiz.models.quiz_participant import QuizParticipant  # noqa: F401
from songquiz.models.quiz_admin import QuizAdmin  # noqa: F401
