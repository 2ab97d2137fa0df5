"""Quiz Stats — pure summary counts for the results screen header.

Invariants:
    - Inputs are already-loaded records (no IO, no DB)
    - Only records belonging to the quiz are counted

Design Decisions:
    - Pure function, not part of the aggregators: stats are presentation summary,
      the aggregators are the ranked projections
"""

from collections.abc import Iterable

from songquiz.core.records import Guess, Quiz, SongSubmission
from songquiz.core.view_models import QuizStats


def compute_quiz_stats(
    quiz: Quiz, submissions: Iterable[SongSubmission], guesses: Iterable[Guess],
) -> QuizStats:
    """Compute summary statistics for quiz. Pure, no IO."""
    own_guesses = [g for g in guesses if g.quiz_id == quiz.id]
    return QuizStats(
        participants_who_guessed=len({g.guesser_id for g in own_guesses}),
        songs=sum(1 for s in submissions if s.quiz_id == quiz.id),
        total_guesses=len(own_guesses),
        correct_guesses=sum(1 for g in own_guesses if g.is_correct),
    )
