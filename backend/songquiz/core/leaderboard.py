"""Leaderboard — ranks guessers by correct guesses across one quiz.

Invariants:
    - One entry per distinct guesser with >= 1 guess in the quiz (never zero rows)
    - Order: correct desc, total asc, display name asc, user id asc
    - Placements are 1..n with no ties, even for identical scores
    - is_correct None counts as a wrong guess
    - PURE: defined over the guess ledger only, never over the participant list

Design Decisions:
    - Fewer guesses for the same correct count ranks higher (precision over volume)
    - accuracy_percent rounds half up, matching what the results screen shows
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from songquiz.core.domain_types import UserId
from songquiz.core.records import Guess, Quiz
from songquiz.core.view_models import LeaderboardEntry, display_name


@dataclass
class _Tally:
    correct: int = 0
    total: int = 0


def build_leaderboard(
    quiz: Quiz,
    guesses: Iterable[Guess],
    names: Mapping[UserId, str],
) -> list[LeaderboardEntry]:
    """Rank every guesser in quiz."""
    tallies: dict[UserId, _Tally] = {}
    for guess in guesses:
        if guess.quiz_id != quiz.id:
            continue
        tally = tallies.setdefault(guess.guesser_id, _Tally())
        tally.total += 1
        if guess.is_correct:
            tally.correct += 1

    ranked = sorted(
        tallies.items(),
        key=lambda item: (
            -item[1].correct,
            item[1].total,
            display_name(names, item[0]),
            item[0],
        ),
    )
    return [
        LeaderboardEntry(
            placement=placement,
            user_id=user_id,
            user_name=display_name(names, user_id),
            correct_guesses=tally.correct,
            total_guesses=tally.total,
            accuracy_percent=accuracy_percent(tally.correct, tally.total),
        )
        for placement, (user_id, tally) in enumerate(ranked, start=1)
    ]


def accuracy_percent(correct: int, total: int) -> int:
    """correct/total as a whole percentage, half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)
