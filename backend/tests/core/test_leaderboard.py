"""Leaderboard tests — ranking order, placements, accuracy rounding."""

import pytest

from songquiz.core.domain_types import (
    GuessId, QuizId, QuizStatus, SubmissionId, UserId,
)
from songquiz.core.leaderboard import accuracy_percent, build_leaderboard
from songquiz.core.records import Guess, Quiz


QUIZ = Quiz(id=QuizId(1), name="Q", created_by=UserId("a"), status=QuizStatus.COMPLETED)
A, B, C = UserId("a"), UserId("b"), UserId("c")
NAMES = {A: "Alice", B: "Bob", C: "Carol"}


def _ledger(*rows: tuple[UserId, bool | None], quiz_id: int = 1) -> list[Guess]:
    return [
        Guess(
            id=GuessId(i), quiz_id=QuizId(quiz_id), guesser_id=guesser,
            song_submission_id=SubmissionId(100 + i), guessed_user_id=UserId("x"),
            is_correct=correct,
        )
        for i, (guesser, correct) in enumerate(rows, start=1)
    ]


def test_ranked_by_correct_then_fewer_guesses():
    guesses = _ledger(
        (A, True), (A, False), (A, False),
        (B, True), (B, True),
        (C, True), (C, False), (C, False), (C, False),
    )
    board = build_leaderboard(QUIZ, guesses, NAMES)
    assert [(e.placement, e.user_id) for e in board] == [(1, B), (2, A), (3, C)]
    assert board[0].accuracy_percent == 100
    assert board[1].accuracy_percent == 33
    assert board[2].accuracy_percent == 25


def test_equal_correct_fewer_guesses_ranks_higher():
    # A: 5 of 6, B: 5 of 5, C: 3 of 10
    guesses = _ledger(
        *[(A, True)] * 5, (A, False),
        *[(B, True)] * 5,
        *[(C, True)] * 3, *[(C, False)] * 7,
    )
    board = build_leaderboard(QUIZ, guesses, NAMES)
    assert [(e.placement, e.user_id) for e in board] == [(1, B), (2, A), (3, C)]
    assert [(e.correct_guesses, e.total_guesses) for e in board] == [
        (5, 5), (5, 6), (3, 10),
    ]
    assert [e.accuracy_percent for e in board] == [100, 83, 30]

def test_identical_scores_ordered_by_name_without_shared_placement():
    names = {A: "Zoe", B: "Adam"}
    board = build_leaderboard(QUIZ, _ledger((A, True), (B, True)), names)
    assert [(e.placement, e.user_name) for e in board] == [(1, "Adam"), (2, "Zoe")]


def test_same_name_falls_back_to_user_id():
    names = {A: "Sam", B: "Sam"}
    board = build_leaderboard(QUIZ, _ledger((B, True), (A, True)), names)
    assert [e.user_id for e in board] == [A, B]


def test_repeated_guesses_all_count():
    (entry,) = build_leaderboard(QUIZ, _ledger((A, True), (A, True)), NAMES)
    assert (entry.correct_guesses, entry.total_guesses) == (2, 2)


def test_unknown_correctness_counts_as_wrong():
    (entry,) = build_leaderboard(QUIZ, _ledger((A, None), (A, True)), NAMES)
    assert (entry.correct_guesses, entry.total_guesses) == (1, 2)
    assert entry.accuracy_percent == 50


def test_only_guessers_are_listed():
    board = build_leaderboard(QUIZ, _ledger((C, False)), NAMES)
    assert [e.user_id for e in board] == [C]
    assert board[0].correct_guesses == 0


def test_empty_ledger_gives_empty_board():
    assert build_leaderboard(QUIZ, [], NAMES) == []


def test_other_quiz_guesses_ignored():
    guesses = _ledger((A, True)) + _ledger((B, True), quiz_id=2)
    assert [e.user_id for e in build_leaderboard(QUIZ, guesses, NAMES)] == [A]


@pytest.mark.parametrize(
    ("correct", "total", "expected"),
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (5, 5, 100)],
)
def test_accuracy_percent_rounds_half_up(correct, total, expected):
    assert accuracy_percent(correct, total) == expected
