"""Tests for local objective scoring."""

import pytest

from grading.models import FREE_TEXT, Question, QuizConfigError, QuizVariant
from grading.scorer import grade_objective, score_multi_select, score_single_choice
from quiz_config import CONFIRMATION_FEB_17, QUIZZES, checkbox, open_ended, radio

XY = {"X", "Y"}


@pytest.mark.parametrize(
    "chosen, expected",
    [
        ({"X", "Y"}, 3),      # every correct label
        ({"X"}, 1.5),         # half the hits
        ({"X", "Z"}, 1.0),    # half the hits, one wrong pick
        ({"Z"}, 0),           # -0.5 clamps to zero
        (set(), 0),
    ],
)
def test_multi_select_scenarios(chosen, expected):
    assert score_multi_select(XY, chosen, 3) == expected


def test_multi_select_all_correct_can_still_score_zero():
    correct = {"A", "B"}
    chosen = {"A", "B", "C", "D", "E", "F", "G", "H"}
    assert score_multi_select(correct, chosen, 3) == 0


def test_multi_select_rounds_half_up_to_tenth():
    # 3/4 * 3 = 2.25
    assert score_multi_select({"A", "B", "C", "D"}, {"A", "B", "C"}, 3) == 2.3
    # 1/3 * 2 = 0.666...
    assert score_multi_select({"A", "B", "C"}, {"A"}, 2) == 0.7


@pytest.mark.parametrize("points", [1, 2, 3, 5, 2.5])
def test_multi_select_stays_in_range_and_on_tenths(points):
    correct = {"A", "B", "C"}
    labels = ["A", "B", "C", "W1", "W2"]
    for mask in range(1 << len(labels)):
        chosen = {label for i, label in enumerate(labels) if mask & (1 << i)}
        score = score_multi_select(correct, chosen, points)
        assert 0 <= score <= points
        if score not in (0, points):
            assert abs(score * 10 - round(score * 10)) < 1e-9


def test_multi_select_exact_selection_scores_full_points():
    assert score_multi_select({"A", "B", "C"}, {"A", "B", "C"}, 2.25) == 2.25


def test_multi_select_empty_correct_set_fails_fast():
    with pytest.raises(QuizConfigError):
        score_multi_select(set(), {"A"}, 3)


def test_single_choice():
    assert score_single_choice("Intercession", "Intercession", 2) == 2
    assert score_single_choice("Intercession", "intercession", 2) == 0
    assert score_single_choice("Intercession", None, 2) == 0
    assert score_single_choice("Intercession", ["Intercession"], 2) == 0


def test_grade_objective_keeps_quiz_order_and_defers_open_questions():
    results = grade_objective(CONFIRMATION_FEB_17, {})

    assert [r.id for r in results] == [q.id for q in CONFIRMATION_FEB_17.questions]
    pending = [r.id for r in results if r.needs_ai]
    assert pending == ["may_crowning", "meditative_vs_contemplative", "conflict_reality"]
    assert all(r.points == 0 for r in results)
    assert all(r.user_answer == "No Answer" for r in results)


def test_grade_objective_scores_answers():
    answers = {
        "book_title": "The Imitation of Christ",
        "goretti_dream": "A White Dove",
        "moral_act_parts": ["The Object Chosen", "The Feelings"],
        "sacramental_examples": "Holy Water",
        "may_crowning": "  Honoring Mary  ",
    }
    results = {r.id: r for r in grade_objective(CONFIRMATION_FEB_17, answers)}

    assert results["book_title"].points == 2
    assert results["book_title"].is_correct is True
    assert results["goretti_dream"].points == 0
    assert results["goretti_dream"].is_correct is False
    assert results["goretti_dream"].correct_answer == "14 Lilies"

    # 1/3 * 3 - 0.5
    assert results["moral_act_parts"].points == 0.5
    assert results["moral_act_parts"].user_answer == "The Object Chosen, The Feelings"
    assert results["moral_act_parts"].correct_answer == "The Object Chosen, The Intention, The Circumstances"

    # A single ticked checkbox arrives as a string
    assert results["sacramental_examples"].points == 0.8

    assert results["may_crowning"].user_answer == "Honoring Mary"
    assert results["may_crowning"].needs_ai is True


def test_quiz_maxima_match_declared_totals():
    for quiz in QUIZZES.values():
        results = grade_objective(quiz, {})
        assert sum(r.max_points for r in results) == quiz.total_points


def test_multi_select_rounding_never_exceeds_points():
    correct = {f"L{i}" for i in range(100)}
    chosen = {f"L{i}" for i in range(99)}
    # 99/100 * 0.96 = 0.9504 rounds half-up to 1.0
    assert score_multi_select(correct, chosen, 0.96) == 0.96


def test_grade_objective_ignores_unsupported_answer_values():
    answers = {"book_title": 42, "moral_act_parts": 7, "may_crowning": {"text": "x"}}
    results = {r.id: r for r in grade_objective(CONFIRMATION_FEB_17, answers)}

    assert results["book_title"].points == 0
    assert results["moral_act_parts"].points == 0
    assert results["moral_act_parts"].user_answer == "No Answer"
    assert results["may_crowning"].user_answer == "No Answer"


def make_variant(questions, total):
    return QuizVariant(
        id="test-quiz", title="Test", due_date="today", grader_persona="Grader",
        questions=tuple(questions), total_points=total,
    )


@pytest.mark.parametrize(
    "questions, total",
    [
        ([radio("q1", "Q", "A", ["A", "B"]), radio("q1", "Q", "A", ["A", "B"])], 4),
        ([Question(id="q1", type="dropdown", points=2, text="Q")], 2),
        ([Question(id="q1", type="radio", points=2, text="Q", options=("A", "B"))], 2),
        ([checkbox("q1", "Q", [], ["A", "B"])], 3),
        ([radio("q1", "Q", "A", ["A", "B"]), open_ended("q2", "Q")], 10),
    ],
    ids=["duplicate-id", "unknown-kind", "radio-without-label", "empty-checkbox-set", "total-mismatch"],
)
def test_quiz_variant_rejects_broken_rubrics(questions, total):
    with pytest.raises(QuizConfigError):
        make_variant(questions, total)


def test_quiz_variant_accepts_valid_rubric():
    quiz = make_variant([radio("q1", "Q", "A", ["A", "B"]), open_ended("q2", "Q")], 7)
    assert quiz.get("q2").type == FREE_TEXT
    assert quiz.get("missing") is None
