"""Local scoring for objective questions.

Functions:
- score_multi_select: partial credit with a flat penalty per wrong pick.
- score_single_choice: exact label match, all or nothing.
- grade_objective: one QuestionResult per quiz question; open questions are
  left pending for the grading assistant.
"""
from typing import Dict, Iterable, List

from config import NO_ANSWER_TEXT
from grading.models import (
    Answer, QuestionResult, QuizConfigError, QuizVariant, round_tenth,
    SINGLE_CHOICE, MULTI_SELECT, FREE_TEXT,
)

WRONG_PICK_PENALTY = 0.5


def score_multi_select(correct: Iterable[str], chosen: Iterable[str], points: float) -> float:
    """
    Score a checkbox question.

    raw = hits / len(correct) * points - 0.5 * wrong picks, clamped at 0 and
    rounded half-up to one decimal. Picking exactly the correct set scores
    exactly `points`.
    """
    correct = set(correct)
    chosen = set(chosen)
    if not correct:
        raise QuizConfigError("checkbox question has no correct answers")

    hits = len(chosen & correct)
    misses = len(chosen - correct)

    raw = (hits / len(correct)) * points - WRONG_PICK_PENALTY * misses
    if raw >= points:
        return points
    if raw <= 0:
        return 0.0
    # Half-up rounding must not lift a partial score past the maximum
    return min(round_tenth(raw), points)


def score_single_choice(correct: str, answer: Answer, points: float) -> float:
    """Full credit if `answer` equals the correct label, else 0"""
    return points if answer == correct else 0


def _as_selection(answer) -> List[str]:
    # A single ticked checkbox arrives as a plain string
    if isinstance(answer, str):
        return [answer] if answer else []
    if isinstance(answer, (list, tuple)):
        return [a for a in answer if isinstance(a, str)]
    return []


def _as_text(answer) -> str:
    if isinstance(answer, str):
        return answer
    if isinstance(answer, (list, tuple)):
        return ", ".join(a for a in answer if isinstance(a, str))
    return ""


def grade_objective(quiz: QuizVariant, answers: Dict[str, Answer]) -> List[QuestionResult]:
    """Score radio and checkbox questions, and mark open ones as pending"""
    results = []

    for q in quiz.questions:
        answer = answers.get(q.id)

        if q.type == SINGLE_CHOICE:
            earned = score_single_choice(q.correct, answer, q.points)
            results.append(QuestionResult(
                id=q.id,
                text=q.text,
                type=q.type,
                user_answer=_as_text(answer) or NO_ANSWER_TEXT,
                correct_answer=q.correct_display,
                is_correct=answer == q.correct,
                points=earned,
                max_points=q.points,
            ))

        elif q.type == MULTI_SELECT:
            chosen = _as_selection(answer)
            earned = score_multi_select(q.correct, chosen, q.points)
            results.append(QuestionResult(
                id=q.id,
                text=q.text,
                type=q.type,
                user_answer=", ".join(chosen) or NO_ANSWER_TEXT,
                correct_answer=q.correct_display,
                is_correct=set(chosen) == q.correct,
                points=earned,
                max_points=q.points,
            ))

        elif q.type == FREE_TEXT:
            results.append(QuestionResult(
                id=q.id,
                text=q.text,
                type=q.type,
                user_answer=_as_text(answer).strip() or NO_ANSWER_TEXT,
                max_points=q.points,
                needs_ai=True,
            ))

    return results
