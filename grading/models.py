"""
Quiz and report data model
==========================
Questions and quiz variants are frozen values defined once per homework.
QuestionResult and Report are built fresh for every submission.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

# Question kinds, named as the form input types that collect them
SINGLE_CHOICE = "radio"
MULTI_SELECT = "checkbox"
FREE_TEXT = "open"
QUESTION_KINDS = (SINGLE_CHOICE, MULTI_SELECT, FREE_TEXT)

Answer = Union[str, List[str]]


class QuizConfigError(ValueError):
    """Raised when a quiz definition cannot be graded as written"""


class GradingServiceError(Exception):
    """Raised when the external grading assistant fails or returns junk"""


@dataclass(frozen=True)
class Question:
    id: str
    type: str
    points: float
    text: str
    correct: Union[str, FrozenSet[str], None] = None
    options: Tuple[str, ...] = ()

    @property
    def correct_display(self) -> str:
        """Correct answer as shown to the student"""
        if self.type == MULTI_SELECT:
            # Keep form order so the report reads like the question did
            ordered = [o for o in self.options if o in self.correct]
            ordered += sorted(self.correct - set(ordered))
            return ", ".join(ordered)
        return self.correct or ""


@dataclass(frozen=True)
class QuizVariant:
    """
    One homework form and its answer key.

    Validated on construction, so a broken rubric fails at import time
    instead of producing wrong scores for a student.
    """
    id: str
    title: str
    due_date: str
    grader_persona: str
    questions: Tuple[Question, ...]
    total_points: float

    def __post_init__(self):
        seen = set()
        for q in self.questions:
            if q.id in seen:
                raise QuizConfigError(f"{self.id}: duplicate question id '{q.id}'")
            seen.add(q.id)

            if q.type not in QUESTION_KINDS:
                raise QuizConfigError(f"{self.id}/{q.id}: unknown question type '{q.type}'")
            if q.points < 0:
                raise QuizConfigError(f"{self.id}/{q.id}: negative point value")
            if q.type == SINGLE_CHOICE and not isinstance(q.correct, str):
                raise QuizConfigError(f"{self.id}/{q.id}: radio question needs one correct label")
            if q.type == MULTI_SELECT and not (isinstance(q.correct, frozenset) and q.correct):
                raise QuizConfigError(f"{self.id}/{q.id}: checkbox question needs a non-empty correct set")

        declared = sum(q.points for q in self.questions)
        if not math.isclose(declared, self.total_points):
            raise QuizConfigError(
                f"{self.id}: question points sum to {declared}, declared total is {self.total_points}"
            )

    def get(self, question_id: str) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def public_definition(self) -> Dict:
        """Quiz layout for the browser, without the answer key"""
        return {
            "id": self.id,
            "title": self.title,
            "due_date": self.due_date,
            "total_points": self.total_points,
            "questions": [
                {
                    "id": q.id,
                    "type": q.type,
                    "points": q.points,
                    "text": q.text,
                    "options": list(q.options),
                }
                for q in self.questions
            ],
        }


@dataclass
class QuestionResult:
    """Per-question outcome. Open questions start with needs_ai=True."""
    id: str
    text: str
    type: str
    user_answer: str
    max_points: float
    points: float = 0
    correct_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    analysis: Optional[str] = None
    sample_answer: Optional[str] = None
    needs_ai: bool = False

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "text": self.text,
            "type": self.type,
            "userAnswer": self.user_answer,
            "points": self.points,
            "maxPoints": self.max_points,
        }
        if self.type in (SINGLE_CHOICE, MULTI_SELECT):
            data["correctAnswer"] = self.correct_answer
            data["isCorrect"] = self.is_correct
        else:
            data["analysis"] = self.analysis
            data["sampleAnswer"] = self.sample_answer
        return data


@dataclass
class Report:
    results: List[QuestionResult]
    total_score: float
    max_score: float
    holistic_feedback: str
    quiz_id: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "totalScore": round_tenth(self.total_score),
            "maxScore": self.max_score,
            "results": [r.to_dict() for r in self.results],
            "holisticFeedback": self.holistic_feedback,
        }


def round_tenth(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3, unlike round())"""
    return math.floor(value * 10 + 0.5) / 10
