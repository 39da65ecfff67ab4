"""
Report Assembly
===============
Combines local objective scores with the grading assistant's results and
degrades to fixed fallback values when the assistant cannot be used.
"""
from typing import Dict, List, Optional

from pydantic import ValidationError

from grading.grader import AIGrade, AIGradingOutput, HomeworkGrader
from grading.models import (
    Answer, GradingServiceError, QuestionResult, QuizVariant, Report,
)
from grading.scorer import grade_objective
from utils.logger import setup_logger

logger = setup_logger("report")

NO_FEEDBACK_TEXT = "No AI feedback generated."
NOT_AVAILABLE = "N/A"


def apply_ai_grades(results: List[QuestionResult], output: AIGradingOutput) -> None:
    """
    Merge the assistant's grades into pending open-question results.

    Grades are matched by question id, so order does not matter. A pending
    question that got no usable grade is awarded zero with an explanation.
    """
    grades: Dict[str, AIGrade] = {}
    malformed: Dict[str, str] = {}

    for entry in output.grades:
        entry_id = entry.get("id") if isinstance(entry, dict) else None
        try:
            grade = AIGrade.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Malformed grade entry for '{entry_id}': {e.error_count()} error(s)")
            if isinstance(entry_id, str):
                malformed.setdefault(entry_id, "The grading assistant returned an incomplete grade for this answer.")
            continue
        if grade.id in grades:
            logger.warning(f"Duplicate grade for '{grade.id}', keeping the first")
            continue
        grades[grade.id] = grade

    pending_ids = {r.id for r in results if r.needs_ai}
    for unknown in set(grades) - pending_ids:
        logger.warning(f"Ignoring grade for unknown or objective question '{unknown}'")

    for result in results:
        if not result.needs_ai:
            continue

        grade = grades.get(result.id)
        if grade is None:
            result.points = 0
            result.analysis = malformed.get(
                result.id, "The grading assistant did not return a grade for this answer."
            )
            result.sample_answer = NOT_AVAILABLE
        else:
            result.points = min(max(grade.score, 0), result.max_points)
            result.analysis = grade.analysis
            result.sample_answer = grade.sample_answer
        result.needs_ai = False


def apply_grading_failure(results: List[QuestionResult], reason: str) -> None:
    """Zero every pending open question, explaining why"""
    for result in results:
        if not result.needs_ai:
            continue
        result.points = 0
        result.analysis = f"Error connecting to grading assistant: {reason}"
        result.sample_answer = NOT_AVAILABLE
        result.needs_ai = False


def submission_metadata(quiz: QuizVariant, answers: Dict[str, Answer]) -> Dict[str, str]:
    """Non-question form fields (name, email, due_date) sent with the answers"""
    return {
        key: value.strip()
        for key, value in answers.items()
        if quiz.get(key) is None and isinstance(value, str)
    }


def build_report(
    results: List[QuestionResult],
    holistic_feedback: str,
    quiz_id: Optional[str] = None
) -> Report:
    """Sum awarded points and maxima; rounding is left to presentation"""
    return Report(
        results=results,
        total_score=sum(r.points for r in results),
        max_score=sum(r.max_points for r in results),
        holistic_feedback=holistic_feedback,
        quiz_id=quiz_id,
    )


async def grade_submission(
    quiz: QuizVariant,
    answers: Dict[str, Answer],
    grader: HomeworkGrader
) -> Report:
    """
    Grade one submission end to end.

    Objective questions are scored locally. Open questions go to the grading
    assistant in one call; if that call fails for any reason, they fall back
    to zero and the rest of the report is still returned.
    """
    results = grade_objective(quiz, answers)
    open_results = [r for r in results if r.needs_ai]
    objective_results = [r for r in results if not r.needs_ai]
    holistic_feedback = NO_FEEDBACK_TEXT

    try:
        output = await grader.grade_async(quiz, objective_results, open_results)
    except GradingServiceError as e:
        logger.error(f"AI grading error: {e}")
        apply_grading_failure(results, str(e))
        holistic_feedback = f"Error generating AI feedback: {e}"
    else:
        apply_ai_grades(results, output)
        if output.holistic_feedback:
            holistic_feedback = output.holistic_feedback

    report = build_report(results, holistic_feedback, quiz_id=quiz.id)
    report.metadata = submission_metadata(quiz, answers)
    logger.info(f"Graded {quiz.id}: {report.total_score:g}/{report.max_score:g}")
    return report


def configuration_error_report() -> Report:
    """Fixed report returned when the Gemini API key is not configured"""
    error_entry = QuestionResult(
        id="error",
        text="Configuration Error",
        type="error",
        user_answer=NOT_AVAILABLE,
        max_points=0,
        points=0,
        analysis="Server missing API Key. Please contact administrator.",
        sample_answer=NOT_AVAILABLE,
    )
    return Report(
        results=[error_entry],
        total_score=0,
        max_score=0,
        holistic_feedback="Grading is unavailable: the server is not configured.",
    )
