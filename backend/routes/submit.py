"""
Homework submission route (JSON in, JSON report out)
"""
import json
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from config import DEFAULT_QUIZ_ID
from grading.grader import HomeworkGrader
from grading.models import QuizConfigError, QuizVariant
from grading.report import configuration_error_report, grade_submission
from quiz_config import get_quiz
from utils.logger import setup_logger

from backend.grader_manager import get_grader

router = APIRouter()
logger = setup_logger("submit")


class SubmissionRequest(BaseModel):
    answers: Dict[str, Union[str, List[str]]] = {}
    quiz_id: Optional[str] = None


def resolve_quiz(quiz_id: Optional[str]) -> QuizVariant:
    """Look up a quiz variant, 404 if there is no such quiz"""
    try:
        return get_quiz(quiz_id or DEFAULT_QUIZ_ID)
    except QuizConfigError as e:
        raise HTTPException(status_code=404, detail=str(e))


async def read_submission(request: Request) -> SubmissionRequest:
    """Parse the body; anything malformed is graded as an empty submission"""
    try:
        payload = await request.json()
        return SubmissionRequest.model_validate(payload)
    except ValueError as e:
        # Covers bad JSON, bad encoding and pydantic validation errors
        logger.warning(f"Malformed submission body, grading as unanswered: {e}")
        return SubmissionRequest()


@router.post("/submit-homework")
async def submit_homework(
    request: Request,
    quiz_id: Optional[str] = None,
    grader: Optional[HomeworkGrader] = Depends(get_grader)
):
    """
    Grade a homework submission.

    Body: {"answers": {"question_id": "answer" | ["a", "b"]}}
    Always answers 200 with a report; failures show up inside it.
    """
    submission = await read_submission(request)
    quiz = resolve_quiz(quiz_id or submission.quiz_id)

    logger.info(f"Received submission for {quiz.id}: "
                f"{json.dumps(submission.answers, ensure_ascii=False)}")

    if grader is None:
        logger.error("Missing GEMINI_API_KEY environment variable")
        return configuration_error_report().to_dict()

    report = await grade_submission(quiz, submission.answers, grader)
    return report.to_dict()
