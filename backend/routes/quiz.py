"""
Quiz routes - the browser form and its results page
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from grading.grader import HomeworkGrader
from grading.report import configuration_error_report, grade_submission
from grading.report_renderer import (
    collect_answers, is_full_name, percent_score,
    render_email_html, render_quiz_form, render_results_html,
)
from utils.logger import setup_logger

from backend.database import get_db
from backend.grader_manager import get_grader
from backend.routes.forms import record_submission
from backend.routes.submit import resolve_quiz

router = APIRouter()
logger = setup_logger("quiz")


@router.get("/{quiz_id}", response_class=HTMLResponse)
async def get_quiz_form(quiz_id: str):
    """
    The homework form for a quiz variant
    """
    quiz = resolve_quiz(quiz_id)
    return render_quiz_form(quiz, action=f"/quiz/{quiz.id}/submit")


@router.get("/{quiz_id}/definition")
async def get_quiz_definition(quiz_id: str):
    """
    Quiz layout as JSON, without the answer key
    """
    return resolve_quiz(quiz_id).public_definition()


@router.post("/{quiz_id}/submit", response_class=HTMLResponse)
async def submit_quiz_form(
    quiz_id: str,
    request: Request,
    grader: Optional[HomeworkGrader] = Depends(get_grader),
    db: AsyncSession = Depends(get_db)
):
    """
    Grade a submitted form, store the emailed report and show the results.
    """
    quiz = resolve_quiz(quiz_id)
    form = await request.form()
    answers = collect_answers(form.multi_items())

    student_name = str(answers.get("name", "")).strip()
    if not is_full_name(student_name):
        return HTMLResponse(
            "<p>Please enter your full name (at least two words).</p>"
            f'<p><a href="/quiz/{quiz.id}">Back to the form</a></p>',
            status_code=400
        )

    if grader is None:
        logger.error("Missing GEMINI_API_KEY environment variable")
        return render_results_html(configuration_error_report(), title=quiz.title)

    report = await grade_submission(quiz, answers, grader)

    email_html = render_email_html(report, student_name, quiz.due_date)
    await record_submission(
        db,
        student_name=student_name,
        parent_email=report.metadata.get("email", ""),
        due_date=quiz.due_date,
        percent_score=percent_score(report),
        ai_feedback=report.holistic_feedback,
        email_html_body=email_html,
    )

    return render_results_html(report, title=quiz.title)
