"""
Form-submission backend - stores graded homework reports
"""
from fastapi import APIRouter, Depends, Form, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from grading.report_renderer import is_full_name
from utils.logger import setup_logger

from backend.database import get_db, GradedSubmission

router = APIRouter()
logger = setup_logger("forms")

HOMEWORK_FORM = "homework-grades"


async def record_submission(
    db: AsyncSession,
    student_name: str,
    parent_email: str,
    due_date: str,
    percent_score: str,
    ai_feedback: str,
    email_html_body: str
) -> GradedSubmission:
    """Save one graded report"""
    record = GradedSubmission(
        form_name=HOMEWORK_FORM,
        student_name=student_name.strip(),
        parent_email=parent_email.strip() or None,
        due_date=due_date,
        percent_score=percent_score,
        ai_feedback=ai_feedback,
        email_html_body=email_html_body,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)

    logger.info(f"Saved submission {record.id} for {record.student_name}: {percent_score}%")
    return record


@router.post("/homework-grades")
async def submit_homework_grades(
    student_name: str = Form(...),
    parent_email: str = Form(""),
    due_date: str = Form(""),
    percent_score: str = Form("0"),
    ai_feedback: str = Form(""),
    email_html_body: str = Form(""),
    db: AsyncSession = Depends(get_db)
):
    """
    Store a graded report posted by the browser after grading
    """
    if not is_full_name(student_name):
        raise HTTPException(status_code=400, detail="Please enter your full name (at least two words).")

    record = await record_submission(
        db, student_name, parent_email, due_date,
        percent_score, ai_feedback, email_html_body
    )
    return {"success": True, "submission_id": record.id}


@router.get("/homework-grades")
async def list_homework_grades(limit: int = 50, db: AsyncSession = Depends(get_db)):
    """
    Most recent stored reports, newest first (without the HTML body)
    """
    result = await db.execute(
        select(GradedSubmission)
        .where(GradedSubmission.form_name == HOMEWORK_FORM)
        .order_by(GradedSubmission.created_at.desc(), GradedSubmission.id.desc())
        .limit(limit)
    )
    submissions = result.scalars().all()

    return {
        "submissions": [
            {
                "id": s.id,
                "student_name": s.student_name,
                "parent_email": s.parent_email,
                "due_date": s.due_date,
                "percent_score": s.percent_score,
                "ai_feedback": s.ai_feedback,
                "created_at": s.created_at.isoformat() if s.created_at else None
            }
            for s in submissions
        ]
    }
