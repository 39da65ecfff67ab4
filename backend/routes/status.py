"""
Status routes - check grader configuration and stored submissions
"""
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

import config
from quiz_config import QUIZZES

from backend.database import get_db, GradedSubmission

router = APIRouter()


class StatusResponse(BaseModel):
    grader_configured: bool
    model: str
    quizzes: List[str]
    total_submissions: int


@router.get("/", response_model=StatusResponse)
async def get_status(db: AsyncSession = Depends(get_db)):
    """
    Get overall system status
    """
    result = await db.execute(select(func.count(GradedSubmission.id)))
    total_submissions = result.scalar()

    return StatusResponse(
        grader_configured=bool(config.get_api_key()),
        model=config.GEMINI_MODEL,
        quizzes=list(QUIZZES),
        total_submissions=total_submissions or 0
    )
