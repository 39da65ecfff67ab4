"""
Homework Grader Backend API
Grades quiz submissions and stores the emailed reports
"""
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import DEFAULT_QUIZ_ID
from utils.logger import setup_logger

from backend.database import init_db
from backend.routes import forms, quiz, status, submit

logger = setup_logger("backend")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down")


app = FastAPI(
    title="Homework Grader API",
    description="Scores quiz submissions and grades open answers with Gemini",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for the static homework page
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict to your domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(submit.router, tags=["Grading"])
app.include_router(quiz.router, prefix="/quiz", tags=["Quiz"])
app.include_router(forms.router, prefix="/forms", tags=["Form Submissions"])
app.include_router(status.router, prefix="/status", tags=["Status"])


@app.get("/")
async def root():
    return {
        "message": "Homework Grader API",
        "status": "running",
        "quiz_form": f"/quiz/{DEFAULT_QUIZ_ID}"
    }


if __name__ == "__main__":
    uvicorn.run("backend.main:app", host="0.0.0.0", port=8000)
