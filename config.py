"""Configuration module for the homework grader"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project paths
BASE_DIR = Path(__file__).parent

# Gemini Configuration
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")
GEMINI_TIMEOUT_SECONDS = float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60"))
GRADING_TEMPERATURE = float(os.getenv("GRADING_TEMPERATURE", "0.1"))

# Quiz Configuration
DEFAULT_QUIZ_ID = os.getenv("QUIZ_ID", "confirmation-2026-02-17")
NO_ANSWER_TEXT = "No Answer"

# Form submissions store
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./homework.db")

# Logging
LOG_FILE = os.getenv("LOG_FILE", "grader.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_api_key() -> str | None:
    """Gemini API key, read from the environment at call time"""
    return os.getenv("GEMINI_API_KEY")
