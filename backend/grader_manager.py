"""
Shared grader instance
Creates the Gemini-backed grader once and reuses it across requests.
"""
from typing import Optional

import config
from grading.grader import HomeworkGrader
from utils.logger import setup_logger

logger = setup_logger("grader_manager")


class GraderManager:
    """Lazily builds the HomeworkGrader; rebuilds it if the API key changes"""

    def __init__(self):
        self._grader: Optional[HomeworkGrader] = None
        self._api_key: Optional[str] = None

    def get_grader(self) -> Optional[HomeworkGrader]:
        """Get or create the shared grader, or None when no API key is set"""
        api_key = config.get_api_key()
        if not api_key:
            return None

        if self._grader is None or api_key != self._api_key:
            logger.info("Initializing HomeworkGrader...")
            self._grader = HomeworkGrader(api_key=api_key)
            self._api_key = api_key
        return self._grader


grader_manager = GraderManager()


def get_grader() -> Optional[HomeworkGrader]:
    """Dependency for getting the shared grader"""
    return grader_manager.get_grader()
