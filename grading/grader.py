"""AI Grading Engine using Gemini

Sends the open-ended answers, together with the objective results as context,
to Gemini in a single request and parses the structured JSON response.
"""
import asyncio
import json
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors, types
from pydantic import BaseModel, Field, ValidationError

from config import GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS, GRADING_TEMPERATURE
from grading.models import GradingServiceError, QuestionResult, QuizVariant
from utils.logger import setup_logger

logger = setup_logger("grader")


GRADING_PROMPT = """{persona}

TASK 1: Grade the following {open_count} open-ended student answers.
For each answer, provide:
- A score from 0 to MAX_POINTS based on accuracy and depth (integers only).
- A brief, encouraging, but corrective feedback analysis (1-2 sentences).
- A sample "perfect" answer.

TASK 2: Provide a "Holistic Feedback" summary for the student.
- Review the "Objective Results" (Multiple Choice/Checkbox) provided below to see what they got Right/Wrong.
- Review their Open-Ended answers.
- Write a short paragraph (3-4 sentences) addressing the student directly. Praise their strengths (topics they know) and gently point out areas to review (topics they missed). Be encouraging!

--- DATA ---

[Objective Results Context]:
{objective_context}

[Open-Ended Questions to Grade]:
{open_questions}

--- OUTPUT FORMAT ---
Return a SINGLE JSON object strictly following this structure:
{{
  "grades": [
    {{ "id": "question_id", "score": 5, "analysis": "...", "sample_answer": "..." }},
    ...
  ],
  "holistic_feedback": "Dear Student, excellent work on... You might want to review..."
}}
"""


class AIGrade(BaseModel):
    """One graded open answer as returned by the assistant"""
    id: str
    # json.loads accepts NaN and Infinity literals
    score: float = Field(allow_inf_nan=False)
    analysis: str
    sample_answer: str


class AIGradingOutput(BaseModel):
    # Entries are validated one by one when merged, so a single bad entry
    # only costs that question
    grades: List[Any]
    holistic_feedback: Optional[str] = None


def build_prompt(
    quiz: QuizVariant,
    objective_results: List[QuestionResult],
    open_results: List[QuestionResult]
) -> str:
    """Build the grading prompt for one submission"""
    objective_context = "\n".join(
        f'- Q: "{r.text}" | Student Answer: "{r.user_answer}" | '
        f'Correct: {"YES" if r.is_correct else "NO"} (Correct Answer: {r.correct_answer})'
        for r in objective_results
    )
    open_questions = ",\n".join(
        json.dumps({
            "id": r.id,
            "question": r.text,
            "max_points": r.max_points,
            "student_answer": r.user_answer,
        }, ensure_ascii=False)
        for r in open_results
    )
    return GRADING_PROMPT.format(
        persona=quiz.grader_persona,
        open_count=len(open_results),
        objective_context=objective_context,
        open_questions=open_questions,
    )


def strip_code_fences(text: str) -> str:
    """Extract the JSON body from a ```json ... ``` block if present"""
    text = text.strip()
    if "```json" in text:
        start = text.find("```json") + 7
        end = text.find("```", start)
        return text[start:end if end != -1 else None].strip()
    if "```" in text:
        start = text.find("```") + 3
        end = text.find("```", start)
        return text[start:end if end != -1 else None].strip()
    return text


def parse_grading_output(text: str) -> AIGradingOutput:
    """Parse the assistant's reply; anything unusable raises GradingServiceError"""
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse grading response: {e}")
        logger.error(f"Raw response: {cleaned[:1000]}")
        raise GradingServiceError(f"Unparsable response from Gemini: {e}") from e

    if not isinstance(data, dict):
        raise GradingServiceError("Gemini response is not a JSON object")

    try:
        return AIGradingOutput.model_validate(data)
    except ValidationError as e:
        raise GradingServiceError(
            f"Gemini response is missing expected fields ({e.error_count()} error(s))"
        ) from e


class HomeworkGrader:
    """Open-answer grader backed by Gemini"""

    def __init__(self, api_key: str, model: str = GEMINI_MODEL,
                 timeout: float = GEMINI_TIMEOUT_SECONDS, client=None):
        self.model = model
        self.timeout = timeout
        self.client = client or genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout * 1000))
        )
        logger.info(f"Using model: {self.model}")

    def grade(
        self,
        quiz: QuizVariant,
        objective_results: List[QuestionResult],
        open_results: List[QuestionResult]
    ) -> AIGradingOutput:
        """
        Grade the open answers of one submission.

        Args:
            quiz: Quiz variant being graded (provides the persona line)
            objective_results: Already scored radio/checkbox results, as context
            open_results: Pending open-ended results to grade

        Returns:
            Parsed grades and holistic feedback

        Raises:
            GradingServiceError: on any API, network or payload problem
        """
        prompt = build_prompt(quiz, objective_results, open_results)
        logger.info(f"Sending {len(open_results)} open answers to {self.model}...")

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=GRADING_TEMPERATURE,  # Low temperature for consistent grading
                    response_mime_type="application/json"
                )
            )
            text = response.text
        except errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise GradingServiceError(f"Gemini API Error {e.code}: {e.message}") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error contacting Gemini: {e}")
            raise GradingServiceError(f"Network error contacting Gemini: {e}") from e
        except Exception as e:
            # e.g. the SDK failing to decode a non-JSON 200 from a proxy
            logger.error(f"Error calling Gemini: {type(e).__name__}: {e}")
            raise GradingServiceError(f"Error calling Gemini: {e}") from e

        if not text:
            raise GradingServiceError("No content returned from Gemini")

        logger.info("Received response from Gemini")
        output = parse_grading_output(text)
        logger.info(f"Grading complete. {len(output.grades)} grade entries")
        return output

    async def grade_async(
        self,
        quiz: QuizVariant,
        objective_results: List[QuestionResult],
        open_results: List[QuestionResult]
    ) -> AIGradingOutput:
        """Run grade() off the event loop, bounded by the configured timeout"""
        loop = asyncio.get_running_loop()
        try:
            return await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    lambda: self.grade(quiz, objective_results, open_results)
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini did not answer within {self.timeout:g}s")
            raise GradingServiceError(f"Grading assistant timed out after {self.timeout:g}s") from e
