"""
Local Grading Script
====================
Grades one saved submission without the web server:
1. Loads the answers JSON ({"answers": {...}} or a bare mapping)
2. Scores it against a quiz variant, calling Gemini for open answers
3. Prints the report and saves the JSON response next to the input
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import config
from grading.grader import HomeworkGrader
from grading.report import configuration_error_report, grade_submission
from grading.report_renderer import render_text
from quiz_config import QUIZZES, get_quiz


def _coerce_answer(value):
    """Strings stay, numbers become strings, lists keep their scalar items"""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, list):
        items = [_coerce_answer(v) for v in value]
        return [v for v in items if isinstance(v, str)]
    return None


def load_answers(path: Path) -> dict:
    """Read answers from a JSON file, dropping values a form could not send"""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and isinstance(data.get("answers"), dict):
        data = data["answers"]
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain an answers object")

    answers = {}
    for key, value in data.items():
        coerced = _coerce_answer(value)
        if coerced is None:
            print(f"[WARN] Ignoring answer '{key}': unsupported value {value!r}")
            continue
        answers[key] = coerced
    return answers


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Grade a saved homework submission")
    parser.add_argument("answers_file", type=Path, help="JSON file with the student's answers")
    parser.add_argument("--quiz", default=config.DEFAULT_QUIZ_ID, choices=sorted(QUIZZES),
                        help="Quiz variant to grade against")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("HOMEWORK GRADER - LOCAL RUN")
    print("=" * 60)
    print()

    try:
        answers = load_answers(args.answers_file)
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    quiz = get_quiz(args.quiz)
    print(f"[OK] Quiz: {quiz.title} ({len(quiz.questions)} questions)")
    print(f"[OK] Answers: {args.answers_file.name}")
    print()

    api_key = config.get_api_key()
    if not api_key:
        print("[ERROR] GEMINI_API_KEY is not set")
        report = configuration_error_report()
    else:
        grader = HomeworkGrader(api_key=api_key)
        report = asyncio.run(grade_submission(quiz, answers, grader))

    print(render_text(report))
    print()

    output_file = args.answers_file.with_name(f"{args.answers_file.stem}_graded.json")
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)
    print(f"[OK] Full results saved to: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
