"""Report rendering: quiz form, results page, email body and console text.

Every value that came from a student or from the grading assistant is
escaped before it lands in HTML.
"""
import html
from typing import Dict, Iterable, Tuple

from grading.models import (
    Answer, QuestionResult, QuizVariant, Report,
    SINGLE_CHOICE, MULTI_SELECT, FREE_TEXT,
)

GREEN = "#2e7d32"
RED = "#c62828"
GOLD = "#D4AF37"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
</head>
<body style="font-family: Georgia, serif; color: #333; max-width: 760px; margin: 0 auto; padding: 1.5rem;">
{body}
</body>
</html>
"""


def esc(value) -> str:
    return html.escape("" if value is None else str(value))


def fmt_points(value: float) -> str:
    """3.0 -> '3', 1.5 -> '1.5'"""
    return f"{value:g}"


def collect_answers(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Answer]:
    """
    Turn submitted form pairs into an answers mapping.

    A key seen once keeps its string value; a repeated key (several ticked
    checkboxes) becomes a list in submission order.
    """
    answers: Dict[str, Answer] = {}
    for key, value in pairs:
        if key in answers:
            if not isinstance(answers[key], list):
                answers[key] = [answers[key]]
            answers[key].append(value)
        else:
            answers[key] = value
    return answers


def is_full_name(name: str) -> bool:
    """A full name has at least two words"""
    return bool(name) and len(name.split()) >= 2


def percent_score(report: Report) -> str:
    if report.max_score <= 0:
        return "0"
    return f"{report.total_score / report.max_score * 100:.1f}"


def _is_success(result: QuestionResult) -> bool:
    if result.type == FREE_TEXT:
        return result.points > 0
    return bool(result.is_correct)


def render_quiz_form(quiz: QuizVariant, action: str) -> str:
    """HTML form for a quiz variant, posting urlencoded fields to `action`"""
    parts = [
        f'<h1>{esc(quiz.title)}</h1>',
        f'<p class="due-date">Due: {esc(quiz.due_date)}</p>',
        f'<form id="homework-form" method="post" action="{esc(action)}">',
        '<p><label>Full name <input type="text" name="name" required></label></p>',
        '<p><label>Parent email <input type="email" name="email"></label></p>',
    ]

    for index, q in enumerate(quiz.questions, 1):
        parts.append('<fieldset style="margin-bottom: 1.5rem;">')
        parts.append(f'<legend>{index}. {esc(q.text)} ({fmt_points(q.points)} pts)</legend>')
        if q.type == FREE_TEXT:
            parts.append(f'<textarea name="{esc(q.id)}" rows="4" cols="70"></textarea>')
        else:
            input_type = "radio" if q.type == SINGLE_CHOICE else "checkbox"
            for option in q.options:
                parts.append(
                    f'<label style="display: block;"><input type="{input_type}" '
                    f'name="{esc(q.id)}" value="{esc(option)}"> {esc(option)}</label>'
                )
        parts.append('</fieldset>')

    parts.append('<button type="submit">Submit Homework</button>')
    parts.append('</form>')
    return PAGE_TEMPLATE.format(title=esc(quiz.title), body="\n".join(parts))


def _render_result_item(result: QuestionResult) -> str:
    border = GREEN if result.is_correct or result.points == result.max_points else RED
    content = [
        f'<div class="result-item" data-id="{esc(result.id)}" style="margin-bottom: 2rem; padding: 1.5rem; '
        f'border-left: 5px solid {border}; background-color: #fff;">',
        '<div style="display: flex; justify-content: space-between;">',
        f'<h4 style="margin: 0;">{esc(result.text)}</h4>',
        f'<span style="font-weight: bold; white-space: nowrap;">'
        f'{fmt_points(result.points)} / {fmt_points(result.max_points)} pts</span>',
        '</div>',
        f'<div><strong>Your Answer:</strong> <span style="font-style: italic;">{esc(result.user_answer)}</span></div>',
    ]

    # Objective miss: show the key
    if result.type in (SINGLE_CHOICE, MULTI_SELECT) and not result.is_correct:
        content.append(
            f'<div style="color: {GREEN}; margin-top: 0.5rem;"><strong>Correct Answer:</strong> '
            f'{esc(result.correct_answer)}</div>'
        )

    if result.type == FREE_TEXT:
        content.append(
            '<div style="background-color: #f5f5f5; padding: 1rem; margin-top: 1rem;">'
            f'<p><strong>AI Analysis:</strong> {esc(result.analysis or "No analysis available.")}</p>'
            f'<p style="font-size: 0.9em; color: #555;"><strong>Sample Answer:</strong> '
            f'{esc(result.sample_answer or "N/A")}</p>'
            '</div>'
        )
    elif result.type not in (SINGLE_CHOICE, MULTI_SELECT) and result.analysis:
        content.append(f'<p>{esc(result.analysis)}</p>')

    content.append('</div>')
    return "\n".join(content)


def render_results_html(report: Report, title: str = "Homework Results") -> str:
    """Results page: score, holistic feedback, then every result in report order"""
    parts = [
        f'<h1>{esc(title)}</h1>',
        f'<p style="font-size: 1.5em;">Score: <span id="final-score">{fmt_points(report.to_dict()["totalScore"])}</span>'
        f' / <span id="max-score">{fmt_points(report.max_score)}</span></p>',
        '<div id="detailed-results">',
    ]
    if report.holistic_feedback:
        parts.append(
            f'<div class="holistic-feedback" style="margin-bottom: 2rem; padding: 1.5rem; '
            f'background-color: rgba(212, 175, 55, 0.1); border: 1px solid {GOLD};">'
            "<h3>Teacher's Feedback</h3>"
            f'<p style="font-size: 1.1em; line-height: 1.6;">{esc(report.holistic_feedback)}</p>'
            '</div>'
        )
    parts.extend(_render_result_item(r) for r in report.results)
    parts.append('</div>')
    return PAGE_TEMPLATE.format(title=esc(title), body="\n".join(parts))


def render_email_html(
    report: Report,
    student_name: str,
    due_date: str,
    program_name: str = "Our Lady of Peace Catechism Program"
) -> str:
    """Full report as an inline-styled HTML email body"""
    parts = [
        f'<div style="font-family: Georgia, serif; color: #333; max-width: 600px; margin: 0 auto; '
        f'padding: 20px; background: #fff; border: 1px solid #eee;">',
        f'<h2 style="color: #2c3e50; text-align: center; border-bottom: 2px solid {GOLD}; '
        f'padding-bottom: 10px;">Confirmation Assessment Results</h2>',
        '<div style="background: #f9f9f9; padding: 15px; border-radius: 5px; margin-bottom: 20px; text-align: center;">',
        f'<p style="margin: 5px 0; color: #666;">Student: <strong>{esc(student_name or "Anonymous")}</strong></p>',
        f'<p style="margin: 5px 0; color: #666;">Due Date: <strong>{esc(due_date)}</strong></p>',
        f'<div style="font-size: 24px; font-weight: bold; color: {GOLD}; margin-top: 10px;">'
        f'Score: {percent_score(report)}%</div>',
        '</div>',
        f'<div style="margin-bottom: 30px; padding: 15px; background-color: rgba(212, 175, 55, 0.1); '
        f'border-left: 4px solid {GOLD};">',
        '<h3 style="margin-top: 0; color: #8a6d1c;">Teacher\'s Feedback</h3>',
        f'<p style="line-height: 1.5;">{esc(report.holistic_feedback or "No AI feedback available.")}</p>',
        '</div>',
        '<h3 style="border-bottom: 1px solid #eee; padding-bottom: 5px;">Detailed Breakdown</h3>',
    ]

    for index, result in enumerate(report.results, 1):
        ok = _is_success(result)
        color = "#27ae60" if ok else "#c0392b"
        icon = "✓" if ok else "✗"
        parts.append(
            '<div style="margin-bottom: 20px; border-bottom: 1px solid #f0f0f0; padding-bottom: 15px;">'
            f'<p style="font-weight: bold; margin-bottom: 5px; color: #444;">'
            f'<span style="color: {color}; margin-right: 5px;">{icon}</span>'
            f'{index}. {esc(result.text)}'
            f'<span style="float: right; font-size: 0.85em; color: #888;">'
            f'{fmt_points(result.points)}/{fmt_points(result.max_points)} pts</span></p>'
            '<div style="margin-left: 20px; font-size: 0.95em;">'
            f'<p style="margin: 3px 0;"><strong>Student Answer:</strong> '
            f'<span style="font-style: italic;">{esc(result.user_answer)}</span></p>'
        )
        if result.type in (SINGLE_CHOICE, MULTI_SELECT) and not result.is_correct:
            parts.append(
                f'<p style="margin: 3px 0; color: #27ae60;"><strong>Correct Answer:</strong> '
                f'{esc(result.correct_answer)}</p>'
            )
        if result.type == FREE_TEXT:
            parts.append(
                '<div style="background: #f5f5f5; padding: 10px; margin-top: 8px; border-radius: 4px; font-size: 0.9em;">'
                f'<p style="margin: 0 0 5px 0;"><strong>Analysis:</strong> {esc(result.analysis or "N/A")}</p>'
                f'<p style="margin: 0; color: #666;"><strong>Sample:</strong> {esc(result.sample_answer or "N/A")}</p>'
                '</div>'
            )
        parts.append('</div></div>')

    parts.append(
        '<div style="text-align: center; margin-top: 30px; font-size: 12px; color: #aaa;">'
        f'&copy; {esc(program_name)}</div>'
    )
    parts.append('</div>')
    return "\n".join(parts)


def render_text(report: Report) -> str:
    """Plain-text report for the console"""
    data = report.to_dict()
    lines = []
    if report.quiz_id:
        lines.append(f"QUIZ: {report.quiz_id}")
    if report.metadata.get("name"):
        lines.append(f"STUDENT: {report.metadata['name']}")
    lines += ["STUDENT GRADES:", "-" * 40]
    for result in report.results:
        lines.append(f"  {result.id}: {fmt_points(result.points)}/{fmt_points(result.max_points)}")
        lines.append(f"       Answer: {result.user_answer}")
        if result.type in (SINGLE_CHOICE, MULTI_SELECT) and not result.is_correct:
            lines.append(f"       Correct: {result.correct_answer}")
        if result.analysis:
            lines.append(f"       Feedback: {result.analysis}")
        lines.append("")
    lines.append("-" * 40)
    lines.append(f"  TOTAL: {fmt_points(data['totalScore'])}/{fmt_points(report.max_score)} ({percent_score(report)}%)")
    lines.append("")
    lines.append("OVERALL FEEDBACK:")
    lines.append(f"  {report.holistic_feedback}")
    return "\n".join(lines)
