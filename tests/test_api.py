"""Tests for the FastAPI backend."""

import pytest

from conftest import OPEN_GRADES, ai_reply, make_grader
from backend.grader_manager import get_grader
from backend.main import app

FULL_ANSWERS = {
    "book_title": "The Imitation of Christ",
    "moral_act_parts": ["The Object Chosen", "The Intention", "The Circumstances"],
    "may_crowning": "Honoring Mary",
}


@pytest.fixture
def working_grader():
    app.dependency_overrides[get_grader] = lambda: make_grader(text=ai_reply(OPEN_GRADES))
    yield
    app.dependency_overrides.pop(get_grader, None)


@pytest.fixture
def failing_grader():
    app.dependency_overrides[get_grader] = lambda: make_grader(text="<html>502 Bad Gateway</html>")
    yield
    app.dependency_overrides.pop(get_grader, None)


@pytest.mark.asyncio
async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "running"


@pytest.mark.asyncio
async def test_submit_homework_returns_report(client, working_grader):
    r = await client.post("/submit-homework", json={"answers": FULL_ANSWERS})
    assert r.status_code == 200

    data = r.json()
    assert data["maxScore"] == 52
    assert data["totalScore"] == 2 + 3 + 4 + 3 + 5
    assert data["holisticFeedback"].startswith("Dear Student")

    by_id = {item["id"]: item for item in data["results"]}
    assert by_id["moral_act_parts"]["isCorrect"] is True
    assert by_id["moral_act_parts"]["correctAnswer"] == "The Object Chosen, The Intention, The Circumstances"
    assert by_id["may_crowning"]["analysis"] == "Good link to Mary."
    assert by_id["may_crowning"]["sampleAnswer"] == "Honoring Mary as Queen."
    assert by_id["goretti_dream"]["userAnswer"] == "No Answer"
    assert sum(item["maxPoints"] for item in data["results"]) == data["maxScore"]


@pytest.mark.asyncio
async def test_submit_homework_for_another_quiz(client, working_grader):
    r = await client.post("/submit-homework?quiz_id=confirmation-practice", json={"answers": FULL_ANSWERS})
    data = r.json()
    assert data["maxScore"] == 10
    assert [item["id"] for item in data["results"]] == [
        "prayer_form_intercession", "moral_act_parts", "may_crowning"
    ]


@pytest.mark.asyncio
async def test_submit_homework_unknown_quiz(client, working_grader):
    r = await client.post("/submit-homework?quiz_id=nope", json={"answers": {}})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_submit_homework_malformed_body_is_an_empty_submission(client, working_grader):
    r = await client.post(
        "/submit-homework",
        content=b"{not json",
        headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 200

    data = r.json()
    objective = [item for item in data["results"] if item["type"] != "open"]
    assert all(item["points"] == 0 for item in objective)
    assert all(item["userAnswer"] == "No Answer" for item in objective)


@pytest.mark.asyncio
async def test_submit_homework_assistant_failure_keeps_objective_scores(client, failing_grader):
    r = await client.post("/submit-homework", json={"answers": FULL_ANSWERS})
    assert r.status_code == 200

    data = r.json()
    open_items = [item for item in data["results"] if item["type"] == "open"]
    assert all(item["points"] == 0 and item["analysis"] for item in open_items)
    assert data["totalScore"] == 2 + 3
    assert data["holisticFeedback"].startswith("Error generating AI feedback:")


@pytest.mark.asyncio
async def test_submit_homework_without_api_key(client, monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    r = await client.post("/submit-homework", json={"answers": FULL_ANSWERS})
    assert r.status_code == 200

    data = r.json()
    assert data["totalScore"] == 0
    assert data["maxScore"] == 0
    assert data["results"][0]["type"] == "error"


@pytest.mark.asyncio
async def test_submit_homework_rejects_get(client):
    r = await client.get("/submit-homework")
    assert r.status_code == 405


@pytest.mark.asyncio
async def test_quiz_form_and_definition(client):
    r = await client.get("/quiz/confirmation-practice")
    assert r.status_code == 200
    assert 'name="moral_act_parts"' in r.text
    assert 'type="checkbox"' in r.text

    r = await client.get("/quiz/confirmation-practice/definition")
    definition = r.json()
    assert definition["total_points"] == 10
    assert "correct" not in definition["questions"][0]


@pytest.mark.asyncio
async def test_quiz_form_submit_renders_results_and_stores_report(client, working_grader):
    form = {
        "name": "Maria Goretti",
        "email": "parent@example.com",
        "prayer_form_intercession": "Intercession",
        "moral_act_parts": ["The Object Chosen", "The Intention"],
        "may_crowning": "Honoring Mary",
    }
    r = await client.post("/quiz/confirmation-practice/submit", data=form)
    assert r.status_code == 200
    assert "Teacher's Feedback" in r.text
    assert 'id="final-score">8<' in r.text

    r = await client.get("/forms/homework-grades")
    submissions = r.json()["submissions"]
    assert len(submissions) == 1
    assert submissions[0]["student_name"] == "Maria Goretti"
    assert submissions[0]["percent_score"] == "80.0"
    assert submissions[0]["parent_email"] == "parent@example.com"


@pytest.mark.asyncio
async def test_quiz_form_submit_requires_full_name(client, working_grader):
    r = await client.post("/quiz/confirmation-practice/submit", data={"name": "Maria"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_forms_backend_stores_posted_report(client):
    r = await client.post("/forms/homework-grades", data={
        "student_name": "John Paul",
        "parent_email": "parent@example.com",
        "due_date": "Feb 17th, 2026",
        "percent_score": "75.0",
        "ai_feedback": "Great work",
        "email_html_body": "<div>report</div>",
    })
    assert r.status_code == 200
    assert r.json()["success"] is True

    r = await client.get("/status/")
    assert r.json()["total_submissions"] == 1


@pytest.mark.asyncio
async def test_forms_backend_rejects_single_word_name(client):
    r = await client.post("/forms/homework-grades", data={"student_name": "John"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_submit_homework_non_finite_assistant_score(client):
    grades = [dict(OPEN_GRADES[0], score=float("nan"))] + OPEN_GRADES[1:]
    app.dependency_overrides[get_grader] = lambda: make_grader(text=ai_reply(grades))
    try:
        r = await client.post("/submit-homework", json={"answers": FULL_ANSWERS})
    finally:
        app.dependency_overrides.pop(get_grader, None)
    assert r.status_code == 200

    by_id = {item["id"]: item for item in r.json()["results"]}
    assert by_id["may_crowning"]["points"] == 0
    assert r.json()["totalScore"] == 2 + 3 + 3 + 5


@pytest.mark.asyncio
async def test_submit_homework_unexpected_sdk_error_degrades(client):
    app.dependency_overrides[get_grader] = lambda: make_grader(error=ValueError("Expecting value"))
    try:
        r = await client.post("/submit-homework", json={"answers": FULL_ANSWERS})
    finally:
        app.dependency_overrides.pop(get_grader, None)
    assert r.status_code == 200
    assert r.json()["totalScore"] == 2 + 3
    assert r.json()["holisticFeedback"].startswith("Error generating AI feedback:")
