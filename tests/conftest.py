import os

# Keep test runs from writing grader.log into the working tree
os.environ["LOG_FILE"] = ""

import json
import time
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from backend.database import Base, get_db
from backend.main import app
from grading.grader import HomeworkGrader


class FakeModels:
    """Stands in for genai.Client().models"""

    def __init__(self, text=None, error=None, delay=0):
        self.text = text
        self.error = error
        self.delay = delay
        self.prompts = []

    def generate_content(self, model, contents, config=None):
        self.prompts.append(contents)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeGenaiClient:
    def __init__(self, text=None, error=None, delay=0):
        self.models = FakeModels(text=text, error=error, delay=delay)


def make_grader(text=None, error=None, delay=0, timeout=5):
    return HomeworkGrader(
        api_key="test-key",
        timeout=timeout,
        client=FakeGenaiClient(text=text, error=error, delay=delay)
    )


def ai_reply(grades, holistic="Dear Student, well done. Review the moral act."):
    return json.dumps({"grades": grades, "holistic_feedback": holistic})


OPEN_GRADES = [
    {"id": "may_crowning", "score": 4, "analysis": "Good link to Mary.", "sample_answer": "Honoring Mary as Queen."},
    {"id": "meditative_vs_contemplative", "score": 3, "analysis": "Partly right.", "sample_answer": "Thinking vs gazing."},
    {"id": "conflict_reality", "score": 5, "analysis": "Excellent.", "sample_answer": "Conflict is personal."},
]


@pytest.fixture
def grader_factory():
    return make_grader


@pytest_asyncio.fixture
async def db_sessionmaker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_sessionmaker):
    async def override_get_db():
        async with db_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
