"""
Database models and initialization
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from config import DATABASE_URL

engine = create_async_engine(DATABASE_URL, echo=False)
async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


class GradedSubmission(Base):
    """
    A graded homework report posted to the form-submission backend.

    The full emailed report is kept as HTML so it can be re-sent to the
    parent without regrading.
    """
    __tablename__ = "graded_submissions"

    id = Column(Integer, primary_key=True, index=True)
    form_name = Column(String, index=True, default="homework-grades")
    student_name = Column(String)
    parent_email = Column(String, nullable=True)
    due_date = Column(String, nullable=True)
    percent_score = Column(String)  # As displayed, e.g. "87.5"
    ai_feedback = Column(Text, nullable=True)
    email_html_body = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


async def init_db():
    """Create all tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    """Dependency for getting database session"""
    async with async_session() as session:
        yield session
