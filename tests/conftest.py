"""
Shared fixtures.

The app reads its settings at import time, so the environment is pinned to a
throwaway SQLite file before anything from mock_interview is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="mock-interview-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["QUESTION_SOURCE"] = "local"
os.environ["PRACTICE_QUESTION_COUNT"] = "5"
os.environ["REAL_QUESTIONS_PER_CATEGORY"] = "1"

from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from mock_interview.db.base import Base, SessionLocal, engine
from mock_interview.main import app
from mock_interview.models.enums import Category, Language, Level, Position
from mock_interview.models.user import User
from mock_interview.services.answer_eval import AnswerEvaluationService
from mock_interview.services.auth import create_access_token
from mock_interview.services.interview_detail_service import InterviewDetailService
from mock_interview.services.interview_service import InterviewService, get_interview_service


class NumberedQuestionGenerator:
    """Deterministic generator: "<CATEGORY> question 1..n" in order."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []

    def generate(self, user, category: Category, count: int) -> List[Dict]:
        self.calls.append((category, count))
        return [
            {"category": category, "question": f"{category.value} question {i}"}
            for i in range(1, count + 1)
        ]


@pytest.fixture(autouse=True)
def tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_id(db) -> int:
    user = User(
        email="candidate@example.com",
        password="$2b$12$notarealhash",
        username="candidate",
        language=Language.PYTHON,
        level=Level.LV2,
        position=Position.BACKEND,
    )
    db.add(user)
    db.commit()
    return user.id


@pytest.fixture
def auth_headers(user_id) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, 'candidate@example.com')}"}


@pytest.fixture
def generator() -> NumberedQuestionGenerator:
    return NumberedQuestionGenerator()


@pytest.fixture
def service(generator) -> InterviewService:
    detail_service = InterviewDetailService(
        generator=generator,
        evaluator=AnswerEvaluationService(use_openai=False),
        session_factory=SessionLocal,
    )
    return InterviewService(detail_service)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_interview_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
