"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import random
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from safeprep.quiz.models import Domain, ExternalQuestion, Lesson, PracticeQuestion, Question, Section  # noqa: E402

EXAM_TARGETS = {
    Domain.INTRO_SCRUM: 11,
    Domain.SM_ROLE: 13,
    Domain.TEAM_EVENTS: 9,
    Domain.ART_EVENTS: 12,
}


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_question(
    qid: str,
    domain: Domain | None = Domain.INTRO_SCRUM,
    text: str | None = None,
    correct_index: int = 0,
    **kwargs,
) -> Question:
    """Build a four-option question with unique text."""
    return Question(
        id=qid,
        text=text or f"Question {qid}: which option is correct for scenario {qid}?",
        options=("A", "B", "C", "D"),
        correct_index=correct_index,
        domain=domain,
        **kwargs,
    )


def make_domain_pool(counts: dict[Domain, int], prefix: str = "q") -> list[Question]:
    """Pool with the given number of questions per domain."""
    pool = []
    for n, (domain, count) in enumerate(counts.items(), 1):
        for i in range(count):
            pool.append(make_question(f"{prefix}{n}-{i}", domain, correct_index=i % 4))
    return pool


def make_external(qid: str, text: str | None = None, **fields) -> ExternalQuestion:
    data = {
        "id": qid,
        "question": text or f"External question {qid} about team practices?",
        "options": ["A", "B", "C", "D"],
        "correctIndex": 0,
    }
    data.update(fields)
    return ExternalQuestion.model_validate(data)


def make_practice(qid: str, topic: str, text: str | None = None) -> PracticeQuestion:
    return PracticeQuestion(
        id=qid,
        text=text or f"Practice question {qid} on {topic}?",
        options=("A", "B", "C", "D"),
        correct_index=1,
        topic=topic,
    )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def rng():
    """Seeded random source for reproducible draws."""
    return random.Random(1234)


@pytest.fixture
def exact_exam_pool():
    """Pool holding exactly the 45-question domain targets."""
    return make_domain_pool(EXAM_TARGETS)


@pytest.fixture
def large_exam_pool():
    """Pool with 25 questions per domain."""
    return make_domain_pool({domain: 25 for domain in Domain})


@pytest.fixture
def sample_lesson():
    """Lesson 2 with a subset of its real sections."""
    return Lesson(
        id=2,
        title="Characterizing the Role of the Scrum Master",
        short_title="SM/TC Role",
        sections=(
            Section(id="sm-role", name="SM Responsibilities"),
            Section(id="servant-leadership", name="Servant Leadership"),
            Section(id="events", name="ART-Level Events"),
        ),
    )


@pytest.fixture
def sample_external_question():
    """Provide a sample external question record (camelCase store shape)."""
    return {
        "id": "abc123",
        "question": "Which event provides visibility into ART progress and impediments?",
        "options": ["Coach Sync", "PO Sync", "System Demo", "Team Sync"],
        "correctIndex": 0,
        "domain": "Defining the SM/TC Role",
        "lessonId": 2,
        "sectionId": "events",
        "enabled": True,
        "createdBy": "admin@example.com",
    }
