from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.core.deps import get_now
from app.main import app

# well after every due date in the fixtures below
FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def override_get_now():
    return FIXED_NOW


@pytest.fixture()
def now():
    return FIXED_NOW


@pytest.fixture()
def course_info():
    return {"id": 1, "name": "JavaScript Fundamentals"}


@pytest.fixture()
def assignment_group():
    return {
        "id": 1,
        "name": "Homework Assignments",
        "course_id": 1,
        "group_weight": 0.4,
        "assignments": [
            {"id": 1, "name": "Variables", "due_at": "2023-10-01", "points_possible": 100},
            {"id": 2, "name": "Functions", "due_at": "2023-10-08", "points_possible": 200},
            {"id": 3, "name": "Objects", "due_at": "2023-10-15", "points_possible": 150},
        ],
    }


@pytest.fixture()
def learner_submissions():
    return [
        {"learner_id": 101, "assignment_id": 1, "submission": {"submitted_at": "2023-09-30", "score": 85}},
        # late
        {"learner_id": 101, "assignment_id": 2, "submission": {"submitted_at": "2023-10-09", "score": 180}},
        # duplicate, higher score wins
        {"learner_id": 101, "assignment_id": 1, "submission": {"submitted_at": "2023-09-29", "score": 90}},
        # late
        {"learner_id": 102, "assignment_id": 1, "submission": {"submitted_at": "2023-10-02", "score": 95}},
        {"learner_id": 102, "assignment_id": 3, "submission": {"submitted_at": "2023-10-10", "score": 120}},
        {"learner_id": 103, "assignment_id": 2, "submission": {"submitted_at": "2023-10-05", "score": 150}},
    ]


@pytest.fixture()
def client():
    """Test client with the clock pinned via dependency override."""
    app.dependency_overrides[get_now] = override_get_now
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
