from typing import Any

from pydantic import BaseModel

from app.schemas.course import AssignmentGroupIn, CourseIn


class ScoringRequest(BaseModel):
    course: CourseIn
    assignment_group: AssignmentGroupIn
    # left raw: malformed entries are skipped by the scorer, not rejected here
    submissions: list[Any]
