from typing import Any

from pydantic import BaseModel


class CourseIn(BaseModel):
    id: int | str

    class Config:
        extra = "allow"


class AssignmentGroupIn(BaseModel):
    id: int | str | None = None
    course_id: int | str | None = None

    # validated one by one while indexing, so a bad entry can be reported by id
    assignments: list[dict[str, Any]]

    class Config:
        extra = "allow"
