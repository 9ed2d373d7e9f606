from typing import Any


class ScoringError(Exception):
    """Base class for everything compute() can complain about."""


class InvalidInputType(ScoringError):
    pass


class GroupMismatch(ScoringError):
    def __init__(self, group_course_id: Any, course_id: Any):
        self.group_course_id = group_course_id
        self.course_id = course_id
        super().__init__(
            f"AssignmentGroup belongs to course {group_course_id!r}, "
            f"not to course {course_id!r}"
        )


class InvalidAssignment(ScoringError):
    def __init__(self, assignment_id: Any, reason: str):
        self.assignment_id = assignment_id
        self.reason = reason
        super().__init__(f"Invalid assignment {assignment_id!r}: {reason}")


class MalformedSubmission(ScoringError):
    """Raised for a single unusable submission; the scoring loop skips it."""

    def __init__(self, submission: Any, reason: str):
        self.submission = submission
        self.reason = reason
        super().__init__(f"{reason}: {submission!r}")
