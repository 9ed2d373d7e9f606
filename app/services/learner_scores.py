import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ValidationError

from app.core.config import LATE_PENALTY_FRACTION
from app.core.dates import as_utc
from app.core.errors import (
    GroupMismatch,
    InvalidAssignment,
    InvalidInputType,
    MalformedSubmission,
    ScoringError,
)
from app.schemas.assignment import AssignmentIn
from app.schemas.learner_summary import LearnerSummary
from app.schemas.submission import SubmissionDetailIn

logger = logging.getLogger(__name__)


@dataclass
class _LearnerAccumulator:
    id: Any
    total_score: float = 0.0
    total_possible: float = 0.0
    assignment_scores: dict[Any, float] = field(default_factory=dict)


@dataclass
class _ParsedSubmission:
    learner_id: Any
    assignment_id: Any
    submitted_at: datetime
    score: float


def _as_record(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _validate_inputs(course: Any, assignment_group: Any, submissions: Any) -> None:
    if not isinstance(course, Mapping):
        raise InvalidInputType(f"course must be a record, got {type(course).__name__}")
    if not isinstance(assignment_group, Mapping):
        raise InvalidInputType(
            f"assignment_group must be a record, got {type(assignment_group).__name__}"
        )
    if not _is_sequence(submissions):
        raise InvalidInputType(
            f"submissions must be a list, got {type(submissions).__name__}"
        )
    if not _is_sequence(assignment_group.get("assignments")):
        raise InvalidInputType("assignment_group.assignments must be a list")

    if assignment_group.get("course_id") != course.get("id"):
        raise GroupMismatch(assignment_group.get("course_id"), course.get("id"))


def _index_assignments(assignments: Sequence[Any]) -> dict[Any, AssignmentIn]:
    """
    Validate every assignment and index it by id.

    Any bad assignment aborts the whole run, so this has to happen before
    a single submission is scored.
    """
    index: dict[Any, AssignmentIn] = {}
    for raw in assignments:
        raw = _as_record(raw)
        if not isinstance(raw, Mapping):
            raise InvalidAssignment(None, f"expected a record, got {type(raw).__name__}")
        try:
            assignment = AssignmentIn.model_validate(raw)
        except ValidationError as exc:
            err = exc.errors()[0]
            where = ".".join(str(part) for part in err["loc"])
            raise InvalidAssignment(raw.get("id"), f"{where}: {err['msg']}") from exc
        index[assignment.id] = assignment
    return index


def _parse_submission(raw: Any) -> _ParsedSubmission:
    raw = _as_record(raw)
    if not isinstance(raw, Mapping):
        raise MalformedSubmission(raw, "Submission is not a record")

    learner_id = raw.get("learner_id")
    assignment_id = raw.get("assignment_id")
    detail = raw.get("submission")
    if not learner_id or not assignment_id or not detail:
        raise MalformedSubmission(raw, "Invalid submission structure")
    if not isinstance(learner_id, (int, str)) or not isinstance(assignment_id, (int, str)):
        raise MalformedSubmission(raw, "Identifiers must be ints or strings")

    try:
        parsed = SubmissionDetailIn.model_validate(_as_record(detail))
    except ValidationError as exc:
        fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e["loc"])
        raise MalformedSubmission(raw, f"Unusable submission fields ({fields})") from exc

    return _ParsedSubmission(
        learner_id=learner_id,
        assignment_id=assignment_id,
        submitted_at=parsed.submitted_at,
        score=parsed.score,
    )


def late_adjusted_score(assignment: AssignmentIn, submitted_at: datetime, raw_score: float) -> float:
    """
    Policy:
    - on time (submitted_at <= due_at): raw score
    - late: LATE_PENALTY_FRACTION of points_possible is taken off, never below 0
    """
    if submitted_at <= assignment.due_at:
        return raw_score
    return max(0.0, raw_score - LATE_PENALTY_FRACTION * assignment.points_possible)


def _record_best(
    learner: _LearnerAccumulator,
    assignment: AssignmentIn,
    score: float,
    percentage: float,
) -> bool:
    previous = learner.assignment_scores.get(assignment.id)
    if previous is not None:
        if percentage <= previous:
            return False
        # drop the contribution of the submission being replaced
        learner.total_score -= previous * assignment.points_possible
        learner.total_possible -= assignment.points_possible

    learner.assignment_scores[assignment.id] = percentage
    learner.total_score += score
    learner.total_possible += assignment.points_possible
    return True


def _assemble(learners: dict[Any, _LearnerAccumulator]) -> list[LearnerSummary]:
    results: list[LearnerSummary] = []
    for learner in learners.values():
        # nothing of theirs counted
        if learner.total_possible == 0:
            continue
        results.append(
            LearnerSummary(
                id=learner.id,
                avg=learner.total_score / learner.total_possible,
                scores=dict(learner.assignment_scores),
            )
        )
    return results


def compute(
    course: Any,
    assignment_group: Any,
    submissions: Any,
    now: datetime | None = None,
) -> list[LearnerSummary]:
    """
    Weighted per-learner averages for one assignment group.

    Only assignments that are already due (due_at <= now) and worth points count.
    Late submissions lose a flat share of the assignment's points, and when a
    learner submitted the same assignment more than once only the best
    percentage is kept.

    `now` defaults to the current UTC time and is read once per call.

    Raises InvalidInputType, GroupMismatch or InvalidAssignment without producing
    any output. Malformed submissions are logged and skipped.
    """
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    course = _as_record(course)
    assignment_group = _as_record(assignment_group)

    try:
        _validate_inputs(course, assignment_group, submissions)
        assignments = _index_assignments(assignment_group["assignments"])
    except ScoringError as exc:
        logger.error("Error processing learner data: %s", exc)
        raise

    learners: dict[Any, _LearnerAccumulator] = {}
    kept = 0

    for raw in submissions:
        try:
            sub = _parse_submission(raw)
        except MalformedSubmission as exc:
            logger.warning("Skipping submission: %s", exc)
            continue

        learner = learners.get(sub.learner_id)
        if learner is None:
            learner = learners[sub.learner_id] = _LearnerAccumulator(id=sub.learner_id)

        assignment = assignments.get(sub.assignment_id)
        if assignment is None:
            continue

        if assignment.due_at > now:
            logger.debug(
                "Assignment %r not due until %s, ignoring submission from learner %r",
                assignment.id,
                assignment.due_at.isoformat(),
                sub.learner_id,
            )
            continue

        # nothing to divide by
        if assignment.points_possible == 0:
            logger.debug("Assignment %r is worth 0 points, ignoring", assignment.id)
            continue

        score = late_adjusted_score(assignment, sub.submitted_at, sub.score)
        percentage = score / assignment.points_possible

        if _record_best(learner, assignment, score, percentage):
            kept += 1

    results = _assemble(learners)
    logger.info(
        "Scored %d learner(s) from %d submission(s) (%d kept)",
        len(results),
        len(submissions),
        kept,
    )
    return results
