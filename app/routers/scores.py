from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from app.core.deps import get_now
from app.core.errors import GroupMismatch, InvalidAssignment, InvalidInputType
from app.schemas.scoring_request import ScoringRequest
from app.services.learner_scores import compute

router = APIRouter()


@router.post("/scores")
def score_learners(
    payload: ScoringRequest,
    as_of: datetime | None = Query(default=None, description="Evaluate due dates at this instant"),
    flat: bool = Query(default=True, description="Spread assignment scores next to id/avg"),
    now: datetime = Depends(get_now),
):
    try:
        summaries = compute(
            payload.course,
            payload.assignment_group,
            payload.submissions,
            now=as_of or now,
        )
    except GroupMismatch as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except InvalidAssignment as exc:
        raise HTTPException(
            status_code=422,
            detail={"assignment_id": exc.assignment_id, "message": exc.reason},
        )
    except InvalidInputType as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    if flat:
        return [s.flatten() for s in summaries]
    return [s.model_dump() for s in summaries]
