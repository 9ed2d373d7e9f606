from typing import Any

from pydantic import BaseModel, Field


class LearnerSummary(BaseModel):
    id: int | str
    avg: float
    scores: dict[int | str, float] = Field(default_factory=dict)

    def flatten(self) -> dict[Any, Any]:
        """{id, avg, <assignment_id>: percentage, ...}, the shape the gradebook export expects."""
        return {"id": self.id, "avg": self.avg, **self.scores}
