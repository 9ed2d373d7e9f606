from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.dates import parse_timestamp


class AssignmentIn(BaseModel):
    id: int | str
    due_at: datetime
    # strict: "100" or True is not a number of points
    points_possible: float = Field(ge=0, strict=True, allow_inf_nan=False)

    class Config:
        extra = "allow"

    @field_validator("due_at", mode="before")
    @classmethod
    def _parse_due_at(cls, value):
        return parse_timestamp(value)
