from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.dates import parse_timestamp


class SubmissionDetailIn(BaseModel):
    submitted_at: datetime
    score: float = Field(strict=True, allow_inf_nan=False)

    class Config:
        extra = "allow"

    @field_validator("submitted_at", mode="before")
    @classmethod
    def _parse_submitted_at(cls, value):
        return parse_timestamp(value)
