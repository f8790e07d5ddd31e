from datetime import datetime
from typing import Dict, Literal

from pydantic import BaseModel, Field

# SQLite INTEGER is a signed 64-bit value.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


class SubmissionCreate(BaseModel):
    # Clients may send a timestamp; it is ignored in favour of the server clock.
    answers: Dict[str, int] = Field(default_factory=dict)
    team: str | None = None
    score: str | None = None
    previous_score: int | None = Field(default=None, ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)


class SubmissionUpdate(SubmissionCreate):
    id: int = Field(ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX)


class SubmissionPublic(BaseModel):
    id: int
    answers: Dict[str, int]
    timestamp: datetime
    team: str | None
    score: str | None
    previous_score: int | None


class StatusResponse(BaseModel):
    status: Literal["success"] = "success"
