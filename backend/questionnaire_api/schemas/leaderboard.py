from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel


class MaturityLevel(str, Enum):
    ELITE = "elite"
    ADVANCED = "advanced"
    DEFINED = "defined"
    DEVELOPING = "developing"
    INITIATION = "initiation"


class TopTeamEntry(BaseModel):
    rank: int
    submission_id: int
    team: str
    score: float
    previous_score: int | None
    level: MaturityLevel


class TopTeamsResponse(BaseModel):
    entries: List[TopTeamEntry]
    calculated_at: datetime
