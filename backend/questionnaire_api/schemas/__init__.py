from .leaderboard import MaturityLevel, TopTeamEntry, TopTeamsResponse
from .submission import (
    StatusResponse,
    SubmissionCreate,
    SubmissionPublic,
    SubmissionUpdate,
)

__all__ = [
    "SubmissionCreate",
    "SubmissionUpdate",
    "SubmissionPublic",
    "StatusResponse",
    "MaturityLevel",
    "TopTeamEntry",
    "TopTeamsResponse",
]
