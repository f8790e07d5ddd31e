import math
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..exceptions import StorageError
from ..models import Submission
from ..schemas import MaturityLevel, TopTeamEntry, TopTeamsResponse

LEVEL_THRESHOLDS: tuple[tuple[float, MaturityLevel], ...] = (
    (90, MaturityLevel.ELITE),
    (80, MaturityLevel.ADVANCED),
    (50, MaturityLevel.DEFINED),
    (35, MaturityLevel.DEVELOPING),
)


def maturity_level(score: float) -> MaturityLevel:
    for threshold, level in LEVEL_THRESHOLDS:
        if score >= threshold:
            return level
    return MaturityLevel.INITIATION


def parse_score(raw: str | None) -> float | None:
    """Scores are stored as free-form text; only finite numbers are ranked."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


@dataclass
class _Candidate:
    submission: Submission
    score: float


class LeaderboardService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def top_teams(self, limit: int = 10) -> TopTeamsResponse:
        statement = (
            select(Submission)
            .where(Submission.team.is_not(None))  # type: ignore[union-attr]
            .order_by(Submission.id)
        )
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read submissions for leaderboard") from exc

        candidates: list[_Candidate] = []
        for submission in result.scalars().all():
            score = parse_score(submission.score)
            if score is None:
                continue
            candidates.append(_Candidate(submission=submission, score=score))

        candidates.sort(key=lambda candidate: (-candidate.score, candidate.submission.id))

        entries = [
            TopTeamEntry(
                rank=index,
                submission_id=candidate.submission.id,
                team=candidate.submission.team,
                score=candidate.score,
                previous_score=candidate.submission.previous_score,
                level=maturity_level(candidate.score),
            )
            for index, candidate in enumerate(candidates[:limit], start=1)
        ]
        return TopTeamsResponse(entries=entries, calculated_at=datetime.now(timezone.utc))
