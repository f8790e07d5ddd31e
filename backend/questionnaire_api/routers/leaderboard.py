import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_session
from ..exceptions import StorageError
from ..schemas import TopTeamsResponse
from ..services.leaderboard_service import LeaderboardService

router = APIRouter(tags=["leaderboard"])
logger = logging.getLogger(__name__)


@router.get("/top-teams", response_model=TopTeamsResponse)
async def get_top_teams(
    limit: int = Query(default=10, ge=1, le=100),
    session: AsyncSession = Depends(get_session),
):
    service = LeaderboardService(session)
    try:
        return await service.top_teams(limit=limit)
    except StorageError:
        logger.exception("Leaderboard query failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch top teams"
        ) from None
