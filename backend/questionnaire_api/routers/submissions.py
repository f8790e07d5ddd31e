import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_session
from ..exceptions import (
    EmptyAnswersError,
    InvalidAnswersError,
    StorageError,
    SubmissionNotFoundError,
    TeamConflictError,
)
from ..schemas import StatusResponse, SubmissionCreate, SubmissionPublic, SubmissionUpdate
from ..schemas.submission import SQLITE_INT_MAX, SQLITE_INT_MIN
from ..services.submission_service import SubmissionService, to_public, validate_answers

router = APIRouter(tags=["submissions"])
logger = logging.getLogger(__name__)


def _invalid_answers(exc: InvalidAnswersError) -> HTTPException:
    if isinstance(exc, EmptyAnswersError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No answers provided")
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid answers")


def _storage_failure(exc: StorageError, detail: str) -> HTTPException:
    if isinstance(exc, TeamConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Team already exists")
    logger.exception("%s: %s", detail, exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("/submit-questionnaire", response_model=StatusResponse)
async def submit_questionnaire(
    payload: SubmissionCreate,
    session: AsyncSession = Depends(get_session),
):
    try:
        validate_answers(payload.answers)
    except InvalidAnswersError as exc:
        raise _invalid_answers(exc) from None

    service = SubmissionService(session)
    try:
        submission_id = await service.insert(
            answers=payload.answers,
            team=payload.team,
            score=payload.score,
            previous_score=payload.previous_score,
        )
    except StorageError as exc:
        raise _storage_failure(exc, "Submission failed") from None

    logger.info("Stored submission %s with %s answers", submission_id, len(payload.answers))
    return StatusResponse()


@router.get("/fetch-submissions", response_model=list[SubmissionPublic])
async def fetch_submissions(session: AsyncSession = Depends(get_session)):
    service = SubmissionService(session)
    try:
        submissions = await service.list_all()
        # A single undecodable row fails the whole listing.
        return [to_public(submission) for submission in submissions]
    except StorageError as exc:
        raise _storage_failure(exc, "Failed to fetch submissions") from None


@router.get("/fetch-submission", response_model=SubmissionPublic)
async def fetch_submission(
    submission_id: int = Query(alias="id", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX),
    session: AsyncSession = Depends(get_session),
):
    service = SubmissionService(session)
    try:
        submission = await service.get_by_id(submission_id)
        return to_public(submission)
    except SubmissionNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found") from None
    except StorageError as exc:
        raise _storage_failure(exc, "Failed to fetch submission") from None


@router.post("/update-submission", response_model=StatusResponse)
async def update_submission(
    payload: SubmissionUpdate,
    session: AsyncSession = Depends(get_session),
):
    try:
        validate_answers(payload.answers, allow_empty=True)
    except InvalidAnswersError as exc:
        raise _invalid_answers(exc) from None

    service = SubmissionService(session)
    try:
        # No existence check: an unknown id updates zero rows and still succeeds.
        await service.update(
            payload.id,
            answers=payload.answers,
            team=payload.team,
            score=payload.score,
            previous_score=payload.previous_score,
        )
    except StorageError as exc:
        raise _storage_failure(exc, "Update failed") from None

    return StatusResponse()
