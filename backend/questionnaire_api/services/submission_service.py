import json
import logging
from datetime import datetime, timezone
from typing import Mapping, Sequence

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..exceptions import (
    AnswerRangeError,
    AnswersDecodeError,
    EmptyAnswersError,
    StorageError,
    SubmissionNotFoundError,
    TeamConflictError,
)
from ..models import Submission
from ..schemas import SubmissionPublic

logger = logging.getLogger(__name__)

ANSWER_MIN = 0
ANSWER_MAX = 10


def validate_answers(answers: Mapping[str, int], *, allow_empty: bool = False) -> None:
    if not answers and not allow_empty:
        raise EmptyAnswersError("No answers provided")
    for key, value in answers.items():
        if not ANSWER_MIN <= value <= ANSWER_MAX:
            raise AnswerRangeError(key, value)


def encode_answers(answers: Mapping[str, int]) -> str:
    return json.dumps(dict(answers), sort_keys=True, separators=(",", ":"))


def decode_answers(submission: Submission) -> dict[str, int]:
    try:
        decoded = json.loads(submission.answers)
    except (TypeError, json.JSONDecodeError) as exc:
        raise AnswersDecodeError(submission.id) from exc
    if not isinstance(decoded, dict):
        raise AnswersDecodeError(submission.id)
    for value in decoded.values():
        if not isinstance(value, int) or isinstance(value, bool):
            raise AnswersDecodeError(submission.id)
    return decoded


def as_utc(value: datetime) -> datetime:
    """SQLite keeps no offset; stored timestamps are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_public(submission: Submission) -> SubmissionPublic:
    return SubmissionPublic(
        id=submission.id,
        answers=decode_answers(submission),
        timestamp=as_utc(submission.timestamp),
        team=submission.team,
        score=submission.score,
        previous_score=submission.previous_score,
    )


class SubmissionService:
    """Single-statement operations on the ``submissions`` table.

    Every method runs one statement on the session it was given; nothing is
    retried. SQLAlchemy failures surface as :class:`StorageError`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def insert(
        self,
        *,
        answers: Mapping[str, int],
        team: str | None = None,
        score: str | None = None,
        previous_score: int | None = None,
    ) -> int:
        submission = Submission(
            answers=encode_answers(answers),
            team=team,
            score=score,
            previous_score=previous_score,
        )
        self.session.add(submission)
        await self._commit(team)
        return submission.id

    async def list_all(self) -> Sequence[Submission]:
        statement = select(Submission).order_by(Submission.id)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read submissions") from exc
        return result.scalars().all()

    async def get_by_id(self, submission_id: int) -> Submission:
        try:
            submission = await self.session.get(Submission, submission_id)
        except SQLAlchemyError as exc:
            raise StorageError(f"Failed to read submission {submission_id}") from exc
        if submission is None:
            raise SubmissionNotFoundError(submission_id)
        return submission

    async def update(
        self,
        submission_id: int,
        *,
        answers: Mapping[str, int],
        team: str | None = None,
        score: str | None = None,
        previous_score: int | None = None,
    ) -> int:
        """Overwrite the mutable fields of one row.

        Returns the number of affected rows; an unknown id is not an error.
        """
        statement = (
            update(Submission)
            .where(Submission.id == submission_id)
            .values(
                answers=encode_answers(answers),
                team=team,
                score=score,
                previous_score=previous_score,
            )
        )
        try:
            result = await self.session.execute(statement)
        except IntegrityError as exc:
            await self.session.rollback()
            raise TeamConflictError(team) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StorageError(f"Failed to update submission {submission_id}") from exc
        affected = result.rowcount
        await self._commit(team)
        if not affected:
            logger.debug("Update matched no submission with id %s", submission_id)
        return affected

    async def _commit(self, team: str | None) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise TeamConflictError(team) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise StorageError("Failed to commit submission") from exc
