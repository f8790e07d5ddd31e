from datetime import datetime, timezone

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Submission(SQLModel, table=True):
    __tablename__ = "submissions"

    id: int | None = Field(default=None, primary_key=True)
    # JSON object of question key -> answer value, encoded with sorted keys.
    answers: str = Field(sa_column=Column(Text, nullable=False))
    timestamp: datetime = Field(default_factory=utcnow)
    team: str | None = Field(default=None, index=True, unique=True)
    score: str | None = Field(default=None)
    previous_score: int | None = Field(default=None)
