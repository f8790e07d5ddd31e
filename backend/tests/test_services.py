from datetime import datetime, timedelta, timezone

import pytest

from questionnaire_api.config import Settings
from questionnaire_api.exceptions import AnswerRangeError, AnswersDecodeError, EmptyAnswersError
from questionnaire_api.models import Submission
from questionnaire_api.services.submission_service import (
    as_utc,
    decode_answers,
    encode_answers,
    validate_answers,
)


def test_validate_answers_bounds():
    validate_answers({"q1": 0, "q2": 10})
    with pytest.raises(EmptyAnswersError):
        validate_answers({})
    validate_answers({}, allow_empty=True)
    with pytest.raises(AnswerRangeError) as excinfo:
        validate_answers({"q1": 3, "q2": 11})
    assert excinfo.value.key == "q2"


def test_answers_encoding_is_stable_and_lossless():
    answers = {"b": 10, "a": 0, "panel_1_question_2": 7}
    encoded = encode_answers(answers)
    assert encoded == encode_answers(dict(reversed(list(answers.items()))))
    assert decode_answers(Submission(id=1, answers=encoded)) == answers


def test_decode_rejects_malformed_answers():
    with pytest.raises(AnswersDecodeError):
        decode_answers(Submission(id=1, answers="[1, 2]"))
    with pytest.raises(AnswersDecodeError):
        decode_answers(Submission(id=2, answers="{oops"))
    with pytest.raises(AnswersDecodeError):
        decode_answers(Submission(id=3, answers='{"q": "high"}'))
    with pytest.raises(AnswersDecodeError):
        decode_answers(Submission(id=4, answers='{"q": true}'))


def test_as_utc_attaches_missing_offset():
    naive = datetime(2024, 1, 1, 12, 30)
    assert as_utc(naive) == datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)
    shifted = datetime(2024, 1, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
    assert as_utc(shifted).tzinfo == timezone.utc
    assert as_utc(shifted) == as_utc(naive)


def test_sqlite_url_gets_async_driver():
    settings = Settings(database_url="sqlite:///./other.db")
    assert settings.database_url == "sqlite+aiosqlite:///./other.db"


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, ["*"]),
        ("", ["*"]),
        ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
        ('["http://a.test"]', ["http://a.test"]),
    ],
)
def test_cors_origins_parsing(raw, expected):
    assert Settings(CORS_ORIGINS=raw).cors_origins == expected
