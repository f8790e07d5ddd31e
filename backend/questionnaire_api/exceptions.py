class InvalidAnswersError(ValueError):
    """Answers failed validation; the submission is rejected as a whole."""


class EmptyAnswersError(InvalidAnswersError):
    pass


class AnswerRangeError(InvalidAnswersError):
    def __init__(self, key: str, value: int) -> None:
        super().__init__(f"Answer {key!r} is out of range: {value}")
        self.key = key
        self.value = value


class StorageError(Exception):
    """A read or write against the submissions table failed."""


class SubmissionNotFoundError(StorageError):
    def __init__(self, submission_id: int) -> None:
        super().__init__(f"Submission {submission_id} not found")
        self.submission_id = submission_id


class TeamConflictError(StorageError):
    def __init__(self, team: str | None) -> None:
        super().__init__(f"Team {team!r} already has a submission")
        self.team = team


class AnswersDecodeError(StorageError):
    def __init__(self, submission_id: int) -> None:
        super().__init__(f"Stored answers for submission {submission_id} are not valid JSON")
        self.submission_id = submission_id
