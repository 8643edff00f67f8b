"""Errors raised by the quiz session core."""


class QuizSessionError(Exception):
    """Base class for recoverable session errors."""

    code = "session_error"


class InvalidOptionIndexError(QuizSessionError):
    """Raised when a selected option is not an integer index into the options."""

    code = "invalid_option_index"

    def __init__(self, index, option_count: int):
        self.index = index
        self.option_count = option_count
        super().__init__(
            f"Option index {index!r} is not an integer in 0..{option_count - 1}"
        )


class SessionAlreadyCompletedError(QuizSessionError):
    """Raised when an event arrives after the session reached Completed."""

    code = "session_already_completed"

    def __init__(self) -> None:
        super().__init__("Session is already completed")


class QuestionSetEmptyError(QuizSessionError):
    """Raised when a session would be created without any questions."""

    code = "question_set_empty"

    def __init__(self, test_id: int | None = None):
        self.test_id = test_id
        if test_id is None:
            message = "Cannot start a session without questions"
        else:
            message = f"Test {test_id} has no questions"
        super().__init__(message)
