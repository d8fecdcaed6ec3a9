from fastapi import status


class QuizAppError(Exception):
    """Base error carrying the HTTP status and the message shown to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(QuizAppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request body"


class AuthError(QuizAppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class NotFoundError(QuizAppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ConflictError(QuizAppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Email already registered"


class InternalError(QuizAppError):
    pass


class ServiceUnavailable(QuizAppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "Gemini feedback is not configured. Please set GEMINI_API_KEY."


class UpstreamOverloaded(QuizAppError):
    """The generation backend reported it is temporarily overloaded (HTTP 503 upstream).

    Retried inside the feedback generator; reaches a handler only when every
    attempt was overloaded, and is then reported like any other failure.
    """

    message = "Failed to generate feedback"

    def __init__(self, cause: BaseException | None = None):
        super().__init__()
        self.cause = cause
