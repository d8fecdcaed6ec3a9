from fastapi import Request

from .errors import ServiceUnavailable
from .services.feedback_service import FeedbackGenerator


async def get_feedback_generator(request: Request) -> FeedbackGenerator:
    # runs before body validation, so a missing key always answers 503
    generator = getattr(request.app.state, "feedback_generator", None)
    if generator is None:
        raise ServiceUnavailable()
    return generator
