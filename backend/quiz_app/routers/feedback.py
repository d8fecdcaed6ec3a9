import logging

from fastapi import APIRouter, Depends

from ..dependencies import get_feedback_generator
from ..errors import InternalError, ValidationError
from ..schemas.feedback_schema import FeedbackRequest, FeedbackResponse
from ..services.feedback_service import FeedbackGenerator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Feedback"])


@router.post("/quiz-feedback", response_model=FeedbackResponse)
async def quiz_feedback(payload: FeedbackRequest, generator: FeedbackGenerator = Depends(get_feedback_generator)):
    if not isinstance(payload.questions, list) or not isinstance(payload.answers, list):
        raise ValidationError("questions[] and answers[] are required arrays")
    try:
        return await generator.generate_feedback(payload.questions, payload.answers)
    except Exception:
        # covers exhausted overload retries as well as permanent backend errors
        logger.exception("quiz-feedback error")
        raise InternalError("Failed to generate feedback")
