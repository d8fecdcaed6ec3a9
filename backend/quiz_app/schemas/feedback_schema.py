from typing import Any

from pydantic import BaseModel


class FeedbackRequest(BaseModel):
    # both must be arrays; checked in the handler after the credential check
    questions: Any = None
    answers: Any = None


class FeedbackResponse(BaseModel):
    feedback: str
