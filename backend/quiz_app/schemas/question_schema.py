from typing import Any, List, Optional

from pydantic import BaseModel


class QuestionUpdate(BaseModel):
    question: Optional[str] = None
    correctAnswer: Optional[str] = None
    wrongAnswers: Any = None


class QuestionRead(BaseModel):
    """API shape of a stored question (``correct_answer`` -> ``correctAnswer``)."""
    id: int
    question: str
    correctAnswer: str
    wrongAnswers: List[Any]


class QuestionListResponse(BaseModel):
    questions: List[QuestionRead]
