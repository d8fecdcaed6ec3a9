from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from .common import UtcDatetime


class QuizSetImport(BaseModel):
    """Body of ``POST /api/quiz-sets/import-json``.

    ``questions`` is left untyped on purpose: entries are checked one by one
    and malformed ones are skipped rather than failing the whole import.
    """
    userId: Optional[int] = None
    title: Optional[str] = None
    questions: Any = None


class QuizSetUpdate(BaseModel):
    title: Optional[str] = None


class QuizSetRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: UtcDatetime


class QuizSetResponse(BaseModel):
    quizSet: QuizSetRead


class QuizSetImportResponse(QuizSetResponse):
    imported: int
    skipped: int


class QuizSetListResponse(BaseModel):
    quizSets: List[QuizSetRead]
