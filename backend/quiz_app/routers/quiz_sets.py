import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from ..db import get_async_session
from ..errors import InternalError, ValidationError
from ..schemas.quiz_set_schema import (
    QuizSetImport,
    QuizSetImportResponse,
    QuizSetListResponse,
    QuizSetResponse,
    QuizSetUpdate,
)
from ..schemas.question_schema import QuestionListResponse
from ..services import quiz_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz-sets", tags=["Quiz Sets"])


# Import one JSON array as a quiz set
@router.post("/import-json", response_model=QuizSetImportResponse, status_code=status.HTTP_201_CREATED)
async def import_json(payload: QuizSetImport, session: AsyncSession = Depends(get_async_session)):
    if not payload.userId or not isinstance(payload.questions, list) or not payload.questions:
        raise ValidationError("userId and non-empty questions[] are required")
    try:
        result = await quiz_service.import_quiz_set(session, payload.userId, payload.title, payload.questions)
    except SQLAlchemyError:
        logger.exception("import-json error")
        raise InternalError()
    if result["skipped"]:
        logger.info("import-json skipped %d malformed question(s)", result["skipped"])
    return result


@router.get("", response_model=QuizSetListResponse)
async def list_quiz_sets(userId: Optional[int] = None, session: AsyncSession = Depends(get_async_session)):
    if userId is None:
        raise ValidationError("userId is required")
    try:
        quiz_sets = await quiz_service.list_quiz_sets(session, userId)
    except SQLAlchemyError:
        logger.exception("list quiz-sets error")
        raise InternalError()
    return {"quizSets": quiz_sets}


@router.get("/{quiz_set_id}", response_model=QuizSetResponse)
async def get_quiz_set(quiz_set_id: int, session: AsyncSession = Depends(get_async_session)):
    try:
        quiz_set = await quiz_service.get_quiz_set(session, quiz_set_id)
    except SQLAlchemyError:
        logger.exception("get quiz-set error")
        raise InternalError()
    return {"quizSet": quiz_set}


@router.get("/{quiz_set_id}/questions", response_model=QuestionListResponse)
async def get_questions(quiz_set_id: int, session: AsyncSession = Depends(get_async_session)):
    try:
        questions = await quiz_service.list_questions(session, quiz_set_id)
    except SQLAlchemyError:
        logger.exception("get questions error")
        raise InternalError()
    return {"questions": questions}


@router.put("/{quiz_set_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_quiz_set(quiz_set_id: int, payload: QuizSetUpdate, session: AsyncSession = Depends(get_async_session)):
    if not payload.title:
        raise ValidationError("Title is required")
    try:
        # unknown ids update nothing and still answer 204
        await quiz_service.rename_quiz_set(session, quiz_set_id, payload.title)
    except SQLAlchemyError:
        logger.exception("update quiz-set error")
        raise InternalError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{quiz_set_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_quiz_set(quiz_set_id: int, session: AsyncSession = Depends(get_async_session)):
    try:
        await quiz_service.delete_quiz_set(session, quiz_set_id)
    except SQLAlchemyError:
        logger.exception("delete quiz-set error")
        raise InternalError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
