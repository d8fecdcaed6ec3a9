import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response

from ..db import get_async_session
from ..errors import InternalError, ValidationError
from ..schemas.question_schema import QuestionUpdate
from ..services import quiz_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["Questions"])


@router.put("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_question(question_id: int, payload: QuestionUpdate, session: AsyncSession = Depends(get_async_session)):
    if not payload.question or not payload.correctAnswer or not isinstance(payload.wrongAnswers, list):
        raise ValidationError("question, correctAnswer, wrongAnswers[] required")
    try:
        await quiz_service.update_question(
            session, question_id, payload.question, payload.correctAnswer, payload.wrongAnswers
        )
    except SQLAlchemyError:
        logger.exception("update question error")
        raise InternalError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(question_id: int, session: AsyncSession = Depends(get_async_session)):
    try:
        await quiz_service.delete_question(session, question_id)
    except SQLAlchemyError:
        logger.exception("delete question error")
        raise InternalError()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
