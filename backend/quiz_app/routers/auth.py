import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_async_session
from ..errors import InternalError, ValidationError
from ..schemas.user_schema import CredentialsRequest, UserRead, UserResponse
from ..services.auth_service import register_user, authenticate_user

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _require_credentials(payload: CredentialsRequest):
    if not payload.email or not payload.password:
        raise ValidationError("Email and password are required")


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: CredentialsRequest, session: AsyncSession = Depends(get_async_session)):
    _require_credentials(payload)
    try:
        user = await register_user(session, payload.email, payload.password)
    except SQLAlchemyError:
        logger.exception("register error")
        raise InternalError()
    return {"user": UserRead.model_validate(user)}


@router.post("/login", response_model=UserResponse)
async def login(payload: CredentialsRequest, session: AsyncSession = Depends(get_async_session)):
    _require_credentials(payload)
    try:
        user = await authenticate_user(session, payload.email, payload.password)
    except SQLAlchemyError:
        logger.exception("login error")
        raise InternalError()
    return {"user": UserRead.model_validate(user)}
