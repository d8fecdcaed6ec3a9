import secrets

from fastapi_users.password import PasswordHelper
from pwdlib.exceptions import UnknownHashError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import AuthError, ConflictError
from ..models.user_model import User

password_helper = PasswordHelper()


def _verify_plaintext(plain: str, stored: str) -> tuple[bool, str | None]:
    if secrets.compare_digest(plain.encode("utf-8"), stored.encode("utf-8")):
        return True, password_helper.hash(plain)
    return False, None


def verify_password(plain: str, stored: str) -> tuple[bool, str | None]:
    """Check ``plain`` against the stored value.

    Returns ``(valid, new_hash)``; ``new_hash`` is set when the stored value
    should be replaced (legacy plaintext row or an outdated hash).
    """
    try:
        return password_helper.verify_and_update(plain, stored)
    except UnknownHashError:
        # rows written before hashing hold the password itself
        return _verify_plaintext(plain, stored)


async def register_user(session: AsyncSession, email: str, password: str) -> User:
    user = User(email=email, password=password_helper.hash(password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        # unique(email) decides, no lookup race
        await session.rollback()
        raise ConflictError()
    await session.refresh(user)
    return user


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User:
    result = await session.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    # same error for unknown email and wrong password
    if not user:
        raise AuthError()
    valid, new_hash = verify_password(password, user.password)
    if not valid:
        raise AuthError()

    if new_hash:
        user.password = new_hash
        await session.commit()
        await session.refresh(user)
    return user
