from collections.abc import AsyncGenerator
import ssl

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from .config import DATABASE_URL, DATABASE_SSL, SQL_ECHO


class Base(DeclarativeBase):
    pass


def _connect_args() -> dict:
    if not (DATABASE_URL.startswith("postgresql") and DATABASE_SSL):
        return {}
    # pooled hosted Postgres (Supabase etc.) presents certs we cannot verify
    ctx = ssl.create_default_context()
    ctx.check_hostname = False
    ctx.verify_mode = ssl.CERT_NONE
    return {"ssl": ctx}


engine = create_async_engine(
    DATABASE_URL,
    connect_args=_connect_args(),
    echo=SQL_ECHO,
)


if DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES and ON DELETE CASCADE unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables():

    from .models import user_model, quiz_set_model, question_model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    await engine.dispose()


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    # released on every exit path, including handler errors
    async with async_session_maker() as session:
        yield session
