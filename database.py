from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from config import is_sqlite_url, settings


def engine_kwargs(database_url: str, echo: bool = False) -> dict:
    """Return dialect-specific engine options for SQLite vs PostgreSQL."""
    kwargs = {"echo": echo}
    if is_sqlite_url(database_url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    return kwargs


def make_sessionmaker(bind) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = create_async_engine(
    settings.database_url,
    **engine_kwargs(settings.database_url, echo=settings.debug),
)

AsyncSessionLocal = make_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind=engine):
    # Register mappers before create_all
    import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
