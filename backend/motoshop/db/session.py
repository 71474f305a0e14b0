from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from motoshop.core.config import settings


def build_async_url(uri: str) -> str:
    """sqlite:///file.db -> sqlite+aiosqlite:///file.db"""
    if uri.startswith("sqlite:///"):
        return uri.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return uri


# SQL echo only when SQL_DEBUG is set
engine = create_async_engine(
    build_async_url(settings.SQLITE_DATABASE_URI),
    echo=settings.SQL_DEBUG,
    future=True,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
