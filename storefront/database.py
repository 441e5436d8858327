# storefront/database.py
from sqlalchemy.engine import make_url
from sqlmodel import SQLModel, create_engine, Session

from storefront.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Relational store connection
#
# - SQLite (local dev / tests): one file, connections shared across
#   FastAPI's threadpool => check_same_thread=False.
# - Postgres: pooled connections, pre-ping to drop stale ones.
#   DATABASE_SSLMODE (e.g. "require") is appended when configured.
# ---------------------------------------------------------


def _build_engine(db_url: str):
    url = make_url(db_url)

    if url.get_backend_name() == "sqlite":
        return create_engine(
            db_url,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
        )

    if settings.DATABASE_SSLMODE and "sslmode" not in url.query:
        url = url.update_query_dict({"sslmode": settings.DATABASE_SSLMODE})

    return create_engine(
        url,
        echo=settings.DB_ECHO,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


engine = _build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
