"""Database infrastructure setup."""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.infrastructure.config.settings import settings

# Engine creation is deferred until the first session is requested
_engine = None
_SessionLocal = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str, echo: bool = False, **engine_options):
    """
    Create an engine, enabling foreign keys and thread sharing for SQLite.

    Args:
        database_url: SQLAlchemy database URL
        echo: Log SQL queries
        **engine_options: Extra create_engine options (e.g. poolclass)

    Returns:
        SQLAlchemy engine
    """
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=echo,
            **engine_options,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
        **engine_options,
    )


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required for database operations")
        _engine = create_db_engine(settings.database_url, echo=settings.debug_mode)
    return _engine


def get_db_session():
    """
    Get a database session.

    Returns:
        SQLAlchemy session instance
    """
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return _SessionLocal()
