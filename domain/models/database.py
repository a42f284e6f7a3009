"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("recipe_catalog.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _build_engine(url: str, echo: bool = False):
    if url.startswith("sqlite"):
        # One shared connection so an in-memory database survives across sessions
        sqlite_engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            # SQLite leaves FK enforcement off unless asked per connection
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return sqlite_engine
    return create_engine(url, echo=echo, pool_pre_ping=True)


# Create engine
engine = _build_engine(settings.database_url, echo=settings.db_echo)

# Create session factory
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_database():
    """Initialize database schema"""
    # Import models so they are registered on Base.metadata
    from domain.models import unit, ingredient, recipe  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
