"""
Database session management
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from leavedesk.core.config import settings
from leavedesk.db.base import Base

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_sqlite_tables() -> None:
    """Create all tables on SQLite (PostgreSQL is migrated with Alembic)"""
    if "sqlite" in settings.DATABASE_URL:
        import leavedesk.models  # noqa: F401  register all models

        Base.metadata.create_all(bind=engine)
