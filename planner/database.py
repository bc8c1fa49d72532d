import json
from contextlib import contextmanager

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from .config import DATABASE_URL

# Import all models to ensure they are registered with SQLModel metadata
from .models import HealthLog, Todo, WorkSession  # noqa: F401

def _json_serializer(value):
    # Raw UTF-8 in stored JSON so label search matches non-ASCII text
    return json.dumps(value, ensure_ascii=False)


def _create_engine():
    if DATABASE_URL.startswith("sqlite"):
        return create_engine(
            DATABASE_URL,
            echo=False,
            connect_args={"check_same_thread": False},
            json_serializer=_json_serializer,
        )

    # Neon/Postgres: disable pooling for serverless and enable pre-ping
    return create_engine(
        DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
        json_serializer=_json_serializer,
    )

engine = _create_engine()

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
    class_=Session,
)

def get_db():
    """Dependency to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def get_session():
    """Get a database session (context manager style).

    This is a convenience function for use outside of FastAPI dependencies,
    e.g. from worker threads of the subtask fan-out.
    Usage:
        with get_session() as session:
            # do something with session
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def create_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=engine)

def drop_tables():
    """Drop all database tables."""
    SQLModel.metadata.drop_all(bind=engine)
