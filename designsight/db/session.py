# designsight/db/session.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from designsight.core.config import settings

# Default to SQLite if no database URI is provided
database_uri = settings.SQLALCHEMY_DATABASE_URI or "sqlite:///./designsight.db"

engine = create_engine(
    database_uri,
    pool_pre_ping=True,
    connect_args={"check_same_thread": False} if database_uri.startswith("sqlite") else {}
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def generate_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    # Naive UTC keeps SQLite and PostgreSQL round-trips identical
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Dependency to get DB session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
