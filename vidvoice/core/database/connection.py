# File: vidvoice/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from vidvoice.core.config.settings import settings

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

if settings.DATABASE_URL.startswith("sqlite:///") and ":memory:" not in settings.DATABASE_URL:
    settings.ensure_dirs()

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Dependency for obtaining a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def create_tables():
    """Creates every registered table. Safe to call repeatedly."""
    from vidvoice.core.database.base import Base
    import vidvoice.features.preferences.data.sql_models
    import vidvoice.features.voice_control.data.sql_models

    Base.metadata.create_all(bind=engine)
