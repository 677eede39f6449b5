from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON
from vidvoice.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class PreferenceModel(Base):
    __tablename__ = "preferences"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
