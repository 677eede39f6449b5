import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from vidvoice.core.database.base import Base

def utc_now():
    return datetime.now(timezone.utc)

class VoiceLogModel(Base):
    __tablename__ = "voice_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    action = Column(String, nullable=False, index=True)
    source_url = Column(String, nullable=True, index=True)
    transcript = Column(String, nullable=False)
    success = Column(Boolean, nullable=False)
    message = Column(String, nullable=False)
    executed_at = Column(DateTime(timezone=True), default=utc_now, index=True)
