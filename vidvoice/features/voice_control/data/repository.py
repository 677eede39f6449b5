from typing import List, Optional
from vidvoice.core.database.connection import SessionLocal
from .sql_models import VoiceLogModel
from ..domain.interfaces import IVoiceLogRepository
from ..domain.models import VoiceLogEntry

def _to_entry(row: VoiceLogModel) -> VoiceLogEntry:
    return VoiceLogEntry(
        id=row.id,
        action=row.action,
        source_url=row.source_url,
        transcript=row.transcript,
        success=row.success,
        message=row.message,
        executed_at=row.executed_at,
    )

class SqlVoiceLogRepository(IVoiceLogRepository):
    def record(self, action: str, source_url: Optional[str], transcript: str,
               success: bool, message: str) -> VoiceLogEntry:
        with SessionLocal() as db:
            try:
                row = VoiceLogModel(
                    action=action,
                    source_url=source_url,
                    transcript=transcript,
                    success=success,
                    message=message,
                )
                db.add(row)
                db.commit()
                db.refresh(row)
                return _to_entry(row)
            except Exception:
                db.rollback()
                raise

    def recent(self, limit: int = 50, source_url: Optional[str] = None) -> List[VoiceLogEntry]:
        """Newest first."""
        with SessionLocal() as db:
            query = db.query(VoiceLogModel)
            if source_url is not None:
                query = query.filter(VoiceLogModel.source_url == source_url)
            rows = query.order_by(VoiceLogModel.executed_at.desc()).limit(limit).all()
            return [_to_entry(r) for r in rows]
