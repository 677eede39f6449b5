from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

@dataclass(frozen=True)
class CommandResult:
    """Outcome of one voice command, for UI feedback."""
    success: bool
    message: str
    command_id: Optional[str] = None

@dataclass(frozen=True)
class VoiceLogEntry:
    id: UUID
    action: str
    source_url: Optional[str]
    transcript: str
    success: bool
    message: str
    executed_at: datetime
