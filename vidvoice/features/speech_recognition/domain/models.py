# File: vidvoice/features/speech_recognition/domain/models.py
from dataclasses import dataclass, field
from typing import Optional, Union
from vidvoice.core.config.settings import settings
from vidvoice.core.common.enums import RecognitionMode, SessionStatus

@dataclass(frozen=True)
class TranscriptEvent:
    """One recognition result. Consumed immediately, never persisted."""
    text: str
    confidence: float
    is_final: bool

@dataclass(frozen=True)
class EngineOptions:
    """What the backend needs to open one engine session."""
    locale: str
    continuous: bool = False
    interim_results: bool = True
    max_alternatives: int = 1

# --- Engine events (pushed by backends, drained by the session manager) ---

@dataclass(frozen=True)
class EngineStarted:
    session_id: int

@dataclass(frozen=True)
class EngineResult:
    session_id: int
    transcript: str
    confidence: float
    is_final: bool

@dataclass(frozen=True)
class EngineError:
    session_id: int
    code: str
    detail: Optional[str] = None

@dataclass(frozen=True)
class EngineEnded:
    session_id: int

EngineEvent = Union[EngineStarted, EngineResult, EngineError, EngineEnded]

@dataclass
class SessionConfig:
    """
    Timing and gating knobs for the session manager.
    All durations are seconds.
    """
    confidence_threshold: float = settings.CONFIDENCE_THRESHOLD
    max_retries: int = settings.MAX_RETRIES
    no_speech_backoff: float = settings.NO_SPEECH_BACKOFF
    end_backoff: float = settings.END_BACKOFF
    network_backoff: float = settings.NETWORK_BACKOFF
    continuous_restart_delay: float = settings.CONTINUOUS_RESTART_DELAY
    max_session_seconds: float = settings.MAX_SESSION_SECONDS

@dataclass
class RecognitionSession:
    """
    State of one engine session. A new one (with a new id) is created for
    every start, retry and rotation; events carrying any other id are stale.
    """
    session_id: int
    mode: RecognitionMode
    locale: str
    session_start_time: float
    max_session_duration_ms: int
    max_retries: int
    retry_count: int = 0
    status: SessionStatus = SessionStatus.LISTENING
    received_final: bool = False
    rejected_final: bool = False  # a final fell below the confidence threshold
    last_transcript: Optional[str] = field(default=None, repr=False)
