# File: vidvoice/features/speech_recognition/data/simulated_backend.py
import logging
from typing import Dict, List, Optional, Set

from vidvoice.core.common.enums import AuthorizationState, RecognitionErrorCode
from ..domain.interfaces import RecognitionBackend, EmitFn
from ..domain.models import EngineOptions, EngineStarted, EngineResult, EngineError, EngineEnded

logger = logging.getLogger(__name__)


class SimulatedBackend(RecognitionBackend):
    """
    Scripted engine for tests and headless demos.
    Drive it with say() / fail() / end(); it never listens to real audio.
    """
    name = "simulated"

    def __init__(self,
                 available: bool = True,
                 permission: AuthorizationState = AuthorizationState.AUTHORIZED):
        self.available = available
        self.permission = permission
        self.permission_requests = 0

        self._emitters: Dict[int, EmitFn] = {}
        self.options: Dict[int, EngineOptions] = {}
        self.started: List[int] = []
        self.stopped: List[int] = []
        self.aborted: List[int] = []
        self._last_emit: Optional[EmitFn] = None

    def is_available(self) -> bool:
        return self.available

    async def request_permission(self) -> AuthorizationState:
        self.permission_requests += 1
        return self.permission

    def start(self, session_id: int, options: EngineOptions, emit: EmitFn) -> None:
        logger.debug(f"Simulated engine session {session_id} started ({options.locale})")
        self._emitters[session_id] = emit
        self._last_emit = emit
        self.options[session_id] = options
        self.started.append(session_id)
        emit(EngineStarted(session_id))

    def stop(self, session_id: int) -> None:
        emit = self._emitters.pop(session_id, None)
        if emit:
            self.stopped.append(session_id)
            emit(EngineEnded(session_id))

    def abort(self, session_id: int) -> None:
        emit = self._emitters.pop(session_id, None)
        if emit:
            self.aborted.append(session_id)
            emit(EngineError(session_id, RecognitionErrorCode.ABORTED.value))
            emit(EngineEnded(session_id))

    @property
    def active_sessions(self) -> Set[int]:
        return set(self._emitters)

    @property
    def current_session(self) -> Optional[int]:
        return self.started[-1] if self.started and self.started[-1] in self._emitters else None

    # --- Scripting ---

    def say(self, transcript: str, confidence: float = 0.9, is_final: bool = True,
            session_id: Optional[int] = None) -> None:
        sid = self._resolve(session_id)
        self._emitters[sid](EngineResult(sid, transcript, confidence, is_final))

    def fail(self, code, session_id: Optional[int] = None) -> None:
        """Emits an engine error; like a real engine, the session then ends."""
        sid = self._resolve(session_id)
        emit = self._emitters.pop(sid)
        emit(EngineError(sid, str(getattr(code, "value", code))))
        emit(EngineEnded(sid))

    def end(self, session_id: Optional[int] = None) -> None:
        sid = self._resolve(session_id)
        self._emitters.pop(sid)(EngineEnded(sid))

    def emit_raw(self, event) -> None:
        """Pushes an arbitrary event through the most recent emitter (stale-event tests)."""
        emit = self._last_emit
        if emit is None:
            raise RuntimeError("No simulated session has been started")
        emit(event)

    def _resolve(self, session_id: Optional[int]) -> int:
        sid = session_id if session_id is not None else self.current_session
        if sid is None or sid not in self._emitters:
            raise RuntimeError(f"Simulated session {sid} is not active")
        return sid
