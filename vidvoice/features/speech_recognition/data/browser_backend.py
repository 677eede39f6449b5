# File: vidvoice/features/speech_recognition/data/browser_backend.py
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from vidvoice.core.common.enums import AuthorizationState, RecognitionErrorCode
from vidvoice.core.common.errors import FatalRecognitionError
from ..domain.interfaces import RecognitionBackend, EmitFn
from ..domain.models import EngineOptions, EngineStarted, EngineResult, EngineError, EngineEnded

logger = logging.getLogger(__name__)


class BrowserSpeechBackend(RecognitionBackend):
    """
    Adapter over a W3C SpeechRecognition-shaped engine object.

    The engine is anything exposing start()/stop()/abort(), the
    lang/continuous/interimResults/maxAlternatives attributes, and the
    onstart/onresult/onerror/onend handler slots (a bridged browser object,
    or a test double). A fresh engine is created per session.
    """
    name = "browser"

    def __init__(self,
                 engine_factory: Optional[Callable[[], Any]] = None,
                 permission_probe: Optional[Callable[[], Awaitable[AuthorizationState]]] = None):
        self.engine_factory = engine_factory
        self.permission_probe = permission_probe
        self._engines: Dict[int, Any] = {}

    def is_available(self) -> bool:
        return self.engine_factory is not None

    async def request_permission(self) -> AuthorizationState:
        if not self.is_available():
            return AuthorizationState.RESTRICTED
        if self.permission_probe is None:
            # The browser prompts on first start(); a refusal arrives as 'not-allowed'
            return AuthorizationState.AUTHORIZED
        return await self.permission_probe()

    def start(self, session_id: int, options: EngineOptions, emit: EmitFn) -> None:
        if not self.is_available():
            raise FatalRecognitionError(
                RecognitionErrorCode.SERVICE_NOT_ALLOWED,
                "Speech recognition service not available",
            )

        engine = self.engine_factory()
        engine.lang = options.locale
        engine.continuous = options.continuous
        engine.interimResults = options.interim_results
        engine.maxAlternatives = options.max_alternatives

        engine.onstart = lambda *_: emit(EngineStarted(session_id))
        engine.onresult = lambda event: self._on_result(session_id, event, emit)
        engine.onerror = lambda event: emit(EngineError(session_id, *self._read_error(event)))
        engine.onend = lambda *_: self._on_end(session_id, emit)

        self._engines[session_id] = engine
        try:
            engine.start()
        except Exception as e:
            self._engines.pop(session_id, None)
            raise FatalRecognitionError(
                RecognitionErrorCode.UNKNOWN, f"Speech recognition error: {e}"
            ) from e

    def stop(self, session_id: int) -> None:
        engine = self._engines.pop(session_id, None)
        if engine is not None:
            engine.stop()

    def abort(self, session_id: int) -> None:
        engine = self._engines.pop(session_id, None)
        if engine is not None:
            engine.abort()

    @property
    def active_sessions(self) -> Set[int]:
        return set(self._engines)

    # --- Callback translation ---

    def _on_result(self, session_id: int, event: Any, emit: EmitFn) -> None:
        results = event.results
        index = getattr(event, "resultIndex", len(results) - 1)
        result = results[index]
        best = result[0]
        confidence = float(getattr(best, "confidence", 0.0) or 0.0)
        emit(EngineResult(
            session_id=session_id,
            transcript=str(best.transcript),
            confidence=max(0.0, min(1.0, confidence)),
            is_final=bool(getattr(result, "isFinal", False)),
        ))

    @staticmethod
    def _read_error(event: Any):
        code = getattr(event, "error", None) or str(event)
        detail = getattr(event, "message", None) or None
        return code, detail

    def _on_end(self, session_id: int, emit: EmitFn) -> None:
        self._engines.pop(session_id, None)
        emit(EngineEnded(session_id))
