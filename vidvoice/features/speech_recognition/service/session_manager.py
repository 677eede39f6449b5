# File: vidvoice/features/speech_recognition/service/session_manager.py
import asyncio
import inspect
import itertools
import logging
import threading
from typing import Callable, List, Optional

from vidvoice.core.config.settings import settings
from vidvoice.core.common.enums import (
    AuthorizationState, RecognitionErrorCode, RecognitionMode, SessionStatus,
)
from vidvoice.core.common.errors import (
    VidVoiceError, PermissionDeniedError, EnvironmentUnsupportedError,
    RecognitionError, FatalRecognitionError, LowConfidenceError, classify_engine_error,
)
from ..data.locales import speech_locale
from ..domain.interfaces import RecognitionBackend
from ..domain.models import (
    EngineEnded, EngineError, EngineEvent, EngineOptions, EngineResult, EngineStarted,
    RecognitionSession, SessionConfig, TranscriptEvent,
)

logger = logging.getLogger(__name__)


class RecognitionSessionManager:
    """
    Owns the lifecycle of speech recognition sessions.

    Backends push typed events onto a single queue; one consumer task drains
    it in order. Every start, retry and rotation opens a new session id, and
    events carrying any other id are discarded. Retry, restart and rotation
    timers are loop.call_later handles that stop() cancels synchronously.

    Listeners:
      - transcript: accepted final transcripts (may be coroutine functions)
      - error:      terminal failures (FatalRecognitionError, retry ceiling)
      - hint:       non-terminal notices (LowConfidenceError, network trouble)
      - status:     SessionStatus changes
    """

    def __init__(self,
                 backend: RecognitionBackend,
                 config: Optional[SessionConfig] = None,
                 language: Optional[str] = None):
        self.backend = backend
        self.config = config or SessionConfig()
        self.locale = speech_locale(language or settings.DEFAULT_LANGUAGE)

        self.authorization = AuthorizationState.NOT_DETERMINED
        self.status = SessionStatus.IDLE
        self.session: Optional[RecognitionSession] = None
        self.mode: Optional[RecognitionMode] = None
        self.last_confidence: float = 0.0
        self.last_error: Optional[VidVoiceError] = None

        self._ids = itertools.count(1)
        self._timers: List[asyncio.TimerHandle] = []
        self._rotation: Optional[asyncio.TimerHandle] = None

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_thread: Optional[int] = None
        self._queue: Optional[asyncio.Queue] = None
        self._consumer: Optional[asyncio.Task] = None

        self._transcript_listeners: List[Callable] = []
        self._error_listeners: List[Callable] = []
        self._hint_listeners: List[Callable] = []
        self._status_listeners: List[Callable] = []

    # --- Listener registration ---

    def on_transcript(self, callback: Callable) -> None:
        self._transcript_listeners.append(callback)

    def on_error(self, callback: Callable) -> None:
        self._error_listeners.append(callback)

    def on_hint(self, callback: Callable) -> None:
        self._hint_listeners.append(callback)

    def on_status(self, callback: Callable) -> None:
        self._status_listeners.append(callback)

    # --- Configuration ---

    def set_confidence_threshold(self, threshold: float) -> None:
        self.config.confidence_threshold = max(0.0, min(1.0, float(threshold)))

    def set_language(self, language: str) -> None:
        """Takes effect on the next engine session."""
        self.locale = speech_locale(language)

    @property
    def is_active(self) -> bool:
        return self.session is not None or bool(self._timers)

    # --- Public API ---

    async def request_authorization(self) -> AuthorizationState:
        """
        Asks the backend for microphone / speech permission.

        Raises:
            EnvironmentUnsupportedError: no usable engine here.
            PermissionDeniedError: the user (or policy) declined.
        """
        self._set_status(SessionStatus.AUTHORIZING)

        if not self.backend.is_available():
            self.authorization = AuthorizationState.RESTRICTED
            self._set_status(SessionStatus.ERROR)
            error = EnvironmentUnsupportedError("Speech recognition is not supported in this environment")
            self.last_error = error
            raise error

        try:
            state = await self.backend.request_permission()
        except Exception as e:
            logger.exception("Permission request failed")
            self._set_status(SessionStatus.ERROR)
            error = FatalRecognitionError(RecognitionErrorCode.UNKNOWN, f"Speech recognition error: {e}")
            self.last_error = error
            raise error from e
        self.authorization = state
        logger.info(f"Speech authorization: {state.value}")

        if state != AuthorizationState.AUTHORIZED:
            self._set_status(SessionStatus.ERROR)
            error = PermissionDeniedError("Microphone permission denied. Please allow microphone access.")
            self.last_error = error
            raise error

        self._set_status(SessionStatus.IDLE)
        return state

    async def start_single_shot(self) -> int:
        return await self._start(RecognitionMode.SINGLE_SHOT)

    async def start_continuous(self) -> int:
        return await self._start(RecognitionMode.CONTINUOUS)

    def stop(self) -> None:
        """Synchronous and idempotent. Cancels timers and the live engine session."""
        if self.session is not None or self._timers:
            logger.info("Stopping speech recognition")
        self._teardown()
        self.mode = None
        self._set_status(SessionStatus.IDLE)

    async def flush(self) -> None:
        """Waits until every queued engine event has been handled."""
        await asyncio.sleep(0)
        if self._queue is not None:
            await self._queue.join()

    async def close(self) -> None:
        self.stop()
        if self._consumer is not None:
            self._consumer.cancel()
            try:
                await self._consumer
            except asyncio.CancelledError:
                pass
            self._consumer = None

    # --- Session lifecycle ---

    async def _start(self, mode: RecognitionMode) -> int:
        if self.authorization != AuthorizationState.AUTHORIZED:
            raise PermissionDeniedError("Microphone permission has not been granted")

        self._ensure_consumer()
        # One engine handle at a time: the previous session goes first
        self._teardown()
        self.mode = mode
        self.last_error = None

        try:
            return self._open_session(mode, retry_count=0)
        except RecognitionError as e:
            self._terminate(e)
            raise

    def _open_session(self, mode: RecognitionMode, retry_count: int) -> int:
        session_id = next(self._ids)
        self.session = RecognitionSession(
            session_id=session_id,
            mode=mode,
            locale=self.locale,
            session_start_time=self._loop.time(),
            max_session_duration_ms=int(self.config.max_session_seconds * 1000),
            max_retries=self.config.max_retries,
            retry_count=retry_count,
        )
        self._set_status(SessionStatus.LISTENING)

        options = EngineOptions(
            locale=self.locale,
            continuous=(mode == RecognitionMode.CONTINUOUS),
            interim_results=True,
        )
        logger.info(f"Opening {mode.value} session {session_id} ({self.locale}, retry {retry_count})")
        try:
            self.backend.start(session_id, options, self._emit)
        except RecognitionError:
            self.session = None
            raise
        except Exception as e:
            # No engine behind this session
            self.session = None
            logger.exception(f"Engine failed to start session {session_id}")
            raise FatalRecognitionError(RecognitionErrorCode.UNKNOWN, f"Speech recognition error: {e}") from e

        if mode == RecognitionMode.CONTINUOUS:
            self._rotation = self._loop.call_later(
                self.config.max_session_seconds, self._rotate, session_id
            )
        return session_id

    def _reopen(self, mode: RecognitionMode, retry_count: int) -> None:
        """Timer callback: opens the next session after a backoff."""
        try:
            self._open_session(mode, retry_count)
        except RecognitionError as e:
            self._terminate(e)

    def _rotate(self, session_id: int) -> None:
        """Engines stop delivering results after about a minute; swap in a fresh session."""
        self._rotation = None
        session = self.session
        if session is None or session.session_id != session_id:
            return
        logger.info(f"Rotating continuous session {session_id}")
        self._retire(session)
        self._reopen(RecognitionMode.CONTINUOUS, 0)

    def _retire(self, session: RecognitionSession) -> None:
        """Aborts one engine session. Its late events become stale."""
        if self.session is session:
            self.session = None
        if self._rotation is not None:
            self._rotation.cancel()
            self._rotation = None
        self.backend.abort(session.session_id)

    def _teardown(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        if self.session is not None:
            self._retire(self.session)
        elif self._rotation is not None:
            self._rotation.cancel()
            self._rotation = None

    def _schedule(self, delay: float, callback, *args) -> None:
        handle = None

        def fire():
            if handle in self._timers:
                self._timers.remove(handle)
            callback(*args)

        handle = self._loop.call_later(delay, fire)
        self._timers.append(handle)

    def _retry_or_fail(self, session: RecognitionSession, error: RecognitionError, delay: float) -> None:
        if session.retry_count >= session.max_retries:
            logger.warning(f"Giving up after {session.retry_count} retries: {error.message}")
            self._terminate(error)
            return

        next_count = session.retry_count + 1
        logger.info(f"Retrying single-shot recognition in {delay}s ({next_count}/{session.max_retries})")
        self._retire(session)
        self._schedule(delay, self._reopen, RecognitionMode.SINGLE_SHOT, next_count)

    def _terminate(self, error: VidVoiceError) -> None:
        self._teardown()
        self.mode = None
        self.last_error = error
        self._set_status(SessionStatus.ERROR)
        self._notify_sync(self._error_listeners, error)

    # --- Event plumbing ---

    def _ensure_consumer(self) -> None:
        loop = asyncio.get_running_loop()
        if self._loop is not loop or self._consumer is None or self._consumer.done():
            self._loop = loop
            self._loop_thread = threading.get_ident()
            self._queue = asyncio.Queue()
            self._consumer = loop.create_task(self._consume())

    def _emit(self, event: EngineEvent) -> None:
        """Handed to backends. Safe to call from any thread."""
        if self._loop is None or self._queue is None:
            logger.warning(f"Dropping {type(event).__name__}: manager not running")
            return
        if threading.get_ident() == self._loop_thread:
            self._queue.put_nowait(event)
            return
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, event)
        except RuntimeError:
            logger.debug(f"Dropping {type(event).__name__}: event loop closed")

    async def _consume(self) -> None:
        while True:
            event = await self._queue.get()
            try:
                await self._dispatch(event)
            except Exception:
                logger.exception(f"Failed to handle {event!r}")
            finally:
                self._queue.task_done()

    async def _dispatch(self, event: EngineEvent) -> None:
        session = self.session
        if session is None or event.session_id != session.session_id:
            logger.debug(f"Discarding stale {type(event).__name__} from session {event.session_id}")
            return

        if isinstance(event, EngineStarted):
            logger.debug(f"Engine session {event.session_id} is listening")
        elif isinstance(event, EngineResult):
            await self._handle_result(session, event)
        elif isinstance(event, EngineError):
            self._handle_error(session, event)
        elif isinstance(event, EngineEnded):
            self._handle_end(session)

    async def _handle_result(self, session: RecognitionSession, event: EngineResult) -> None:
        self.last_confidence = event.confidence
        if not event.is_final:
            return

        threshold = self.config.confidence_threshold
        if event.confidence < threshold:
            logger.info(f"Rejected '{event.transcript}' ({event.confidence:.2f} < {threshold:.2f})")
            session.rejected_final = True
            self._notify_sync(self._hint_listeners, LowConfidenceError(event.confidence, threshold))
            return

        session.received_final = True
        session.last_transcript = event.transcript
        if session.mode == RecognitionMode.SINGLE_SHOT:
            self._set_status(SessionStatus.PROCESSING)

        transcript = TranscriptEvent(text=event.transcript, confidence=event.confidence, is_final=True)
        for callback in list(self._transcript_listeners):
            try:
                result = callback(transcript)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Transcript listener failed for '{event.transcript}'")

        # A listener may have stopped or restarted recognition meanwhile
        if session.mode == RecognitionMode.SINGLE_SHOT and self.session is session:
            self.session = None
            self.backend.stop(session.session_id)
            self.mode = None
            self._set_status(SessionStatus.IDLE)

    def _handle_error(self, session: RecognitionSession, event: EngineError) -> None:
        error = classify_engine_error(event.code, event.detail)

        if error.code == RecognitionErrorCode.ABORTED:
            logger.debug(f"Session {session.session_id} aborted")
            return

        if isinstance(error, FatalRecognitionError):
            logger.error(f"Speech recognition failed ({error.code.value}): {error.message}")
            if error.code == RecognitionErrorCode.NOT_ALLOWED:
                self.authorization = AuthorizationState.DENIED
            self._terminate(error)
            return

        if session.mode == RecognitionMode.CONTINUOUS:
            if error.code == RecognitionErrorCode.NETWORK:
                self._notify_sync(self._hint_listeners, error)
                self._retire(session)
                self._schedule(self.config.network_backoff, self._reopen, RecognitionMode.CONTINUOUS, 0)
            # no-speech is expected while idle in continuous mode
            return

        if error.code == RecognitionErrorCode.NETWORK:
            self._notify_sync(self._hint_listeners, error)
            self._retry_or_fail(session, error, self.config.network_backoff)
        else:
            self._retry_or_fail(session, error, self.config.no_speech_backoff)

    def _handle_end(self, session: RecognitionSession) -> None:
        if session.mode == RecognitionMode.CONTINUOUS:
            logger.debug(f"Continuous session {session.session_id} ended, restarting")
            self._retire(session)
            self._schedule(self.config.continuous_restart_delay, self._reopen, RecognitionMode.CONTINUOUS, 0)
            return

        if session.received_final or session.rejected_final:
            # A rejected final already asked the user to repeat; that is not a failure
            self.session = None
            self.mode = None
            self._set_status(SessionStatus.IDLE)
            return

        # Single-shot ended without a usable final result
        error = classify_engine_error(RecognitionErrorCode.NO_SPEECH.value)
        self._retry_or_fail(session, error, self.config.end_backoff)

    # --- Notification ---

    def _set_status(self, status: SessionStatus) -> None:
        if self.status == status:
            return
        self.status = status
        if self.session is not None:
            self.session.status = status
        self._notify_sync(self._status_listeners, status)

    @staticmethod
    def _notify_sync(listeners: List[Callable], payload) -> None:
        for callback in list(listeners):
            try:
                callback(payload)
            except Exception:
                logger.exception(f"Listener {callback!r} failed")
