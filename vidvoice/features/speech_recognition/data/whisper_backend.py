# File: vidvoice/features/speech_recognition/data/whisper_backend.py
import math
import logging
import threading
import numpy as np
import whisper
from typing import Callable, Dict, Optional, Set, Tuple

from vidvoice.core.config.settings import settings
from vidvoice.core.common.enums import AuthorizationState, RecognitionErrorCode
from vidvoice.core.model_lifecycle.orchestrator import ModelOrchestrator
from vidvoice.core.model_lifecycle.types import ModelType
from ..domain.interfaces import RecognitionBackend, EmitFn
from ..domain.models import EngineOptions, EngineStarted, EngineResult, EngineError, EngineEnded

logger = logging.getLogger(__name__)

# (seconds, sample_rate) -> mono float32 samples
Recorder = Callable[[float, int], np.ndarray]

# Microphone reads happen in blocks this long so an abort lands quickly
CAPTURE_BLOCK_SECONDS = 0.1


class _Worker:
    def __init__(self):
        self.cancel = threading.Event()   # finish the current chunk, then end
        self.discard = threading.Event()  # drop whatever is in flight
        self.thread: Optional[threading.Thread] = None


class NativeWhisperBackend(RecognitionBackend):
    """
    Local speech engine: microphone chunks transcribed by Whisper.

    Each session runs on its own capture thread and reports through the
    thread-safe emit sink. The Whisper model is held by the ModelOrchestrator
    so it survives the constant session restarts of continuous listening.
    """
    name = "native"

    def __init__(self,
                 model_name: Optional[str] = None,
                 device: Optional[str] = None,
                 capture_seconds: Optional[float] = None,
                 sample_rate: Optional[int] = None,
                 no_speech_threshold: Optional[float] = None,
                 recorder: Optional[Recorder] = None,
                 model_loader: Optional[Callable] = None):
        self.model_name = model_name or settings.WHISPER_MODEL_NAME
        self.device = device or settings.WHISPER_DEVICE
        self.capture_seconds = capture_seconds or settings.CAPTURE_SECONDS
        self.sample_rate = sample_rate or settings.CAPTURE_SAMPLE_RATE
        self.no_speech_threshold = (
            no_speech_threshold if no_speech_threshold is not None else settings.NO_SPEECH_PROBABILITY
        )
        self.recorder = recorder
        self.model_loader = model_loader
        self.orchestrator = ModelOrchestrator()

        self._workers: Dict[int, _Worker] = {}
        # Stopped/aborted threads that may still hold the microphone
        self._draining: Set[threading.Thread] = set()
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        if self.recorder is not None:
            return True
        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            logger.warning(f"Audio capture unavailable: {e}")
            return False
        try:
            sd.query_devices(kind="input")
        except (sd.PortAudioError, ValueError) as e:
            logger.warning(f"No input device: {e}")
            return False
        return True

    async def request_permission(self) -> AuthorizationState:
        # Desktop capture has no separate prompt; no device means restricted.
        return AuthorizationState.AUTHORIZED if self.is_available() else AuthorizationState.RESTRICTED

    def start(self, session_id: int, options: EngineOptions, emit: EmitFn) -> None:
        worker = _Worker()
        worker.thread = threading.Thread(
            target=self._run,
            args=(session_id, options, emit, worker),
            name=f"whisper-session-{session_id}",
            daemon=True,
        )
        with self._lock:
            self._workers[session_id] = worker
        worker.thread.start()

    def stop(self, session_id: int) -> None:
        worker = self._release(session_id)
        if worker:
            worker.cancel.set()

    def abort(self, session_id: int) -> None:
        worker = self._release(session_id)
        if worker:
            worker.discard.set()
            worker.cancel.set()

    def _release(self, session_id: int) -> Optional[_Worker]:
        with self._lock:
            worker = self._workers.pop(session_id, None)
            if worker and worker.thread is not None and worker.thread.is_alive():
                self._draining.add(worker.thread)
        return worker

    @property
    def active_sessions(self) -> Set[int]:
        with self._lock:
            return set(self._workers)

    # --- Worker ---

    def _run(self, session_id: int, options: EngineOptions, emit: EmitFn, worker: _Worker):
        emit(EngineStarted(session_id))
        try:
            self._wait_for_draining()
            while True:
                if worker.discard.is_set():
                    break
                try:
                    audio = self._record(worker)
                except Exception as e:
                    logger.error(f"Audio capture failed: {e}")
                    emit(EngineError(session_id, RecognitionErrorCode.AUDIO_CAPTURE.value, str(e)))
                    break
                if worker.discard.is_set():
                    break

                try:
                    result = self.transcribe(audio, options.locale)
                except Exception as e:
                    logger.exception(f"Whisper transcription failed for session {session_id}")
                    emit(EngineError(session_id, RecognitionErrorCode.UNKNOWN.value, str(e)))
                    break
                if worker.discard.is_set():
                    break

                if result is None:
                    emit(EngineError(session_id, RecognitionErrorCode.NO_SPEECH.value))
                else:
                    text, confidence = result
                    emit(EngineResult(session_id, text, confidence, True))

                if not options.continuous or worker.cancel.is_set():
                    break
        finally:
            with self._lock:
                self._workers.pop(session_id, None)
                self._draining.discard(threading.current_thread())
            emit(EngineEnded(session_id))

    def _wait_for_draining(self) -> None:
        """Only one session may hold the microphone: let retired captures finish first."""
        current = threading.current_thread()
        with self._lock:
            pending = [t for t in self._draining if t is not current]
        for thread in pending:
            thread.join()

    def _record(self, worker: _Worker) -> np.ndarray:
        if self.recorder is not None:
            audio = self.recorder(self.capture_seconds, self.sample_rate)
            return np.asarray(audio, dtype=np.float32).flatten()

        import sounddevice as sd
        frames = int(self.capture_seconds * self.sample_rate)
        block = max(1, int(CAPTURE_BLOCK_SECONDS * self.sample_rate))
        chunks = []
        captured = 0
        # A private stream per session, closed as soon as the session is aborted
        with sd.InputStream(samplerate=self.sample_rate, channels=1, dtype="float32") as stream:
            while captured < frames and not worker.discard.is_set():
                data, overflowed = stream.read(min(block, frames - captured))
                if overflowed:
                    logger.debug("Input overflow while capturing")
                chunks.append(data)
                captured += len(data)
        if not chunks:
            return np.zeros(0, dtype=np.float32)
        return np.concatenate(chunks).flatten()

    # --- Model ---

    def _load_model(self):
        if self.model_loader is not None:
            return self.model_loader()
        logger.debug(f"Loading Whisper {self.model_name} on {self.device}...")
        return whisper.load_model(self.model_name, device=self.device, download_root=str(settings.MODELS_DIR))

    def transcribe(self, audio: np.ndarray, locale: str) -> Optional[Tuple[str, float]]:
        """
        Returns (text, confidence) or None when the chunk holds no speech.
        Confidence is exp(mean avg_logprob), clamped to [0, 1].
        """
        model = self.orchestrator.request_model(ModelType.WHISPER, self._load_model, variant=self.model_name)
        raw = model.transcribe(
            audio,
            language=locale.split("-")[0].lower(),
            fp16=(self.device == "cuda"),
            condition_on_previous_text=False,
        )
        return self._to_result(raw)

    def _to_result(self, raw: dict) -> Optional[Tuple[str, float]]:
        text = (raw.get("text") or "").strip()
        segments = raw.get("segments") or []
        if not text or not segments:
            return None

        no_speech = sum(float(s.get("no_speech_prob", 0.0)) for s in segments) / len(segments)
        if no_speech > self.no_speech_threshold:
            logger.debug(f"Discarding chunk, no_speech_prob={no_speech:.2f}")
            return None

        avg_logprob = sum(float(s.get("avg_logprob", 0.0)) for s in segments) / len(segments)
        confidence = max(0.0, min(1.0, math.exp(avg_logprob)))
        return text, confidence
