import asyncio
import pytest

from vidvoice.core.common.enums import AuthorizationState, RecognitionErrorCode, SessionStatus
from vidvoice.core.common.errors import (
    PermissionDeniedError, EnvironmentUnsupportedError, ConfigurationError,
    TransientRecognitionError, FatalRecognitionError, LowConfidenceError,
)
from vidvoice.features.speech_recognition.data.locales import speech_locale
from vidvoice.features.speech_recognition.data.simulated_backend import SimulatedBackend
from vidvoice.features.speech_recognition.domain.models import EngineError, EngineResult, SessionConfig
from vidvoice.features.speech_recognition.service.session_manager import RecognitionSessionManager
from vidvoice.features.speech_recognition.service.api import create_backend


# --- HELPERS ---

class Recorder:
    """Collects everything the manager reports."""

    def __init__(self, manager: RecognitionSessionManager):
        self.transcripts = []
        self.errors = []
        self.hints = []
        self.statuses = []
        manager.on_transcript(self.transcripts.append)
        manager.on_error(self.errors.append)
        manager.on_hint(self.hints.append)
        manager.on_status(self.statuses.append)


def fast_config(**overrides) -> SessionConfig:
    values = dict(
        confidence_threshold=0.7,
        max_retries=2,
        no_speech_backoff=0.01,
        end_backoff=0.01,
        network_backoff=0.03,
        continuous_restart_delay=0.01,
        max_session_seconds=30.0,
    )
    values.update(overrides)
    return SessionConfig(**values)


async def authorized(backend=None, **config_overrides):
    backend = backend or SimulatedBackend()
    manager = RecognitionSessionManager(backend, fast_config(**config_overrides), "en")
    await manager.request_authorization()
    return manager, backend, Recorder(manager)


# --- AUTHORIZATION ---

@pytest.mark.asyncio
async def test_authorization_granted():
    manager = RecognitionSessionManager(SimulatedBackend(), fast_config())
    statuses = []
    manager.on_status(statuses.append)

    state = await manager.request_authorization()

    assert state == AuthorizationState.AUTHORIZED
    assert manager.authorization == AuthorizationState.AUTHORIZED
    assert statuses == [SessionStatus.AUTHORIZING, SessionStatus.IDLE]


@pytest.mark.asyncio
async def test_authorization_denied():
    manager = RecognitionSessionManager(
        SimulatedBackend(permission=AuthorizationState.DENIED), fast_config()
    )

    with pytest.raises(PermissionDeniedError):
        await manager.request_authorization()

    assert manager.authorization == AuthorizationState.DENIED
    assert manager.status == SessionStatus.ERROR


@pytest.mark.asyncio
async def test_unavailable_environment_is_restricted():
    manager = RecognitionSessionManager(SimulatedBackend(available=False), fast_config())

    with pytest.raises(EnvironmentUnsupportedError):
        await manager.request_authorization()

    assert manager.authorization == AuthorizationState.RESTRICTED


@pytest.mark.asyncio
async def test_start_requires_authorization():
    backend = SimulatedBackend()
    manager = RecognitionSessionManager(backend, fast_config())

    with pytest.raises(PermissionDeniedError):
        await manager.start_single_shot()

    assert backend.started == []


# --- SINGLE SHOT ---

@pytest.mark.asyncio
async def test_single_shot_accepts_final_transcript():
    """
    1. A final result above threshold reaches transcript listeners.
    2. The pass completes: engine released, status idle.
    """
    manager, backend, rec = await authorized()

    # 1. Act
    session_id = await manager.start_single_shot()
    assert manager.status == SessionStatus.LISTENING
    backend.say("play", confidence=0.9)
    await manager.flush()

    # 2. Assert
    assert [t.text for t in rec.transcripts] == ["play"]
    assert rec.transcripts[0].confidence == 0.9
    assert manager.status == SessionStatus.IDLE
    assert backend.active_sessions == set()
    assert session_id in backend.stopped
    assert backend.options[session_id].locale == "en-US"
    assert backend.options[session_id].continuous is False

    await manager.close()


@pytest.mark.asyncio
async def test_low_confidence_never_reaches_listeners():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    backend.say("play", confidence=0.5)
    await manager.flush()

    assert rec.transcripts == []
    assert len(rec.hints) == 1
    assert isinstance(rec.hints[0], LowConfidenceError)
    assert "50%" in rec.hints[0].message
    assert manager.last_confidence == 0.5
    # Still listening for a better attempt
    assert manager.status == SessionStatus.LISTENING

    await manager.close()


@pytest.mark.asyncio
async def test_interim_results_only_update_confidence():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    backend.say("pla", confidence=0.42, is_final=False)
    await manager.flush()

    assert rec.transcripts == []
    assert rec.hints == []
    assert manager.last_confidence == 0.42

    await manager.close()


@pytest.mark.asyncio
async def test_threshold_can_be_changed_at_runtime():
    manager, backend, rec = await authorized()
    manager.set_confidence_threshold(0.4)
    await manager.start_single_shot()

    backend.say("pause", confidence=0.5)
    await manager.flush()

    assert [t.text for t in rec.transcripts] == ["pause"]
    await manager.close()


@pytest.mark.asyncio
async def test_stop_twice_is_a_noop():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()
    rec.statuses.clear()

    manager.stop()
    manager.stop()
    await manager.flush()

    assert rec.statuses == [SessionStatus.IDLE]
    assert rec.errors == []
    assert backend.active_sessions == set()

    await manager.close()


@pytest.mark.asyncio
async def test_restart_keeps_exactly_one_engine_handle():
    manager, backend, rec = await authorized()

    first = await manager.start_single_shot()
    second = await manager.start_continuous()
    await manager.flush()

    assert first != second
    assert backend.active_sessions == {second}
    assert first in backend.aborted
    assert manager.session.session_id == second

    await manager.close()


@pytest.mark.asyncio
async def test_stale_events_are_discarded():
    manager, backend, rec = await authorized()
    old = await manager.start_continuous()
    await manager.start_continuous()

    backend.emit_raw(EngineResult(old, "play", 0.99, True))
    backend.emit_raw(EngineError(old, "not-allowed"))
    await manager.flush()

    assert rec.transcripts == []
    assert rec.errors == []
    assert manager.status == SessionStatus.LISTENING
    assert manager.authorization == AuthorizationState.AUTHORIZED

    await manager.close()


@pytest.mark.asyncio
async def test_no_speech_retries_then_gives_up():
    """
    1. no-speech opens a fresh session after the backoff (retry 1, retry 2).
    2. The third failure exceeds the ceiling: TransientRecognitionError, status error.
    """
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    for attempt in range(2):
        backend.fail(RecognitionErrorCode.NO_SPEECH)
        await manager.flush()
        await asyncio.sleep(0.05)
        await manager.flush()
        assert len(backend.started) == attempt + 2
        assert manager.session.retry_count == attempt + 1

    backend.fail(RecognitionErrorCode.NO_SPEECH)
    await manager.flush()

    assert len(rec.errors) == 1
    assert isinstance(rec.errors[0], TransientRecognitionError)
    assert rec.errors[0].code == RecognitionErrorCode.NO_SPEECH
    assert manager.status == SessionStatus.ERROR
    assert backend.active_sessions == set()

    # Nothing else is scheduled
    await asyncio.sleep(0.05)
    assert len(backend.started) == 3

    await manager.close()


@pytest.mark.asyncio
async def test_retry_budget_resets_on_user_start():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    backend.fail(RecognitionErrorCode.NO_SPEECH)
    await manager.flush()
    await asyncio.sleep(0.05)
    assert manager.session.retry_count == 1

    await manager.start_single_shot()
    assert manager.session.retry_count == 0

    await manager.close()


@pytest.mark.asyncio
async def test_unexpected_end_retries_in_single_shot():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    backend.end()
    await manager.flush()
    await asyncio.sleep(0.05)

    assert len(backend.started) == 2
    assert rec.errors == []
    assert manager.status == SessionStatus.LISTENING

    await manager.close()


@pytest.mark.asyncio
async def test_network_error_uses_longer_backoff_and_hints():
    manager, backend, rec = await authorized(no_speech_backoff=0.01, network_backoff=0.2)
    await manager.start_single_shot()

    backend.fail(RecognitionErrorCode.NETWORK)
    await manager.flush()
    await asyncio.sleep(0.05)

    # Short backoff elapsed, network backoff has not
    assert len(backend.started) == 1
    assert len(rec.hints) == 1
    assert rec.hints[0].code == RecognitionErrorCode.NETWORK

    await asyncio.sleep(0.25)
    assert len(backend.started) == 2

    await manager.close()


@pytest.mark.asyncio
async def test_stop_cancels_pending_retry():
    manager, backend, rec = await authorized(no_speech_backoff=0.05)
    await manager.start_single_shot()

    backend.fail(RecognitionErrorCode.NO_SPEECH)
    await manager.flush()
    manager.stop()
    await asyncio.sleep(0.1)

    assert len(backend.started) == 1
    assert manager.status == SessionStatus.IDLE
    assert manager.is_active is False

    await manager.close()


@pytest.mark.asyncio
async def test_not_allowed_is_fatal_and_revokes_authorization():
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    backend.fail("not-allowed")
    await manager.flush()
    await asyncio.sleep(0.05)

    assert len(rec.errors) == 1
    assert isinstance(rec.errors[0], FatalRecognitionError)
    assert rec.errors[0].message == "Microphone permission denied. Please allow microphone access."
    assert manager.authorization == AuthorizationState.DENIED
    assert manager.status == SessionStatus.ERROR
    assert len(backend.started) == 1

    with pytest.raises(PermissionDeniedError):
        await manager.start_single_shot()

    await manager.close()


@pytest.mark.asyncio
async def test_unknown_engine_code_is_fatal_with_raw_code():
    manager, backend, rec = await authorized()
    await manager.start_continuous()

    backend.fail("bad-grammar")
    await manager.flush()

    assert isinstance(rec.errors[0], FatalRecognitionError)
    assert rec.errors[0].message == "Speech recognition error: bad-grammar"

    await manager.close()


@pytest.mark.asyncio
async def test_aborted_is_suppressed():
    manager, backend, rec = await authorized()
    session_id = await manager.start_single_shot()

    backend.emit_raw(EngineError(session_id, "aborted"))
    await manager.flush()

    assert rec.errors == []
    assert rec.hints == []
    assert manager.session.session_id == session_id

    await manager.close()


# --- CONTINUOUS ---

@pytest.mark.asyncio
async def test_continuous_keeps_listening_after_results():
    manager, backend, rec = await authorized()
    session_id = await manager.start_continuous()

    backend.say("play")
    backend.say("pause")
    await manager.flush()

    assert [t.text for t in rec.transcripts] == ["play", "pause"]
    assert manager.status == SessionStatus.LISTENING
    assert backend.active_sessions == {session_id}
    assert backend.options[session_id].continuous is True

    await manager.close()


@pytest.mark.asyncio
async def test_continuous_restarts_after_natural_end():
    manager, backend, rec = await authorized()
    await manager.start_continuous()

    backend.end()
    await manager.flush()
    await asyncio.sleep(0.05)

    assert len(backend.started) == 2
    assert len(backend.active_sessions) == 1
    assert rec.errors == []

    await manager.close()


@pytest.mark.asyncio
async def test_continuous_no_speech_is_silent():
    manager, backend, rec = await authorized()
    session_id = await manager.start_continuous()

    backend.emit_raw(EngineError(session_id, "no-speech"))
    await manager.flush()

    assert rec.hints == []
    assert rec.errors == []
    assert manager.session.session_id == session_id

    await manager.close()


@pytest.mark.asyncio
async def test_continuous_network_error_hints_and_restarts():
    manager, backend, rec = await authorized(network_backoff=0.03)
    await manager.start_continuous()

    backend.fail("network")
    await manager.flush()
    await asyncio.sleep(0.1)

    assert len(rec.hints) == 1
    assert isinstance(rec.hints[0], TransientRecognitionError)
    assert len(backend.started) == 2
    assert manager.status == SessionStatus.LISTENING

    await manager.close()


@pytest.mark.asyncio
async def test_continuous_session_rotation():
    """
    The engine session is replaced once it reaches the maximum duration,
    and only the newest engine handle stays open.
    """
    manager, backend, rec = await authorized(max_session_seconds=0.05)
    first = await manager.start_continuous()

    await asyncio.sleep(0.08)
    await manager.flush()

    assert len(backend.started) >= 2
    assert first in backend.aborted
    assert backend.active_sessions == {manager.session.session_id}
    assert manager.status == SessionStatus.LISTENING

    # Results from the rotated-out session are ignored
    backend.emit_raw(EngineResult(first, "play", 0.99, True))
    await manager.flush()
    assert rec.transcripts == []

    await manager.close()
    assert backend.active_sessions == set()


@pytest.mark.asyncio
async def test_listener_failure_does_not_stop_the_consumer():
    manager, backend, rec = await authorized()

    def explode(_):
        raise RuntimeError("boom")

    manager.on_transcript(explode)
    await manager.start_continuous()

    backend.say("play")
    backend.say("stop")
    await manager.flush()

    assert [t.text for t in rec.transcripts] == ["play", "stop"]
    await manager.close()


@pytest.mark.asyncio
async def test_async_transcript_listener_is_awaited():
    manager, backend, rec = await authorized()
    handled = []

    async def slow_listener(event):
        await asyncio.sleep(0.01)
        handled.append(event.text)

    manager.on_transcript(slow_listener)
    await manager.start_single_shot()

    backend.say("mute")
    await manager.flush()

    assert handled == ["mute"]
    await manager.close()


@pytest.mark.asyncio
async def test_rejected_final_then_end_is_not_a_failure():
    """
    1. A single-shot pass hears only a low-confidence final, then the engine ends.
    2. The user already got a repeat prompt: no retry, no error, back to idle.
    """
    manager, backend, rec = await authorized()
    await manager.start_single_shot()

    # 1. Act
    backend.say("play", confidence=0.5)
    backend.end()
    await manager.flush()
    await asyncio.sleep(0.05)

    # 2. Assert
    assert len(rec.hints) == 1
    assert isinstance(rec.hints[0], LowConfidenceError)
    assert rec.errors == []
    assert manager.last_error is None
    assert len(backend.started) == 1
    assert manager.status == SessionStatus.IDLE
    assert manager.is_active is False

    await manager.close()


# --- ENGINE FAILURES OUTSIDE THE EVENT STREAM ---

class BrokenStartBackend(SimulatedBackend):
    """Engine that blows up when asked to start, after `healthy_starts` good ones."""

    def __init__(self, healthy_starts=0):
        super().__init__()
        self.healthy_starts = healthy_starts

    def start(self, session_id, options, emit):
        if self.healthy_starts <= 0:
            raise RuntimeError("engine exploded")
        self.healthy_starts -= 1
        super().start(session_id, options, emit)


class BrokenPermissionBackend(SimulatedBackend):
    async def request_permission(self):
        raise RuntimeError("permission bridge crashed")


@pytest.mark.asyncio
async def test_engine_start_crash_becomes_fatal_error():
    manager, backend, rec = await authorized(BrokenStartBackend())

    with pytest.raises(FatalRecognitionError) as exc_info:
        await manager.start_single_shot()

    assert exc_info.value.code == RecognitionErrorCode.UNKNOWN
    assert "engine exploded" in exc_info.value.message
    assert manager.status == SessionStatus.ERROR
    assert manager.session is None
    assert manager.is_active is False
    assert rec.errors == [exc_info.value]

    await manager.close()


@pytest.mark.asyncio
async def test_permission_crash_becomes_fatal_error():
    manager = RecognitionSessionManager(BrokenPermissionBackend(), fast_config())

    with pytest.raises(FatalRecognitionError) as exc_info:
        await manager.request_authorization()

    assert "permission bridge crashed" in exc_info.value.message
    assert manager.status == SessionStatus.ERROR
    assert manager.authorization == AuthorizationState.NOT_DETERMINED


@pytest.mark.asyncio
async def test_restart_crash_in_continuous_mode_is_reported():
    """
    1. The first engine session runs; the timed restart after its end crashes.
    2. The failure reaches error listeners and nothing keeps claiming to listen.
    """
    manager, backend, rec = await authorized(BrokenStartBackend(healthy_starts=1))
    await manager.start_continuous()

    # 1. Act
    backend.end()
    await manager.flush()
    await asyncio.sleep(0.05)

    # 2. Assert
    assert len(rec.errors) == 1
    assert isinstance(rec.errors[0], FatalRecognitionError)
    assert manager.status == SessionStatus.ERROR
    assert manager.session is None
    assert manager.is_active is False

    await manager.close()


# --- MISC ---

@pytest.mark.parametrize("language, locale", [
    ("en", "en-US"), ("zh-TW", "zh-TW"), ("pt", "pt-PT"), ("pt-BR", "pt-BR"),
    ("ar", "ar-SA"), ("ko", "ko-KR"), ("xx", "en-US"), (None, "en-US"),
])
def test_speech_locale(language, locale):
    assert speech_locale(language) == locale


@pytest.mark.asyncio
async def test_language_change_applies_to_next_session():
    manager, backend, rec = await authorized()
    manager.set_language("ja")

    session_id = await manager.start_single_shot()

    assert backend.options[session_id].locale == "ja-JP"
    await manager.close()


def test_create_backend():
    assert isinstance(create_backend("simulated"), SimulatedBackend)
    assert create_backend(" Simulated ").name == "simulated"

    with pytest.raises(ConfigurationError):
        create_backend("carrier-pigeon")
