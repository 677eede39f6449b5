# File: vidvoice/features/voice_control/service/orchestrator.py
import logging
from typing import Callable, Dict, List, Optional

from vidvoice.core.common.enums import AuthorizationState, CommandId, RecognitionMode
from vidvoice.core.common.errors import VidVoiceError, CommandNotRecognizedError, PreconditionError
from vidvoice.features.command_grammar.service.grammar import CommandGrammar
from vidvoice.features.command_grammar.service.api import grammar as default_grammar
from vidvoice.features.preferences.service.api import VoicePreferences
from vidvoice.features.speech_recognition.domain.models import TranscriptEvent
from vidvoice.features.speech_recognition.service.session_manager import RecognitionSessionManager
from ..domain.interfaces import IVoiceLogRepository
from ..domain.models import CommandResult
from .dispatcher import dispatch

logger = logging.getLogger(__name__)

NO_COMMAND_MESSAGE = "no voice command received"
NO_VIDEO_MESSAGE = "no video loaded"
NO_PLAYER_MESSAGE = "player unavailable"


class VoiceLogRecorder:
    """Result listener that persists every processed command."""

    def __init__(self, repo: IVoiceLogRepository):
        self.repo = repo

    def __call__(self, result: CommandResult, transcript: str, surface) -> None:
        self.repo.record(
            action=result.command_id or "unrecognized",
            source_url=getattr(surface, "uri", None),
            transcript=transcript,
            success=result.success,
            message=result.message,
        )


class VoiceControlOrchestrator:
    """
    Glue between speech recognition, the command grammar and the player.

    Accepted transcripts from the session manager flow into process_transcript;
    every outcome is reported as a CommandResult, never raised.
    """

    def __init__(self,
                 manager: RecognitionSessionManager,
                 preferences: Optional[VoicePreferences] = None,
                 grammar: Optional[CommandGrammar] = None,
                 voice_log: Optional[IVoiceLogRepository] = None):
        self.manager = manager
        self.preferences = preferences or VoicePreferences()
        self.grammar = grammar or default_grammar
        self.surface = None

        # UI feedback state
        self.last_command: Optional[CommandId] = None
        self.last_result: Optional[CommandResult] = None
        self.last_error: Optional[str] = None
        self.user_hint: Optional[str] = None

        self._result_listeners: List[Callable] = []

        manager.on_transcript(self._on_transcript)
        manager.on_hint(self._on_hint)
        manager.on_error(self._on_error)

        if voice_log is not None:
            self.on_result(VoiceLogRecorder(voice_log))

    def on_result(self, callback: Callable) -> None:
        """callback(result: CommandResult, transcript: str, surface)"""
        self._result_listeners.append(callback)

    @property
    def last_confidence(self) -> float:
        return self.manager.last_confidence

    @property
    def is_continuous(self) -> bool:
        return self.manager.mode == RecognitionMode.CONTINUOUS

    # --- Control flow ---

    async def execute_control_flow(self, surface, continuous: bool = False) -> CommandResult:
        """
        Ensures authorization, then starts listening for commands on behalf of `surface`.
        Failures come back as CommandResult(success=False); nothing is raised.
        """
        self.surface = surface
        self.user_hint = None

        try:
            self.manager.set_confidence_threshold(self.preferences.confidence_threshold())
            self.manager.set_language(self.preferences.language())

            if self.manager.authorization != AuthorizationState.AUTHORIZED:
                await self.manager.request_authorization()

            if continuous:
                await self.manager.start_continuous()
            else:
                await self.manager.start_single_shot()
        except VidVoiceError as e:
            logger.warning(f"Voice control could not start: {e.message}")
            self.last_error = e.message
            return CommandResult(success=False, message=e.message)
        except Exception as e:
            logger.exception("Voice control failed to start")
            self.manager.stop()
            self.last_error = str(e) or type(e).__name__
            return CommandResult(success=False, message=self.last_error)

        self.last_error = None
        mode = "continuous" if continuous else "single-shot"
        logger.info(f"Voice control listening ({mode})")
        return CommandResult(success=True, message=f"listening ({mode})")

    async def toggle_continuous(self, surface=None) -> CommandResult:
        """Switches persistent listening on or off."""
        if self.is_continuous and self.manager.is_active:
            self.manager.stop()
            return CommandResult(success=True, message="continuous listening stopped")
        return await self.execute_control_flow(surface or self.surface, continuous=True)

    def stop(self) -> None:
        self.manager.stop()
        self.surface = None

    async def close(self) -> None:
        self.surface = None
        await self.manager.close()

    # --- Command processing ---

    async def process_transcript(self, text: Optional[str], surface=None) -> CommandResult:
        surface = surface if surface is not None else self.surface
        transcript = (text or "").strip()
        result = await self._process(transcript, surface)

        self.last_result = result
        if result.success:
            self.last_command = CommandId.parse(result.command_id)
            self.last_error = None
        else:
            self.last_error = result.message

        for callback in list(self._result_listeners):
            try:
                callback(result, transcript, surface)
            except Exception:
                logger.exception(f"Result listener failed for '{transcript}'")
        return result

    async def _process(self, transcript: str, surface) -> CommandResult:
        if not transcript:
            return CommandResult(success=False, message=NO_COMMAND_MESSAGE)

        match = self.grammar.parse(transcript, self._custom_overlay())
        if match is None:
            error = CommandNotRecognizedError(transcript)
            logger.info(error.message)
            return CommandResult(success=False, message=error.message)

        command_id = match.command_id.value
        if surface is None or not getattr(surface, "uri", None):
            return CommandResult(success=False, message=NO_VIDEO_MESSAGE, command_id=command_id)
        if not getattr(surface, "player", None):
            return CommandResult(success=False, message=NO_PLAYER_MESSAGE, command_id=command_id)

        try:
            await dispatch(match.command_id, surface)
        except PreconditionError as e:
            return CommandResult(success=False, message=e.message, command_id=command_id)
        except Exception as e:
            logger.exception(f"Control surface failed on '{command_id}'")
            return CommandResult(success=False, message=str(e) or type(e).__name__, command_id=command_id)

        logger.info(f"Executed '{command_id}' ({match.origin.value}) from '{transcript}'")
        return CommandResult(success=True, message=f"executed: {command_id}", command_id=command_id)

    def _custom_overlay(self) -> Dict[str, str]:
        # Built-in phrases still work when the preference store is down
        try:
            return self.preferences.custom_commands()
        except Exception:
            logger.exception("Could not read custom commands, using built-in phrases only")
            return {}

    # --- Session manager listeners ---

    async def _on_transcript(self, event: TranscriptEvent) -> None:
        self.user_hint = None
        await self.process_transcript(event.text, self.surface)

    def _on_hint(self, error: VidVoiceError) -> None:
        self.user_hint = error.message

    def _on_error(self, error: VidVoiceError) -> None:
        self.last_error = error.message
        self.user_hint = None
