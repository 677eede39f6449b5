from typing import Optional

from vidvoice.features.preferences.service.api import VoicePreferences
from vidvoice.features.speech_recognition.domain.interfaces import RecognitionBackend
from vidvoice.features.speech_recognition.service.api import create_session_manager
from ..data.repository import SqlVoiceLogRepository
from .orchestrator import VoiceControlOrchestrator


def create_voice_control(backend: Optional[RecognitionBackend] = None,
                         preferences: Optional[VoicePreferences] = None) -> VoiceControlOrchestrator:
    """
    Wires the default stack: configured speech backend, SQL-backed preferences
    and the SQL voice log.
    """
    preferences = preferences or VoicePreferences()
    manager = create_session_manager(backend, preferences.language())
    return VoiceControlOrchestrator(
        manager=manager,
        preferences=preferences,
        voice_log=SqlVoiceLogRepository(),
    )
