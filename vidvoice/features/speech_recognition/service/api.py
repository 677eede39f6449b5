import logging
from typing import Optional

from vidvoice.core.config.settings import settings
from vidvoice.core.common.errors import ConfigurationError
from ..domain.interfaces import RecognitionBackend
from ..domain.models import SessionConfig
from .session_manager import RecognitionSessionManager

logger = logging.getLogger(__name__)

BACKEND_NAMES = ("simulated", "browser", "native")


def create_backend(name: Optional[str] = None, **kwargs) -> RecognitionBackend:
    """
    Builds the configured speech backend.
    Heavy backends are imported lazily so the simulated one needs no model stack.
    """
    name = (name or settings.RECOGNITION_BACKEND).strip().lower()
    logger.debug(f"Creating '{name}' recognition backend")

    if name == "simulated":
        from ..data.simulated_backend import SimulatedBackend
        return SimulatedBackend(**kwargs)
    if name == "browser":
        from ..data.browser_backend import BrowserSpeechBackend
        return BrowserSpeechBackend(**kwargs)
    if name == "native":
        from ..data.whisper_backend import NativeWhisperBackend
        return NativeWhisperBackend(**kwargs)

    raise ConfigurationError(f"Unknown recognition backend '{name}'. Expected one of {', '.join(BACKEND_NAMES)}")


def create_session_manager(backend: Optional[RecognitionBackend] = None,
                           language: Optional[str] = None) -> RecognitionSessionManager:
    return RecognitionSessionManager(backend or create_backend(), SessionConfig(), language)
