# File: vidvoice/core/common/errors.py

from typing import Optional
from .enums import RecognitionErrorCode


class VidVoiceError(Exception):
    """Base class for every error raised by vidvoice."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(VidVoiceError):
    pass


# --- Authorization / environment (terminal, user must act outside the app) ---

class PermissionDeniedError(VidVoiceError):
    pass


class EnvironmentUnsupportedError(VidVoiceError):
    pass


# --- Recognition ---

class RecognitionError(VidVoiceError):
    """
    An error reported by the speech engine.
    Carries the raw engine code so callers can branch on it.
    """

    def __init__(self, code: RecognitionErrorCode, message: str):
        super().__init__(message)
        self.code = code


class TransientRecognitionError(RecognitionError):
    """no-speech, aborted, network. Recovered internally until the retry ceiling."""
    pass


class FatalRecognitionError(RecognitionError):
    """Session is stopped and the message is shown to the user."""
    pass


class LowConfidenceError(VidVoiceError):
    """Not a failure: a hint asking the user to repeat the command."""

    def __init__(self, confidence: float, threshold: float):
        super().__init__(f"Low confidence ({confidence * 100:.0f}%), please try again or speak more clearly")
        self.confidence = confidence
        self.threshold = threshold


# --- Commands / playback ---

class CommandNotRecognizedError(VidVoiceError):
    def __init__(self, transcript: str):
        super().__init__(f"unrecognized: {transcript}")
        self.transcript = transcript


class PreconditionError(VidVoiceError):
    pass


class UnsupportedSourceError(VidVoiceError):
    def __init__(self, platform: str, description: str):
        super().__init__(f"Unsupported video source: {description}")
        self.platform = platform
        self.description = description


TRANSIENT_CODES = {
    RecognitionErrorCode.NO_SPEECH,
    RecognitionErrorCode.ABORTED,
    RecognitionErrorCode.NETWORK,
}

ENGINE_ERROR_MESSAGES = {
    RecognitionErrorCode.NO_SPEECH: "No speech detected",
    RecognitionErrorCode.ABORTED: "Recognition aborted",
    RecognitionErrorCode.NETWORK: "Network error. Please check your internet connection.",
    RecognitionErrorCode.AUDIO_CAPTURE: "Microphone access denied or not available",
    RecognitionErrorCode.NOT_ALLOWED: "Microphone permission denied. Please allow microphone access.",
    RecognitionErrorCode.SERVICE_NOT_ALLOWED: "Speech recognition service not available",
    RecognitionErrorCode.LANGUAGE_NOT_SUPPORTED: "Selected language not supported for speech recognition",
}


def classify_engine_error(code, detail: Optional[str] = None) -> RecognitionError:
    """
    Maps a raw engine error code onto the error taxonomy.
    Unknown codes are fatal and keep the raw code in the message.
    """
    parsed = RecognitionErrorCode.from_code(code)
    if parsed == RecognitionErrorCode.UNKNOWN:
        message = f"Speech recognition error: {detail or code}"
    else:
        message = ENGINE_ERROR_MESSAGES[parsed]

    if parsed in TRANSIENT_CODES:
        return TransientRecognitionError(parsed, message)
    return FatalRecognitionError(parsed, message)
