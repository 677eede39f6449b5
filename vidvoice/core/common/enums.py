# File: vidvoice/core/common/enums.py

from enum import Enum, unique

@unique
class SupportTier(str, Enum):
    SUPPORTED = "supported"
    EXTENDED = "extended"
    UNSUPPORTED = "unsupported"

@unique
class AuthorizationState(str, Enum):
    NOT_DETERMINED = "notDetermined"
    DENIED = "denied"
    RESTRICTED = "restricted"
    AUTHORIZED = "authorized"

@unique
class RecognitionMode(str, Enum):
    SINGLE_SHOT = "single_shot"
    CONTINUOUS = "continuous"

@unique
class SessionStatus(str, Enum):
    IDLE = "idle"
    AUTHORIZING = "authorizing"
    LISTENING = "listening"
    PROCESSING = "processing"
    ERROR = "error"

@unique
class CommandOrigin(str, Enum):
    CUSTOM = "custom"
    BUILTIN = "builtin"

@unique
class CommandId(str, Enum):
    PLAY = "play"
    PAUSE = "pause"
    STOP = "stop"
    FORWARD_10 = "forward10"
    FORWARD_20 = "forward20"
    FORWARD_30 = "forward30"
    BACKWARD_10 = "backward10"
    BACKWARD_20 = "backward20"
    BACKWARD_30 = "backward30"
    VOLUME_UP = "volumeUp"
    VOLUME_DOWN = "volumeDown"
    VOLUME_MAX = "volumeMax"
    MUTE = "mute"
    UNMUTE = "unmute"
    SPEED_05 = "speed05"
    SPEED_1 = "speed1"
    SPEED_125 = "speed125"
    SPEED_15 = "speed15"
    SPEED_2 = "speed2"
    FULLSCREEN = "fullscreen"
    EXIT_FULLSCREEN = "exitFullscreen"
    BOOKMARK = "bookmark"
    FAVORITE = "favorite"

    @classmethod
    def parse(cls, value) -> "CommandId":
        """Accepts either a CommandId or its wire value ('volumeUp')."""
        if isinstance(value, cls):
            return value
        return cls(str(value))

@unique
class RecognitionErrorCode(str, Enum):
    """Engine error codes, named after the W3C SpeechRecognition codes."""
    NO_SPEECH = "no-speech"
    ABORTED = "aborted"
    NETWORK = "network"
    AUDIO_CAPTURE = "audio-capture"
    NOT_ALLOWED = "not-allowed"
    SERVICE_NOT_ALLOWED = "service-not-allowed"
    LANGUAGE_NOT_SUPPORTED = "language-not-supported"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code) -> "RecognitionErrorCode":
        try:
            return cls(str(code))
        except ValueError:
            return cls.UNKNOWN
