from abc import ABC, abstractmethod
from typing import Any, List, Optional
from .models import VoiceLogEntry

class VideoControlSurface(ABC):
    """
    The player the voice commands act on.

    Readable fields:
        uri:    the loaded video, or None when nothing is loaded
        player: the underlying player handle, or None when unavailable
        volume: current volume in [0, 1]

    Methods may be plain or coroutine functions.
    """
    uri: Optional[str] = None
    player: Any = None
    volume: float = 1.0

    @abstractmethod
    def play(self): pass

    @abstractmethod
    def pause(self): pass

    @abstractmethod
    def stop(self): pass

    @abstractmethod
    def seek(self, delta_seconds: float): pass

    @abstractmethod
    def set_volume(self, volume: float): pass

    @abstractmethod
    def set_speed(self, rate: float): pass

    @abstractmethod
    def toggle_fullscreen(self): pass

    @abstractmethod
    def add_bookmark(self): pass

    @abstractmethod
    def toggle_favorite(self): pass


class IVoiceLogRepository(ABC):
    @abstractmethod
    def record(self, action: str, source_url: Optional[str], transcript: str,
               success: bool, message: str) -> VoiceLogEntry:
        pass

    @abstractmethod
    def recent(self, limit: int = 50, source_url: Optional[str] = None) -> List[VoiceLogEntry]:
        pass
