from abc import ABC, abstractmethod
from typing import Callable, Set
from vidvoice.core.common.enums import AuthorizationState
from .models import EngineEvent, EngineOptions

# Thread-safe sink handed to backends by the session manager
EmitFn = Callable[[EngineEvent], None]

class RecognitionBackend(ABC):
    """
    A speech engine behind the session manager.

    Backends never decide retry or restart policy. They translate their engine's
    callbacks into EngineStarted / EngineResult / EngineError / EngineEnded
    events tagged with the session id they were started with.
    """
    name: str = "backend"

    @abstractmethod
    def is_available(self) -> bool:
        """False when the environment has no usable engine (no API, no microphone)."""
        pass

    @abstractmethod
    async def request_permission(self) -> AuthorizationState:
        pass

    @abstractmethod
    def start(self, session_id: int, options: EngineOptions, emit: EmitFn) -> None:
        """Opens an engine session. Must eventually emit EngineEnded for it."""
        pass

    @abstractmethod
    def stop(self, session_id: int) -> None:
        """Graceful stop: pending audio may still produce a final result."""
        pass

    @abstractmethod
    def abort(self, session_id: int) -> None:
        """Immediate stop: pending audio is discarded."""
        pass

    @property
    @abstractmethod
    def active_sessions(self) -> Set[int]:
        pass
