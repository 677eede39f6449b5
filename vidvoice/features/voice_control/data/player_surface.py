# File: vidvoice/features/voice_control/data/player_surface.py
import logging
from typing import List, Optional

from vidvoice.core.common.errors import PreconditionError
from vidvoice.features.source_classifier.domain.models import PlayableReference
from vidvoice.features.source_classifier.service.classifier import SourceClassifier
from ..domain.interfaces import VideoControlSurface

logger = logging.getLogger(__name__)


class SimplePlayerSurface(VideoControlSurface):
    """
    In-process player state. Useful as a reference surface and for headless runs.
    Loading goes through the source classifier, so unsupported sources never load.
    """

    def __init__(self, classifier: Optional[SourceClassifier] = None):
        self.classifier = classifier or SourceClassifier()
        self.uri: Optional[str] = None
        self.player: Optional[str] = None
        self.platform: Optional[str] = None
        self.needs_embed = False

        self.duration = 0.0
        self.position = 0.0
        self.volume = 1.0
        self.speed = 1.0
        self.is_playing = False
        self.is_fullscreen = False
        self.is_favorite = False
        self.bookmarks: List[float] = []

    def load(self, url: str, duration: float = 0.0) -> PlayableReference:
        """
        Raises:
            UnsupportedSourceError: the source must not be played.
        """
        ref = self.classifier.resolve_playable(url)
        self.uri = ref.url
        self.platform = ref.platform
        self.needs_embed = ref.needs_embed
        # Embed platforms get their own player widget
        self.player = "embed" if ref.needs_embed else "media"

        self.duration = max(0.0, float(duration))
        self.position = 0.0
        self.is_playing = False
        self.bookmarks = []
        self.is_favorite = False
        logger.info(f"Loaded {ref.platform} source: {ref.url}")
        return ref

    def unload(self) -> None:
        self.stop()
        self.uri = None
        self.player = None
        self.platform = None

    # --- Playback ---

    def play(self):
        self._require_loaded()
        self.is_playing = True

    def pause(self):
        self._require_loaded()
        self.is_playing = False

    def stop(self):
        self.is_playing = False
        self.position = 0.0

    def seek(self, delta_seconds: float):
        self._require_loaded()
        target = self.position + delta_seconds
        if self.duration > 0:
            target = min(target, self.duration)
        self.position = max(0.0, target)

    def set_volume(self, volume: float):
        self.volume = max(0.0, min(1.0, float(volume)))

    def set_speed(self, rate: float):
        if rate <= 0:
            raise ValueError(f"Playback rate must be positive, got {rate}")
        self.speed = float(rate)

    def toggle_fullscreen(self):
        self.is_fullscreen = not self.is_fullscreen

    def add_bookmark(self) -> float:
        self._require_loaded()
        self.bookmarks.append(self.position)
        return self.position

    def toggle_favorite(self) -> bool:
        self._require_loaded()
        self.is_favorite = not self.is_favorite
        return self.is_favorite

    def _require_loaded(self):
        if not self.uri:
            raise PreconditionError("no video loaded")
