# File: vidvoice/features/source_classifier/service/classifier.py
import logging
from pathlib import PurePosixPath
from typing import List, Optional
from urllib.parse import urlsplit

from vidvoice.core.common.enums import SupportTier
from vidvoice.core.common.errors import UnsupportedSourceError
from ..data.platform_rules import PlatformRules
from ..data.id_extractors import youtube_video_id, vimeo_video_id, google_drive_file_id
from ..domain.models import PlatformRule, PlayableReference, SourceDescriptor

logger = logging.getLogger(__name__)

UNKNOWN_PLATFORM = "Unknown"
INVALID_URL_DESCRIPTION = "Invalid URL provided"
UNKNOWN_SOURCE_DESCRIPTION = "Unknown video source or format not supported"


class SourceClassifier:
    """
    Decides whether (and how) a URL can be played.
    Pure: no network access, no state beyond the rule tables.
    """

    def __init__(self,
                 supported: Optional[List[PlatformRule]] = None,
                 extended: Optional[List[PlatformRule]] = None,
                 unsupported: Optional[List[PlatformRule]] = None):
        self.supported = supported if supported is not None else PlatformRules.SUPPORTED
        self.extended = extended if extended is not None else PlatformRules.EXTENDED
        self.unsupported = unsupported if unsupported is not None else PlatformRules.UNSUPPORTED

    def classify(self, url) -> SourceDescriptor:
        """
        Maps any input to a SourceDescriptor. Never raises.
        Tiers are evaluated supported -> extended -> unsupported; first rule wins.
        """
        if not url or not isinstance(url, str) or not url.strip():
            return SourceDescriptor(
                platform=UNKNOWN_PLATFORM,
                support_tier=SupportTier.UNSUPPORTED,
                description=INVALID_URL_DESCRIPTION,
            )

        candidate = url.strip()

        # 1. Supported tier (only this tier extracts ids)
        for rule in self.supported:
            if rule.matches(candidate):
                return SourceDescriptor(
                    platform=rule.platform,
                    support_tier=SupportTier.SUPPORTED,
                    description=f"Supported {rule.platform} video source - Ready to play",
                    extracted_id=self._extract_id(rule.platform, candidate),
                )

        # 2. Extended tier
        for rule in self.extended:
            if rule.matches(candidate):
                return SourceDescriptor(
                    platform=rule.platform,
                    support_tier=SupportTier.EXTENDED,
                    description=f"Extended {rule.platform} support - May require additional processing or have limitations",
                )

        # 3. Known unsupported (actionable message)
        for rule in self.unsupported:
            if rule.matches(candidate):
                return SourceDescriptor(
                    platform=rule.platform,
                    support_tier=SupportTier.UNSUPPORTED,
                    description=f"{rule.platform} is not supported due to DRM/copyright restrictions",
                )

        return SourceDescriptor(
            platform=UNKNOWN_PLATFORM,
            support_tier=SupportTier.UNSUPPORTED,
            description=UNKNOWN_SOURCE_DESCRIPTION,
        )

    def resolve_playable(self, url) -> PlayableReference:
        """
        Normalizes a URL into something the player can load.

        Raises:
            UnsupportedSourceError: the source must not be attempted at all.
        """
        descriptor = self.classify(url)
        if not descriptor.is_supported:
            raise UnsupportedSourceError(descriptor.platform, descriptor.description)

        candidate = url.strip()
        platform = descriptor.platform

        # Embedded players only. Direct playback of these is a known failure.
        if platform in PlatformRules.EMBED_PLATFORMS:
            return PlayableReference(url=candidate, platform=platform, needs_embed=True)

        if platform == "Google Drive":
            file_id = google_drive_file_id(candidate)
            if file_id:
                direct = f"https://drive.google.com/uc?export=download&id={file_id}"
                logger.debug(f"Converted Google Drive URL: {direct}")
                return PlayableReference(url=direct, platform=platform)

        if platform == "Dropbox":
            return PlayableReference(url=self._dropbox_direct(candidate), platform=platform)

        return PlayableReference(url=candidate, platform=platform)

    def to_playable_reference(self, url) -> str:
        return self.resolve_playable(url).url

    # --- Helpers kept for the loader and the UI ---

    def video_file_extension(self, url) -> Optional[str]:
        """Lowercased extension of the URL path, ignoring query and fragment."""
        if not url or not isinstance(url, str):
            return None
        try:
            path = urlsplit(url.strip()).path
        except ValueError:
            return None
        suffix = PurePosixPath(path).suffix
        return suffix[1:].lower() if len(suffix) > 1 else None

    def is_direct_video_file(self, url) -> bool:
        return self.video_file_extension(url) in PlatformRules.DIRECT_VIDEO_EXTENSIONS

    def is_streaming_format(self, url) -> bool:
        if self.video_file_extension(url) in PlatformRules.STREAMING_EXTENSIONS:
            return True
        return isinstance(url, str) and url.strip().lower().startswith("rtmp://")

    def requires_special_handling(self, url) -> bool:
        return self.classify(url).platform in PlatformRules.SPECIAL_HANDLING_PLATFORMS

    def is_valid_video_url(self, url) -> bool:
        """
        True when the URL is http(s), classifies as supported/extended, and can
        go straight to the media engine (embed-only platforms are excluded).
        """
        if not url or not isinstance(url, str):
            return False
        try:
            scheme = urlsplit(url.strip()).scheme
        except ValueError:
            return False
        if not scheme.startswith("http"):
            return False

        descriptor = self.classify(url)
        if descriptor.platform in PlatformRules.EMBED_PLATFORMS:
            return False
        return descriptor.is_supported

    def optimal_video_quality(self, url) -> str:
        descriptor = self.classify(url)
        if descriptor.platform != "Direct Video":
            return "Auto"

        lowered = url.lower()
        if "4k" in lowered or "2160p" in lowered:
            return "4K (2160p)"
        if "1440p" in lowered or "2k" in lowered:
            return "2K (1440p)"
        if "1080p" in lowered or "fhd" in lowered:
            return "Full HD (1080p)"
        if "720p" in lowered or "hd" in lowered:
            return "HD (720p)"
        if "480p" in lowered:
            return "SD (480p)"
        if "360p" in lowered:
            return "Low (360p)"
        return "Auto"

    def _extract_id(self, platform: str, url: str) -> Optional[str]:
        if platform == "YouTube":
            return youtube_video_id(url)
        if platform == "Vimeo":
            return vimeo_video_id(url)
        return None

    @staticmethod
    def _dropbox_direct(url: str) -> str:
        if "dl=1" in url:
            return url
        if "dl=0" in url:
            return url.replace("dl=0", "dl=1")
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}dl=1"
