# File: vidvoice/features/source_classifier/domain/models.py
import re
from dataclasses import dataclass
from typing import Optional
from vidvoice.core.common.enums import SupportTier

@dataclass(frozen=True)
class PlatformRule:
    """
    One row of the classification table: a pattern and the platform it identifies.
    Patterns are searched (not anchored) against the raw URL.
    """
    pattern: re.Pattern
    platform: str

    @classmethod
    def of(cls, regex: str, platform: str, flags: int = 0) -> "PlatformRule":
        return cls(re.compile(regex, flags), platform)

    def matches(self, url: str) -> bool:
        return self.pattern.search(url) is not None

@dataclass(frozen=True)
class SourceDescriptor:
    """
    What the classifier knows about a URL.
    Computed fresh per call; carries no identity.
    """
    platform: str
    support_tier: SupportTier
    description: str
    extracted_id: Optional[str] = None

    @property
    def is_supported(self) -> bool:
        return self.support_tier != SupportTier.UNSUPPORTED

@dataclass(frozen=True)
class PlayableReference:
    """
    A URL the player can load.
    needs_embed=True means the URL must go to an embedded third-party player
    (YouTube/Vimeo) and must never be handed to the direct media engine.
    """
    url: str
    platform: str
    needs_embed: bool = False
