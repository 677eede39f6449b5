from ..domain.models import PlayableReference, SourceDescriptor
from .classifier import SourceClassifier

# Singleton Instance for easy import
classifier = SourceClassifier()


def classify(url) -> SourceDescriptor:
    """Classifies a URL. Never raises; branch on `support_tier`."""
    return classifier.classify(url)


def to_playable_reference(url) -> str:
    """
    Returns the URL the player should load.
    Raises UnsupportedSourceError for unsupported sources.
    """
    return classifier.to_playable_reference(url)


def resolve_playable(url) -> PlayableReference:
    return classifier.resolve_playable(url)
