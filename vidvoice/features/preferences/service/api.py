import logging
from typing import Dict, Mapping, Optional

from vidvoice.core.config.settings import settings
from vidvoice.core.common.enums import CommandId
from ..data.repository import SqlPreferenceStore
from ..domain.interfaces import IPreferenceStore
from ..domain.keys import CUSTOM_COMMANDS_KEY, CONFIDENCE_THRESHOLD_KEY, LANGUAGE_KEY

logger = logging.getLogger(__name__)


class VoicePreferences:
    """
    Facade for persisted voice settings.
    The custom command overlay and confidence threshold are read fresh on every
    call so edits from another screen take effect on the next command.
    """

    def __init__(self, store: Optional[IPreferenceStore] = None):
        self.store = store if store is not None else SqlPreferenceStore()

    # --- Custom command overlay ---

    def custom_commands(self) -> Dict[str, str]:
        raw = self.store.get(CUSTOM_COMMANDS_KEY, {})
        if not isinstance(raw, dict):
            logger.warning(f"Discarding malformed custom command overlay: {raw!r}")
            return {}
        return {str(k): v for k, v in raw.items() if isinstance(v, str) and v.strip()}

    def save_custom_command(self, command_id, trigger: str) -> Dict[str, str]:
        """
        Assigns one trigger phrase to a command, replacing any previous one.
        Raises ValueError for unknown commands or blank triggers.
        """
        key = CommandId.parse(command_id).value
        if not isinstance(trigger, str) or not trigger.strip():
            raise ValueError("Custom trigger must be a non-empty string")

        overlay = self.custom_commands()
        overlay[key] = trigger.strip()
        self.store.set(CUSTOM_COMMANDS_KEY, overlay)
        logger.info(f"Custom trigger for '{key}' set to '{trigger.strip()}'")
        return overlay

    def remove_custom_command(self, command_id) -> Dict[str, str]:
        key = CommandId.parse(command_id).value
        overlay = self.custom_commands()
        if overlay.pop(key, None) is not None:
            self.store.set(CUSTOM_COMMANDS_KEY, overlay)
        return overlay

    def reset_custom_commands(self) -> None:
        self.store.delete(CUSTOM_COMMANDS_KEY)

    def import_custom_commands(self, mapping: Mapping) -> Dict[str, str]:
        """Replaces the overlay wholesale. Every entry is validated before anything is written."""
        overlay = {}
        for command_id, trigger in mapping.items():
            key = CommandId.parse(command_id).value
            if not isinstance(trigger, str) or not trigger.strip():
                raise ValueError(f"Custom trigger for '{key}' must be a non-empty string")
            overlay[key] = trigger.strip()
        self.store.set(CUSTOM_COMMANDS_KEY, overlay)
        return overlay

    # --- Confidence threshold ---

    def confidence_threshold(self) -> float:
        value = self.store.get(CONFIDENCE_THRESHOLD_KEY)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and 0.0 <= value <= 1.0:
            return float(value)
        return settings.CONFIDENCE_THRESHOLD

    def set_confidence_threshold(self, value: float) -> float:
        clamped = max(0.0, min(1.0, float(value)))
        self.store.set(CONFIDENCE_THRESHOLD_KEY, clamped)
        return clamped

    # --- Language ---

    def language(self) -> str:
        value = self.store.get(LANGUAGE_KEY)
        return value if isinstance(value, str) and value else settings.DEFAULT_LANGUAGE

    def set_language(self, language: str) -> None:
        self.store.set(LANGUAGE_KEY, language)
