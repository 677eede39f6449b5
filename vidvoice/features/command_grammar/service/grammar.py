# File: vidvoice/features/command_grammar/service/grammar.py
import logging
from typing import Dict, List, Mapping, Optional

from vidvoice.core.common.enums import CommandId, CommandOrigin
from ..data.phrase_table import BUILTIN_PHRASES, SUPPORTED_LANGUAGES
from ..domain.models import CommandMatch

logger = logging.getLogger(__name__)


class CommandGrammar:
    """
    Maps free-text transcripts to a command id.

    Matching is substring containment, not sentence parsing, so natural phrasing
    ("please play the video") still resolves. The grammar is language-agnostic
    at match time: every language's phrases are consulted, so users may mix them.
    """

    def __init__(self, phrase_table: Optional[Dict[CommandId, Dict[str, List[str]]]] = None):
        table = phrase_table if phrase_table is not None else BUILTIN_PHRASES
        # Flatten once, keeping table order
        self._flat = [
            (command_id, [p.lower() for phrases in by_lang.values() for p in phrases])
            for command_id, by_lang in table.items()
        ]
        self._table = table

    def match(self, transcript: Optional[str], overlay: Optional[Mapping] = None) -> Optional[CommandId]:
        result = self.parse(transcript, overlay)
        return result.command_id if result else None

    def parse(self, transcript: Optional[str], overlay: Optional[Mapping] = None) -> Optional[CommandMatch]:
        """
        Resolves a transcript. The custom overlay is always checked before
        the built-in table. Returns None for "unrecognized".
        """
        if not transcript:
            return None
        text = transcript.strip().lower()
        if not text:
            return None

        # 1. Custom overlay (first entry in iteration order wins)
        for key, trigger in (overlay or {}).items():
            if not isinstance(trigger, str) or not trigger.strip():
                continue
            try:
                command_id = CommandId.parse(key)
            except ValueError:
                logger.warning(f"Ignoring custom trigger for unknown command '{key}'")
                continue
            if trigger.strip().lower() in text:
                return CommandMatch(command_id, CommandOrigin.CUSTOM, transcript)

        # 2. Built-in table (first command in table order wins)
        for command_id, phrases in self._flat:
            if any(phrase in text for phrase in phrases):
                return CommandMatch(command_id, CommandOrigin.BUILTIN, transcript)

        logger.debug(f"No command matched transcript '{transcript}'")
        return None

    def phrases_for(self, command_id, language: str) -> List[str]:
        by_lang = self._table.get(CommandId.parse(command_id), {})
        return list(by_lang.get(language, []))

    def languages(self) -> List[str]:
        return list(SUPPORTED_LANGUAGES)

    def commands(self) -> List[CommandId]:
        return list(self._table.keys())
