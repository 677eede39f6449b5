from typing import Mapping, Optional
from vidvoice.core.common.enums import CommandId
from .grammar import CommandGrammar

# Singleton Instance for easy import
grammar = CommandGrammar()


def match(transcript: Optional[str], overlay: Optional[Mapping] = None) -> Optional[CommandId]:
    return grammar.match(transcript, overlay)
