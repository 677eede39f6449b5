from dataclasses import dataclass
from vidvoice.core.common.enums import CommandId, CommandOrigin

@dataclass(frozen=True)
class CommandMatch:
    """The result of resolving one transcript against the grammar."""
    command_id: CommandId
    origin: CommandOrigin
    original_text: str
