import inspect
from typing import Any, Callable, Dict

from vidvoice.core.common.enums import CommandId

VOLUME_STEP = 0.1

SEEK_SECONDS = {
    CommandId.FORWARD_10: 10,
    CommandId.FORWARD_20: 20,
    CommandId.FORWARD_30: 30,
    CommandId.BACKWARD_10: -10,
    CommandId.BACKWARD_20: -20,
    CommandId.BACKWARD_30: -30,
}

PLAYBACK_RATES = {
    CommandId.SPEED_05: 0.5,
    CommandId.SPEED_1: 1.0,
    CommandId.SPEED_125: 1.25,
    CommandId.SPEED_15: 1.5,
    CommandId.SPEED_2: 2.0,
}


def _volume(surface) -> float:
    value = getattr(surface, "volume", None)
    return float(value) if value is not None else 1.0


def _seek(delta):
    return lambda s: s.seek(delta)


def _speed(rate):
    return lambda s: s.set_speed(rate)


# Exactly one surface operation per command
COMMAND_ACTIONS: Dict[CommandId, Callable[[Any], Any]] = {
    CommandId.PLAY: lambda s: s.play(),
    CommandId.PAUSE: lambda s: s.pause(),
    CommandId.STOP: lambda s: s.stop(),
    **{cid: _seek(delta) for cid, delta in SEEK_SECONDS.items()},
    CommandId.VOLUME_UP: lambda s: s.set_volume(min(1.0, round(_volume(s) + VOLUME_STEP, 2))),
    CommandId.VOLUME_DOWN: lambda s: s.set_volume(max(0.0, round(_volume(s) - VOLUME_STEP, 2))),
    CommandId.VOLUME_MAX: lambda s: s.set_volume(1.0),
    CommandId.MUTE: lambda s: s.set_volume(0.0),
    CommandId.UNMUTE: lambda s: s.set_volume(_volume(s) if _volume(s) > 0 else 1.0),
    **{cid: _speed(rate) for cid, rate in PLAYBACK_RATES.items()},
    CommandId.FULLSCREEN: lambda s: s.toggle_fullscreen(),
    CommandId.EXIT_FULLSCREEN: lambda s: s.toggle_fullscreen(),
    CommandId.BOOKMARK: lambda s: s.add_bookmark(),
    CommandId.FAVORITE: lambda s: s.toggle_favorite(),
}


async def dispatch(command_id: CommandId, surface) -> Any:
    """Invokes the surface operation for a command. Surface methods may be async."""
    result = COMMAND_ACTIONS[command_id](surface)
    if inspect.isawaitable(result):
        result = await result
    return result
