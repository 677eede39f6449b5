import pytest

from vidvoice.core.common.enums import CommandId, CommandOrigin
from vidvoice.features.command_grammar.data.phrase_table import BUILTIN_PHRASES, SUPPORTED_LANGUAGES
from vidvoice.features.command_grammar.service.grammar import CommandGrammar
from vidvoice.features.command_grammar.service.api import match

# --- FIXTURES ---

@pytest.fixture
def grammar():
    return CommandGrammar()

# --- TESTS ---

def test_table_covers_every_command_and_language():
    assert set(BUILTIN_PHRASES.keys()) == set(CommandId)
    for command_id, by_lang in BUILTIN_PHRASES.items():
        assert set(by_lang.keys()) == set(SUPPORTED_LANGUAGES), command_id


@pytest.mark.parametrize("command_id", list(CommandId))
def test_every_command_is_reachable_in_every_language(grammar, command_id):
    """
    Table order must not shadow a command: for each language at least one of
    its phrases resolves back to that command.
    """
    for language in grammar.languages():
        phrases = grammar.phrases_for(command_id, language)
        assert phrases, f"{command_id} has no {language} phrases"
        assert any(grammar.match(p) == command_id for p in phrases), \
            f"{command_id} unreachable in {language}"


@pytest.mark.parametrize("transcript, expected", [
    ("play", CommandId.PLAY),
    ("  PLAY  ", CommandId.PLAY),
    ("please play the video", CommandId.PLAY),
    ("快轉10秒", CommandId.FORWARD_10),
    ("exit fullscreen", CommandId.EXIT_FULLSCREEN),
    ("fullscreen", CommandId.FULLSCREEN),
    ("unmute", CommandId.UNMUTE),
    ("解除靜音", CommandId.UNMUTE),
    ("mute", CommandId.MUTE),
    ("停止播放", CommandId.STOP),
    ("一時停止", CommandId.PAUSE),
    ("max volume", CommandId.VOLUME_MAX),
    ("volume up", CommandId.VOLUME_UP),
    ("rewind 30", CommandId.BACKWARD_30),
    ("1.25 speed", CommandId.SPEED_125),
    ("0.5倍速", CommandId.SPEED_05),
    ("velocidad normal", CommandId.SPEED_1),
    ("lesezeichen", CommandId.BOOKMARK),
])
def test_builtin_matching(grammar, transcript, expected):
    assert grammar.match(transcript, {}) == expected


def test_mixed_languages_resolve_without_active_language(grammar):
    assert grammar.match("再生") == CommandId.PLAY
    assert grammar.match("громче") == CommandId.VOLUME_UP
    assert grammar.match("즐겨찾기") == CommandId.FAVORITE


@pytest.mark.parametrize("transcript", [None, "", "   ", "what is the weather"])
def test_no_match_returns_none(grammar, transcript):
    assert grammar.match(transcript, {}) is None
    assert grammar.parse(transcript, {}) is None


def test_overlay_custom_trigger(grammar):
    """
    1. A user-defined trigger resolves to its command.
    2. The match is tagged as custom.
    """
    overlay = {"play": "go"}

    result = grammar.parse("go", overlay)

    assert result.command_id == CommandId.PLAY
    assert result.origin == CommandOrigin.CUSTOM
    assert result.original_text == "go"


def test_overlay_wins_over_builtin_phrase(grammar):
    """
    Transcript contains both a custom trigger and a different built-in phrase.
    """
    overlay = {CommandId.PAUSE: "hold on"}

    assert grammar.match("hold on and play", overlay) == CommandId.PAUSE
    assert grammar.match("play", overlay) == CommandId.PLAY


def test_overlay_first_entry_wins(grammar):
    overlay = {"mute": "quiet", "stop": "quiet please"}

    assert grammar.match("quiet please", overlay) == CommandId.MUTE


def test_overlay_ignores_unknown_and_blank_entries(grammar):
    overlay = {"dance": "go", "favorite": "   ", "play": "Go"}

    assert grammar.match("go now", overlay) == CommandId.PLAY
    # Blank trigger never matches everything
    assert grammar.match("hello", overlay) is None


def test_builtin_match_is_tagged(grammar):
    result = grammar.parse("Volume Down please")

    assert result.command_id == CommandId.VOLUME_DOWN
    assert result.origin == CommandOrigin.BUILTIN
    assert result.original_text == "Volume Down please"


def test_module_level_match():
    assert match("pause") == CommandId.PAUSE
    assert match("skip 20") == CommandId.FORWARD_20


def test_phrases_for_accepts_wire_value(grammar):
    assert "volume up" in grammar.phrases_for("volumeUp", "en")
    assert grammar.phrases_for(CommandId.PLAY, "xx") == []
    assert len(grammar.languages()) == 12
