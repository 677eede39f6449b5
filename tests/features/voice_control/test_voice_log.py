import pytest

from vidvoice.features.speech_recognition.data.simulated_backend import SimulatedBackend
from vidvoice.features.voice_control.data.repository import SqlVoiceLogRepository
from vidvoice.features.voice_control.data.sql_models import VoiceLogModel
from vidvoice.features.voice_control.domain.interfaces import VideoControlSurface
from vidvoice.features.voice_control.service.api import create_voice_control


class NullSurface(VideoControlSurface):
    uri = "https://example.com/video.mp4"
    player = "media"

    def play(self): pass
    def pause(self): pass
    def stop(self): pass
    def seek(self, delta_seconds): pass
    def set_volume(self, volume): self.volume = volume
    def set_speed(self, rate): pass
    def toggle_fullscreen(self): pass
    def add_bookmark(self): pass
    def toggle_favorite(self): pass


# --- TESTS ---

def test_repository_round_trip(db_session):
    repo = SqlVoiceLogRepository()

    entry = repo.record(action="play", source_url="https://example.com/a.mp4",
                        transcript="play", success=True, message="executed: play")
    repo.record(action="unrecognized", source_url="https://example.com/b.mp4",
                transcript="hello", success=False, message="unrecognized: hello")

    assert entry.id is not None
    assert entry.executed_at is not None
    assert db_session.query(VoiceLogModel).count() == 2

    only_a = repo.recent(source_url="https://example.com/a.mp4")
    assert [e.action for e in only_a] == ["play"]
    assert {e.action for e in repo.recent()} == {"play", "unrecognized"}
    assert len(repo.recent(limit=1)) == 1


@pytest.mark.asyncio
async def test_processed_commands_are_logged():
    """
    1. Wire the default stack with a scripted backend.
    2. Process a recognized and an unrecognized transcript.
    3. Both outcomes land in the voice_logs table.
    """
    # 1. Arrange
    orchestrator = create_voice_control(backend=SimulatedBackend())
    surface = NullSurface()

    # 2. Act
    await orchestrator.process_transcript("mute", surface)
    await orchestrator.process_transcript("sing a song", surface)

    # 3. Assert
    entries = SqlVoiceLogRepository().recent()
    assert {(e.action, e.success) for e in entries} == {("mute", True), ("unrecognized", False)}
    assert {e.transcript for e in entries} == {"mute", "sing a song"}
    assert all(e.source_url == "https://example.com/video.mp4" for e in entries)

    await orchestrator.close()
