# File: vidvoice/core/config/settings.py

import os
from pathlib import Path


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


class Settings:
    # --- Paths ---
    # vidvoice/core/config/settings.py -> vidvoice/core/config -> vidvoice/core -> vidvoice -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    MODELS_DIR: Path = BASE_DIR / "models"

    # --- Database ---
    # Preferences and voice logs are small; SQLite is the default store.
    SQLITE_PATH: Path = DATA_DIR / "vidvoice.db"

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("VIDVOICE_DATABASE_URL")
        if explicit:
            return explicit
        return f"sqlite:///{self.SQLITE_PATH}"

    # --- Recognition ---
    # One of: "simulated", "browser", "native"
    RECOGNITION_BACKEND: str = os.getenv("VIDVOICE_RECOGNITION_BACKEND", "simulated")
    DEFAULT_LANGUAGE: str = os.getenv("VIDVOICE_LANGUAGE", "en")
    CONFIDENCE_THRESHOLD: float = _env_float("VIDVOICE_CONFIDENCE_THRESHOLD", 0.7)

    # --- Session timing (seconds) ---
    # Empirical values carried over from the mobile client; tune freely.
    MAX_RETRIES: int = _env_int("VIDVOICE_MAX_RETRIES", 2)
    NO_SPEECH_BACKOFF: float = _env_float("VIDVOICE_NO_SPEECH_BACKOFF", 0.6)
    END_BACKOFF: float = _env_float("VIDVOICE_END_BACKOFF", 0.5)
    NETWORK_BACKOFF: float = _env_float("VIDVOICE_NETWORK_BACKOFF", 3.0)
    CONTINUOUS_RESTART_DELAY: float = _env_float("VIDVOICE_RESTART_DELAY", 1.0)
    MAX_SESSION_SECONDS: float = _env_float("VIDVOICE_MAX_SESSION_SECONDS", 55.0)

    # --- Native (Whisper) backend ---
    WHISPER_MODEL_NAME: str = os.getenv("WHISPER_MODEL_NAME", "base")
    WHISPER_DEVICE: str = "cuda" if os.getenv("USE_CUDA", "false").lower() == "true" else "cpu"
    CAPTURE_SECONDS: float = _env_float("VIDVOICE_CAPTURE_SECONDS", 4.0)
    CAPTURE_SAMPLE_RATE: int = 16000
    NO_SPEECH_PROBABILITY: float = _env_float("VIDVOICE_NO_SPEECH_PROBABILITY", 0.6)

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.MODELS_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
