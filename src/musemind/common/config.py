"""Process configuration read from the environment (and an optional .env file)."""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_STATIC_DIR = PACKAGE_DIR / "static"

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


@dataclass(frozen=True)
class Settings:
    """Immutable settings shared by the app and the Gemini client."""
    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout: float = 30.0
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: Path = field(default=DEFAULT_STATIC_DIR)
    log_level: str = "INFO"

    @property
    def generate_url(self) -> str:
        return f"{self.gemini_base_url.rstrip('/')}/models/{self.gemini_model}:generateContent"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            dotenv: Load a .env file from the working directory first.
                Variables already set in the environment win.
        """
        if dotenv:
            load_dotenv()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
            gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL),
            request_timeout=float(os.getenv("GEMINI_TIMEOUT", "30")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            static_dir=Path(os.getenv("MUSEMIND_STATIC_DIR", str(DEFAULT_STATIC_DIR))),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
