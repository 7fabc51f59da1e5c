"""Runtime settings, read from the environment or a ``.env`` file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from decouple import config

# Resolve the default data directory relative to the project root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    supabase_url: str
    supabase_anon_key: str
    relay_url: str
    session_file: Path
    brevo_api_key: str
    brevo_sender_email: str
    brevo_admin_email: str
    relay_port: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        supabase_url=config("SUPABASE_URL", default="https://example.supabase.co"),
        supabase_anon_key=config("SUPABASE_ANON_KEY", default=""),
        relay_url=config("RELAY_URL", default="http://localhost:3001"),
        session_file=Path(config("SESSION_FILE", default=str(_DATA_DIR / "session.json"))),
        brevo_api_key=config("BREVO_API_KEY", default=""),
        brevo_sender_email=config("BREVO_SENDER_EMAIL", default="commandes@meublesdor.tn"),
        brevo_admin_email=config("BREVO_ADMIN_EMAIL", default="admin@meublesdor.tn"),
        relay_port=config("RELAY_PORT", default=3001, cast=int),
        log_level=config("LOG_LEVEL", default="WARNING"),
    )
