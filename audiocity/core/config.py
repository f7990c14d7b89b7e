"""
Runtime settings for AudioCity: where the store root lives, which password
scheme new credentials get, logging, and the media download pool.

Everything comes from AUDIOCITY_* variables (plus APP_ENV, PORT and
NGROK_URL) and is resolved once per process by get_settings().
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
import os

PASSWORD_SCHEMES = ("argon2id", "pbkdf2")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration; tests build one directly instead of patching the environment."""

    app_env: str
    data_dir: Path
    password_scheme: str
    log_level: str
    log_file: Path | None
    download_workers: int
    port: int
    ngrok_url: str


@lru_cache
def get_settings() -> Settings:
    """Build Settings from the environment; call cache_clear() after changing it."""
    def _env_int(name: str, default: int) -> int:
        raw = (os.getenv(name) or "").strip()
        return int(raw) if raw.isdigit() else default

    scheme = (os.getenv("AUDIOCITY_PASSWORD_SCHEME") or "argon2id").strip().lower()
    if scheme not in PASSWORD_SCHEMES:
        scheme = "argon2id"
    log_file = (os.getenv("AUDIOCITY_LOG_FILE") or "").strip()

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=Path(os.getenv("AUDIOCITY_DATA_DIR") or "./database"),
        password_scheme=scheme,
        log_level=(os.getenv("AUDIOCITY_LOG_LEVEL") or "INFO").upper(),
        log_file=Path(log_file) if log_file else None,
        download_workers=max(1, _env_int("AUDIOCITY_DOWNLOAD_WORKERS", 2)),
        port=_env_int("PORT", 3000),
        ngrok_url=(os.getenv("NGROK_URL") or "").strip(),
    )
