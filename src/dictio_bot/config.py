import os
import logging
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

# Settings defaults are read at import time, so .env must be applied first.
load_dotenv()


DEFAULT_DICTIONARY_URL = "https://api.dictionaryapi.dev/api/v2/entries/en/"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ConfigError(Exception):
    """Raised when the display/presence configuration is invalid."""


@dataclass
class Settings:
    """Runtime configuration pulled from environment variables."""

    discord_token: Optional[str] = os.getenv("DISCORD_TOKEN")
    dictionary_api_url: str = os.getenv("DICTIONARY_API_URL", DEFAULT_DICTIONARY_URL)
    api_timeout_ms: int = int(os.getenv("DICTIONARY_API_TIMEOUT_MS", "5000"))
    config_path: str = os.getenv("DICTIO_CONFIG", "config.yaml")
    wordlist_path: Optional[str] = os.getenv("DICTIO_WORDLIST")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE")
    log_max_bytes: int = int(os.getenv("LOG_MAX_BYTES", "1048576"))
    log_backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "5"))

    @property
    def has_discord(self) -> bool:
        return bool(self.discord_token)

    @property
    def api_timeout(self) -> float:
        """Fetch timeout in seconds, as httpx expects it."""
        return self.api_timeout_ms / 1000.0

    def validate(self, *, require_discord: bool = False) -> None:
        """Validate required environment variables before start-up.

        Args:
            require_discord: Whether DISCORD_TOKEN must be present.
        Raises:
            RuntimeError: If any required variable is missing.
        """
        missing = []
        if require_discord and not self.discord_token:
            missing.append("DISCORD_TOKEN")
        if missing:
            raise RuntimeError(
                "Missing required environment variables: " + ", ".join(missing)
            )


@dataclass(frozen=True)
class Limits:
    max_definitions: int = 3
    max_definitions_per_type: int = 2
    max_synonyms: int = 15
    max_antonyms: int = 15


@dataclass(frozen=True)
class Features:
    ephemeral_responses: bool = True
    show_phonetics: bool = True
    show_examples: bool = True
    show_source_links: bool = True


@dataclass(frozen=True)
class Colors:
    """Embed colors per response kind, as integers (0xRRGGBB)."""

    dictionary: int = 0x4F9DDE
    thesaurus: int = 0x4ADE80


@dataclass(frozen=True)
class Presence:
    status: str = "online"
    activity_type: str = "watching"
    activity_name: str = "DICTIO | /define | /thesaurus"


@dataclass(frozen=True)
class DisplayConfig:
    """Everything the embed builders and handlers read, fixed at start-up."""

    limits: Limits = field(default_factory=Limits)
    features: Features = field(default_factory=Features)
    colors: Colors = field(default_factory=Colors)
    presence: Presence = field(default_factory=Presence)


def parse_color(value) -> int:
    """Accept ``#rrggbb``, ``0xrrggbb`` or a plain integer."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid color value: {value!r}")
    if isinstance(value, int):
        color = value
    else:
        text = str(value).strip().lower()
        if text.startswith("#"):
            text = text[1:]
        elif text.startswith("0x"):
            text = text[2:]
        try:
            color = int(text, 16)
        except ValueError:
            raise ConfigError(f"Invalid color value: {value!r}") from None
    if not 0 <= color <= 0xFFFFFF:
        raise ConfigError(f"Color out of range: {value!r}")
    return color


def setup_logging(settings: Settings, *, level: Optional[int] = None) -> None:
    """Configure console + rotating file logging once per process."""
    if level is None:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handlers = [logging.StreamHandler()]
    if settings.log_file:
        from logging.handlers import RotatingFileHandler

        file_handler = RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=handlers,
    )
    # discord.py is chatty at INFO about gateway internals
    logging.getLogger("discord.gateway").setLevel(max(level, logging.WARNING))
