"""
Optional YAML overrides for presence, display limits, colors, feature flags
and user-facing messages.

Every key has a built-in default, so the bot runs without a config file.
A file only needs the keys it changes, e.g.::

    limits:
      max_synonyms: 25
    features:
      ephemeral_responses: false
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .config import (
    Colors,
    ConfigError,
    DisplayConfig,
    Features,
    Limits,
    Presence,
    parse_color,
)
from .formatter import MAX_EMBED_FIELDS

logger = logging.getLogger(__name__)

VALID_STATUSES = ("online", "idle", "dnd", "invisible")
VALID_ACTIVITY_TYPES = ("playing", "streaming", "listening", "watching", "competing")
# One field stays free for the source link
MAX_MEANING_FIELDS = MAX_EMBED_FIELDS - 1

DEFAULT_CONFIG: dict[str, Any] = {
    "bot": {
        "status": "online",
        "activity": {"type": "watching", "name": "DICTIO | /define | /thesaurus"},
    },
    "colors": {
        "dictionary": "#4f9dde",
        "thesaurus": "#4ade80",
    },
    "limits": {
        "max_definitions": 3,
        "max_definitions_per_type": 2,
        "max_synonyms": 15,
        "max_antonyms": 15,
    },
    "features": {
        "ephemeral_responses": True,
        "show_phonetics": True,
        "show_examples": True,
        "show_source_links": True,
    },
    "messages": {
        "define_not_found": "❌ No definition found for **{word}**. Check your spelling!",
        "define_suggestions": "❌ No definition found for **{word}**.\n\n💡 Did you mean: {suggestions}?",
        "define_error": "❌ An error occurred while fetching the definition. Please try again later.",
        "thesaurus_not_found": "❌ No thesaurus data found for **{word}**. Check your spelling!",
        "thesaurus_suggestions": "❌ No thesaurus data found for **{word}**.\n\n💡 Did you mean: {suggestions}?",
        "thesaurus_empty": "❌ No synonyms or antonyms found for **{word}**.",
        "thesaurus_error": "❌ An error occurred while fetching thesaurus data. Please try again later.",
        "command_error": "❌ Something went wrong while running this command.",
    },
}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class YAMLConfig:
    """Read-only view over the merged defaults + YAML file."""

    def __init__(self, data: Optional[dict[str, Any]] = None):
        self._data = _deep_merge(DEFAULT_CONFIG, data or {})

    @classmethod
    def load(cls, path: Optional[str] = None) -> "YAMLConfig":
        """Load overrides from ``path``; a missing file means all defaults.

        Raises:
            ConfigError: If the file is not valid YAML or its root is not a mapping.
        """
        if not path:
            return cls()
        cfg_path = Path(path)
        if not cfg_path.is_file():
            logger.info("No config file at %s, using defaults", cfg_path)
            return cls()
        try:
            data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parsing error in {cfg_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config root must be a mapping, got {type(data).__name__}"
            )
        logger.info("Loaded config overrides from %s", cfg_path)
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``limits.max_synonyms``."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_message(self, key: str, **kwargs: Any) -> str:
        template = self.get(f"messages.{key}")
        if not isinstance(template, str):
            raise KeyError(f"Unknown message key: {key}")
        return template.format(**kwargs) if kwargs else template

    def display_config(self) -> DisplayConfig:
        """Validate and freeze the display-related sections.

        Raises:
            ConfigError: Listing every invalid value found.
        """
        errors: list[str] = []

        limits: dict[str, int] = {}
        for name in ("max_definitions", "max_definitions_per_type", "max_synonyms", "max_antonyms"):
            value = self.get(f"limits.{name}")
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                errors.append(f"'limits.{name}' must be a positive integer, got {value!r}")
            elif name == "max_definitions" and value > MAX_MEANING_FIELDS:
                errors.append(
                    f"'limits.max_definitions' can be at most {MAX_MEANING_FIELDS} "
                    f"(Discord allows {MAX_EMBED_FIELDS} embed fields), got {value}"
                )
            else:
                limits[name] = value

        features: dict[str, bool] = {}
        for name in ("ephemeral_responses", "show_phonetics", "show_examples", "show_source_links"):
            value = self.get(f"features.{name}")
            if not isinstance(value, bool):
                errors.append(f"'features.{name}' must be boolean, got {type(value).__name__}")
            else:
                features[name] = value

        colors: dict[str, int] = {}
        for name in ("dictionary", "thesaurus"):
            try:
                colors[name] = parse_color(self.get(f"colors.{name}"))
            except ConfigError as e:
                errors.append(f"'colors.{name}': {e}")

        status = str(self.get("bot.status", "online")).lower()
        if status not in VALID_STATUSES:
            errors.append(f"'bot.status' must be one of {', '.join(VALID_STATUSES)}, got {status!r}")
        activity_type = str(self.get("bot.activity.type", "watching")).lower()
        if activity_type not in VALID_ACTIVITY_TYPES:
            errors.append(
                f"'bot.activity.type' must be one of {', '.join(VALID_ACTIVITY_TYPES)}, "
                f"got {activity_type!r}"
            )

        if errors:
            for i, error in enumerate(errors, 1):
                logger.error("[%d] %s", i, error)
            raise ConfigError(f"Config validation failed with {len(errors)} error(s)")

        return DisplayConfig(
            limits=Limits(**limits),
            features=Features(**features),
            colors=Colors(**colors),
            presence=Presence(
                status=status,
                activity_type=activity_type,
                activity_name=str(self.get("bot.activity.name", "")),
            ),
        )
