"""
Embed builders for /define and /thesaurus.

These are pure: everything they read is passed in, so they can be exercised
without a running client.
"""

from datetime import datetime
from typing import Optional, Sequence

import discord

from .config import DisplayConfig
from .models import DictionaryEntry, LexicalSet

FOOTER_TEXT = "DICTIO"
NO_DEFINITION = "No definition available"

# Discord embed limits
MAX_TITLE_LENGTH = 256
MAX_FIELD_NAME_LENGTH = 256
MAX_FIELD_VALUE_LENGTH = 1024
MAX_EMBED_FIELDS = 25
MAX_EMBED_LENGTH = 6000


def capitalize(word: str) -> str:
    """Upper-case the first character only (``str.capitalize`` lowers the rest)."""
    return word[:1].upper() + word[1:]


def clip(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1].rstrip() + "…"


def format_word_list(words: Sequence[str], cap: int) -> str:
    """Join up to ``cap`` words and say how many were left out."""
    text = ", ".join(words[:cap])
    if len(words) > cap:
        text += f", and {len(words) - cap} more..."
    return text


def _new_embed(title: str, color: int, timestamp: Optional[datetime], description: Optional[str] = None) -> discord.Embed:
    embed = discord.Embed(
        title=clip(title, MAX_TITLE_LENGTH),
        description=description,
        color=color,
        timestamp=timestamp or discord.utils.utcnow(),
    )
    embed.set_footer(text=FOOTER_TEXT)
    return embed


def _fits(embed: discord.Embed, name: str, value: str, *, reserved_length: int = 0, reserved_fields: int = 0) -> bool:
    """Whether one more field keeps the embed inside Discord's size limits."""
    if len(embed.fields) + 1 + reserved_fields > MAX_EMBED_FIELDS:
        return False
    return len(embed) + len(name) + len(value) + reserved_length <= MAX_EMBED_LENGTH


def build_definition_embed(
    entry: DictionaryEntry,
    config: DisplayConfig,
    *,
    timestamp: Optional[datetime] = None,
) -> discord.Embed:
    limits, features = config.limits, config.features

    description = None
    if features.show_phonetics:
        description = f"**Phonetic:** {entry.resolve_phonetic()}"

    embed = _new_embed(
        f"📖 {capitalize(entry.word)}",
        config.colors.dictionary,
        timestamp,
        description,
    )

    source = None
    if features.show_source_links and entry.source_urls:
        source = ("🔗 Source", clip(entry.source_urls[0], MAX_FIELD_VALUE_LENGTH))
    reserved_length = len(source[0]) + len(source[1]) if source else 0
    reserved_fields = 1 if source else 0

    # One field per part of speech, until the embed is full
    for meaning in entry.meanings[: limits.max_definitions]:
        lines = []
        for n, definition in enumerate(meaning.definitions[: limits.max_definitions_per_type], 1):
            lines.append(f"{n}. {definition.definition}")
            if features.show_examples and definition.example:
                lines.append(f'   *Example: "{definition.example}"*')
        name = clip(capitalize(meaning.part_of_speech), MAX_FIELD_NAME_LENGTH)
        value = clip("\n".join(lines), MAX_FIELD_VALUE_LENGTH) or NO_DEFINITION
        if not _fits(embed, name, value, reserved_length=reserved_length, reserved_fields=reserved_fields):
            break
        embed.add_field(name=name, value=value, inline=False)

    if source:
        embed.add_field(name=source[0], value=source[1], inline=False)

    return embed


def build_thesaurus_embed(
    word: str,
    lexical_set: LexicalSet,
    config: DisplayConfig,
    *,
    timestamp: Optional[datetime] = None,
) -> discord.Embed:
    limits = config.limits
    embed = _new_embed(f"📚 Thesaurus: {capitalize(word)}", config.colors.thesaurus, timestamp)

    if lexical_set.synonyms:
        embed.add_field(
            name="✅ Synonyms",
            value=clip(format_word_list(lexical_set.synonyms, limits.max_synonyms), MAX_FIELD_VALUE_LENGTH),
            inline=False,
        )
    if lexical_set.antonyms:
        embed.add_field(
            name="❌ Antonyms",
            value=clip(format_word_list(lexical_set.antonyms, limits.max_antonyms), MAX_FIELD_VALUE_LENGTH),
            inline=False,
        )

    return embed
