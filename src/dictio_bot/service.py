import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

import discord

from .config import DisplayConfig
from .dictionary_client import DictionaryClient
from .formatter import build_definition_embed, build_thesaurus_embed
from .models import DictionaryEntry, LexicalSet
from .suggestions import SpellChecker
from .yaml_config import YAMLConfig

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS_SHOWN = 3


@dataclass
class Reply:
    """One message to send back: plain text or a single embed."""

    content: Optional[str] = None
    embed: Optional[discord.Embed] = None
    status: str = "ok"
    error: Optional[str] = None


def unique(items: Iterable[str]) -> List[str]:
    """Drop repeats, keeping the first occurrence of each item in place."""
    return list(dict.fromkeys(items))


def collect_lexical_set(entry: DictionaryEntry) -> LexicalSet:
    """Gather synonyms/antonyms from every definition and meaning of an entry."""
    synonyms: List[str] = []
    antonyms: List[str] = []
    for meaning in entry.meanings:
        for definition in meaning.definitions:
            synonyms.extend(definition.synonyms)
            antonyms.extend(definition.antonyms)
        synonyms.extend(meaning.synonyms)
        antonyms.extend(meaning.antonyms)
    return LexicalSet(synonyms=unique(synonyms), antonyms=unique(antonyms))


def format_suggestions(suggestions: Iterable[str]) -> str:
    return ", ".join(f"`{s}`" for s in list(suggestions)[:MAX_SUGGESTIONS_SHOWN])


class LookupService:
    def __init__(
        self,
        *,
        client: DictionaryClient,
        spell_checker: SpellChecker,
        config: DisplayConfig,
        yaml_config: Optional[YAMLConfig] = None,
    ):
        self.client = client
        self.spell_checker = spell_checker
        self.config = config
        self.yaml_config = yaml_config or YAMLConfig()

    async def _not_found(self, word: str, kind: str) -> Reply:
        suggestions = await self.spell_checker.get_suggestions(word)
        if suggestions:
            content = self.yaml_config.get_message(
                f"{kind}_suggestions", word=word, suggestions=format_suggestions(suggestions)
            )
        else:
            content = self.yaml_config.get_message(f"{kind}_not_found", word=word)
        return Reply(content=content, status="not_found")

    async def define(self, word: str) -> Reply:
        """Look up ``word`` and build the definition reply.

        Never raises: any failure becomes the generic error reply.
        """
        try:
            entry = await self.client.fetch_entry(word)
            if entry is None:
                return await self._not_found(word, "define")
            return Reply(embed=build_definition_embed(entry, self.config))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error fetching definition for %r", word)
            return Reply(
                content=self.yaml_config.get_message("define_error"),
                status="error",
                error=str(exc),
            )

    async def thesaurus(self, word: str) -> Reply:
        """Look up ``word`` and build the synonyms/antonyms reply.

        Never raises: any failure becomes the generic error reply.
        """
        try:
            entry = await self.client.fetch_entry(word)
            if entry is None:
                return await self._not_found(word, "thesaurus")

            lexical_set = collect_lexical_set(entry)
            if lexical_set.is_empty:
                return Reply(
                    content=self.yaml_config.get_message("thesaurus_empty", word=word),
                    status="empty",
                )
            return Reply(embed=build_thesaurus_embed(word, lexical_set, self.config))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Error fetching thesaurus data for %r", word)
            return Reply(
                content=self.yaml_config.get_message("thesaurus_error"),
                status="error",
                error=str(exc),
            )
