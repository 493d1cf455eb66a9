from dataclasses import dataclass, field
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

PHONETIC_PLACEHOLDER = "N/A"


@dataclass(frozen=True)
class LookupRequest:
    """A single word lookup, normalised from slash-command input."""

    word: str

    @classmethod
    def from_input(cls, raw: str) -> "LookupRequest":
        word = (raw or "").strip().lower()
        if not word:
            raise ValueError("word must not be empty")
        return cls(word=word)


class _ApiModel(BaseModel):
    # The API adds keys over time (license, audio metadata); ignore what we don't use.
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Phonetic(_ApiModel):
    text: Optional[str] = None
    audio: Optional[str] = None


class Definition(_ApiModel):
    definition: str
    example: Optional[str] = None
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)


class Meaning(_ApiModel):
    part_of_speech: str = Field(alias="partOfSpeech")
    definitions: List[Definition] = Field(default_factory=list)
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)


class DictionaryEntry(_ApiModel):
    """First element of the Free Dictionary API's response array."""

    word: str
    phonetic: Optional[str] = None
    phonetics: List[Phonetic] = Field(default_factory=list)
    meanings: List[Meaning] = Field(default_factory=list)
    source_urls: List[str] = Field(default_factory=list, alias="sourceUrls")

    @classmethod
    def from_response(cls, payload: Any) -> "DictionaryEntry":
        """Parse a decoded response body, using only its first entry.

        Raises:
            ValueError: If the body is not a non-empty array.
            pydantic.ValidationError: If the first entry is missing required fields.
        """
        if not isinstance(payload, list) or not payload:
            raise ValueError(
                f"Expected a non-empty list of entries, got {type(payload).__name__}"
            )
        return cls.model_validate(payload[0])

    def resolve_phonetic(self) -> str:
        """Entry-level phonetic, else the first phonetics text, else ``N/A``."""
        if self.phonetic:
            return self.phonetic
        for item in self.phonetics:
            if item.text:
                return item.text
        return PHONETIC_PLACEHOLDER


@dataclass
class LexicalSet:
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.synonyms and not self.antonyms
