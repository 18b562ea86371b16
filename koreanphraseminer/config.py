"""
config.py

Thresholds and lexical sets used by the chunk builder and the phrase
extractor. A single immutable :class:`PhraseExtractorConfig` is passed
explicitly through the pipeline; ``DEFAULT_CONFIG`` holds the stock values.
"""

from __future__ import annotations

from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .pos import KoreanPos


class PhraseExtractorConfig(BaseModel):
    """
    Tunables for candidate chunking and the final substance filter.

    Attributes
    ----------
    min_chars_per_phrase_chunk:
        Short chunks (at most ``min_phrases_per_phrase_chunk`` phrases) must
        carry at least this many characters to survive.
    min_phrases_per_phrase_chunk:
        Chunks longer than this are windowed and always pass the substance
        filter.
    modifying_predicate_endings:
        Trailing consonants that let a Verb/Adjective modify a following noun
        (하는, 할인된, 할인될).
    phrase_tokens:
        Phrase tags that are always chunk candidates.
    conjunction_josa:
        Particles that glue two noun phrases together (과, 와, 의).
    spam_nouns:
        Nouns that disqualify a phrase when spam filtering is enabled.
    """

    model_config = ConfigDict(frozen=True)

    min_chars_per_phrase_chunk: int = Field(3, ge=1)
    min_phrases_per_phrase_chunk: int = Field(2, ge=1)
    modifying_predicate_endings: FrozenSet[str] = frozenset({"ㄹ", "ㄴ"})
    phrase_tokens: FrozenSet[KoreanPos] = frozenset(
        {KoreanPos.Noun, KoreanPos.Conjunction, KoreanPos.Space}
    )
    conjunction_josa: FrozenSet[str] = frozenset({"와", "과", "의"})
    spam_nouns: FrozenSet[str] = frozenset({"섹스", "야동", "야사", "몰카", "대출", "도박"})

    @field_validator("modifying_predicate_endings")
    @classmethod
    def _single_jamo(cls, value: FrozenSet[str]) -> FrozenSet[str]:
        for ending in value:
            if len(ending) != 1:
                raise ValueError(
                    f"modifying_predicate_endings must be single jamo, got {ending!r}"
                )
        return value


DEFAULT_CONFIG = PhraseExtractorConfig()
