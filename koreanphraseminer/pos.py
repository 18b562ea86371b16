"""
pos.py

Part-of-speech vocabulary shared by the grammar trie, the collapser and the
tokenizer backends.

Word-level tags
---------------
    N Noun:         명사 (nouns, pronouns, proper nouns, numerals, dependents)
    V Verb:         동사 (하, 먹, 자, 차)
    J Adjective:    형용사 (예쁘다, 크다, 작다)
    A Adverb:       부사 (잘, 매우, 빨리, 반드시, 과연)
    D Determiner:   관형사 (새, 헌, 참, 첫, 이, 그, 저)
    E Exclamation:  감탄사 (헐, ㅋㅋㅋ, 어머나, 얼씨구)
    C Conjunction:  접속사
    j Josa:         조사 (의, 에, 에서)
    e Eomi:         어말어미 (다, 요, 여)
    r PreEomi:      선어말어미 (었)
    p NounPrefix:   접두사 ('초'대박)
    v VerbPrefix:   동사 접두어 ('쳐'먹어)
    s Suffix:       접미사 (~적)

Chunk-level tags (Korean, Foreign, Number, Alpha, Punctuation, Hashtag, ...)
never take part in multi-token grammar; they pass through the collapser as
single-token phrases.

``Space`` and ``Others`` are functional tags: ``Space`` marks preserved
whitespace, ``Others`` is the grammar marker for the chunk-level tags.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet


class KoreanPos(Enum):
    # Word level POS
    Noun = "Noun"
    Verb = "Verb"
    Adjective = "Adjective"
    Adverb = "Adverb"
    Determiner = "Determiner"
    Exclamation = "Exclamation"
    Josa = "Josa"
    Eomi = "Eomi"
    PreEomi = "PreEomi"
    Conjunction = "Conjunction"
    NounPrefix = "NounPrefix"
    VerbPrefix = "VerbPrefix"
    Suffix = "Suffix"
    Unknown = "Unknown"

    # Chunk level POS
    Korean = "Korean"
    Foreign = "Foreign"
    Number = "Number"
    KoreanParticle = "KoreanParticle"
    Alpha = "Alpha"
    Punctuation = "Punctuation"
    Hashtag = "Hashtag"
    ScreenName = "ScreenName"
    Email = "Email"
    URL = "URL"
    CashTag = "CashTag"

    # Functional POS
    Space = "Space"
    Others = "Others"

    def __str__(self) -> str:
        return self.value


OTHER_POSES: FrozenSet[KoreanPos] = frozenset(
    {
        KoreanPos.Korean,
        KoreanPos.Foreign,
        KoreanPos.Number,
        KoreanPos.KoreanParticle,
        KoreanPos.Alpha,
        KoreanPos.Punctuation,
        KoreanPos.Hashtag,
        KoreanPos.ScreenName,
        KoreanPos.Email,
        KoreanPos.URL,
        KoreanPos.CashTag,
    }
)

# One-letter symbols used in grammar pattern strings.
SHORTCUTS: Dict[str, KoreanPos] = {
    "N": KoreanPos.Noun,
    "V": KoreanPos.Verb,
    "J": KoreanPos.Adjective,
    "A": KoreanPos.Adverb,
    "D": KoreanPos.Determiner,
    "E": KoreanPos.Exclamation,
    "C": KoreanPos.Conjunction,
    "j": KoreanPos.Josa,
    "e": KoreanPos.Eomi,
    "r": KoreanPos.PreEomi,
    "p": KoreanPos.NounPrefix,
    "v": KoreanPos.VerbPrefix,
    "s": KoreanPos.Suffix,
    "a": KoreanPos.Alpha,
    "n": KoreanPos.Number,
    "o": KoreanPos.Others,
}


@dataclass(frozen=True)
class KoreanToken:
    """
    A single tagged token as produced by the upstream tokenizer.

    ``offset`` is the character position in the source text. It is metadata
    only and does not take part in equality.
    """

    text: str
    pos: KoreanPos
    offset: int = field(default=0, compare=False)

    @property
    def length(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return f"{self.text}{self.pos}"
