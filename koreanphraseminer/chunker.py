"""
chunker.py

Phrase values and the candidate chunk builder.

Collapsed phrases are grouped into *chunks*: runs of phrases that can
together form one trend phrase (nouns, conjunctions, conjunctive particles
and noun-modifying predicates). Chunks are trimmed to start and end on a
noun, and long single nouns are offered as candidates on their own.

    초 + 거대 + 기업 + 의   ->   초거대기업 + 의
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .config import DEFAULT_CONFIG, PhraseExtractorConfig
from .hangul import decompose_hangul
from .pos import KoreanPos, KoreanToken


@dataclass(frozen=True, eq=False)
class KoreanPhrase:
    """
    Contiguous tokens collapsed into one unit with a summary tag.

    Two phrases are equal when their concatenated text and tag are equal.
    """

    tokens: Tuple[KoreanToken, ...]
    pos: KoreanPos = KoreanPos.Noun

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))

    @property
    def text(self) -> str:
        return "".join(token.text for token in self.tokens)

    @property
    def text_length(self) -> int:
        return sum(len(token.text) for token in self.tokens)

    @property
    def offset(self) -> int:
        return self.tokens[0].offset if self.tokens else 0

    @property
    def length(self) -> int:
        """Span covered in the source text, from the first to the last token."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.offset + last.length - self.offset

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KoreanPhrase):
            return NotImplemented
        return self.pos == other.pos and self.text == other.text

    def __hash__(self) -> int:
        return hash((self.text, self.pos))

    def __str__(self) -> str:
        return f"{self.text}{self.pos}"


PhraseChunk = Tuple[KoreanPhrase, ...]


# ------------------
# Trimming
# ------------------
def _lstrip_spaces(tokens: Sequence[KoreanToken]) -> Tuple[KoreanToken, ...]:
    start = 0
    while start < len(tokens) and tokens[start].pos is KoreanPos.Space:
        start += 1
    return tuple(tokens[start:])


def _rstrip_spaces(tokens: Sequence[KoreanToken]) -> Tuple[KoreanToken, ...]:
    end = len(tokens)
    while end > 0 and tokens[end - 1].pos is KoreanPos.Space:
        end -= 1
    return tuple(tokens[:end])


def trim_phrase(phrase: KoreanPhrase) -> KoreanPhrase:
    """Strip leading and trailing Space tokens."""
    return KoreanPhrase(_rstrip_spaces(_lstrip_spaces(phrase.tokens)), phrase.pos)


def trim_phrase_chunk(phrases: Sequence[KoreanPhrase]) -> PhraseChunk:
    """
    Cut a chunk down to the span from its first to its last Noun phrase and
    strip the spaces on its outer edges.

    Returns an empty chunk when no Noun phrase is present.
    """
    noun_indices = [i for i, phrase in enumerate(phrases) if phrase.pos is KoreanPos.Noun]
    if not noun_indices:
        return ()

    trimmed = tuple(phrases[noun_indices[0] : noun_indices[-1] + 1])
    if len(trimmed) == 1:
        return (trim_phrase(trimmed[0]),)

    first, last = trimmed[0], trimmed[-1]
    return (
        KoreanPhrase(_lstrip_spaces(first.tokens), first.pos),
        *trimmed[1:-1],
        KoreanPhrase(_rstrip_spaces(last.tokens), last.pos),
    )


# ------------------
# Candidacy
# ------------------
def is_modifying_predicate(
    phrase: KoreanPhrase, config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> bool:
    # 하는, 할인된, 할인될
    trimmed = trim_phrase(phrase)
    if trimmed.pos not in (KoreanPos.Verb, KoreanPos.Adjective) or not trimmed.tokens:
        return False
    last_char = trimmed.tokens[-1].text[-1]
    return decompose_hangul(last_char).coda in config.modifying_predicate_endings


def is_conjunction_josa(
    phrase: KoreanPhrase, config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> bool:
    # 과, 와, 의
    trimmed = trim_phrase(phrase)
    return (
        trimmed.pos is KoreanPos.Josa
        and bool(trimmed.tokens)
        and trimmed.tokens[-1].text in config.conjunction_josa
    )


def is_phrase_candidate(
    phrase: KoreanPhrase, config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> bool:
    return (
        phrase.pos in config.phrase_tokens
        or is_modifying_predicate(phrase, config)
        or is_conjunction_josa(phrase, config)
    )


# ------------------
# Chunk building
# ------------------
def collapse_noun_phrases(phrases: Iterable[KoreanPhrase]) -> List[KoreanPhrase]:
    """Merge every run of consecutive Noun phrases into a single Noun phrase."""
    output: List[KoreanPhrase] = []
    buffer: List[KoreanPhrase] = []
    for phrase in phrases:
        if phrase.pos is KoreanPos.Noun:
            buffer.append(phrase)
            continue
        if buffer:
            output.append(KoreanPhrase(tuple(t for p in buffer for t in p.tokens)))
            buffer = []
        output.append(phrase)

    if buffer:
        output.append(KoreanPhrase(tuple(t for p in buffer for t in p.tokens)))
    return output


def collapse_phrases(
    phrases: Iterable[KoreanPhrase], config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> List[PhraseChunk]:
    """Group consecutive candidate phrases into chunks."""
    chunks: List[PhraseChunk] = []
    buffer: List[KoreanPhrase] = []
    for phrase in phrases:
        if is_phrase_candidate(phrase, config):
            buffer.append(phrase)
        elif buffer:
            chunks.append(tuple(buffer))
            buffer = []

    if buffer:
        chunks.append(tuple(buffer))
    return chunks


def get_single_token_nouns(
    phrases: Iterable[KoreanPhrase], config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> List[PhraseChunk]:
    """Long enough Noun phrases, each offered as a one-phrase chunk."""
    singles: List[PhraseChunk] = []
    for phrase in phrases:
        if phrase.pos is not KoreanPos.Noun:
            continue
        trimmed = trim_phrase(phrase)
        if (
            trimmed.text_length >= config.min_chars_per_phrase_chunk
            or len(trimmed.tokens) >= config.min_phrases_per_phrase_chunk
        ):
            singles.append((trimmed,))
    return singles


def get_candidate_phrase_chunks(
    phrases: Sequence[KoreanPhrase], config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> List[PhraseChunk]:
    """
    Turn collapsed phrases into deduplicated candidate chunks.

    1. Merge consecutive nouns.
    2. Group candidate phrases into chunks and trim each chunk.
    3. Add long single nouns as their own chunks.

    Chunks left empty by trimming are dropped. Order is first-seen.
    """
    noun_collapsed = collapse_noun_phrases(phrases)
    trimmed_chunks = [trim_phrase_chunk(chunk) for chunk in collapse_phrases(noun_collapsed, config)]
    candidates = [chunk for chunk in trimmed_chunks if chunk]
    candidates.extend(get_single_token_nouns(noun_collapsed, config))
    return list(dict.fromkeys(candidates))
