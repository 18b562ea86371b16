"""
KoreanPhraseMiner

Grammar-driven phrase extraction from Korean text for trend and topic mining.

High-level API
--------------
- KoreanPhraseExtractor      → tokenize + extract phrases, batch PhraseRecords
- extract_phrases            → phrases from POS-tagged tokens
- extract_phrases_from_text  → phrase strings from raw text
- Building blocks:
    * collapse_pos, get_candidate_phrase_chunks, trim_phrase_chunk
    * get_trie / COLLAPSING_RULES (grammar trie)
    * KiwiTokenizer / KomoranTokenizer (upstream tokenizers)
"""

from importlib.metadata import PackageNotFoundError, version


# Core APIs
from .pos import KoreanPos, KoreanToken, OTHER_POSES
from .config import PhraseExtractorConfig, DEFAULT_CONFIG
from .grammar import (
    COLLAPSE_TRIE,
    COLLAPSING_RULES,
    GrammarError,
    PosTrie,
    build_trie,
    get_trie,
)
from .chunker import (
    KoreanPhrase,
    PhraseChunk,
    get_candidate_phrase_chunks,
    trim_phrase,
    trim_phrase_chunk,
)
from .collapser import collapse_pos
from .phrase_extractor import (
    KoreanPhraseExtractor,
    PhraseRecord,
    clean_markdown_text,
    extract_phrases,
    extract_phrases_from_text,
)

# Tokenizer backends
from .tokenizer import (
    KiwiTokenizer,
    KomoranTokenizer,
    KoreanTokenizer,
    get_tokenizer,
)


# ---------------------------------------------------------------------
# Runtime version (single source of truth = pyproject.toml)
# ---------------------------------------------------------------------
try:
    __version__ = version("koreanphraseminer")
except PackageNotFoundError:
    # Fallback when running directly from a clone without installation
    __version__ = "0.0.0"

__all__ = [
    "KoreanPos",
    "KoreanToken",
    "OTHER_POSES",
    "PhraseExtractorConfig",
    "DEFAULT_CONFIG",
    "COLLAPSE_TRIE",
    "COLLAPSING_RULES",
    "GrammarError",
    "PosTrie",
    "build_trie",
    "get_trie",
    "KoreanPhrase",
    "PhraseChunk",
    "get_candidate_phrase_chunks",
    "trim_phrase",
    "trim_phrase_chunk",
    "collapse_pos",
    "KoreanPhraseExtractor",
    "PhraseRecord",
    "clean_markdown_text",
    "extract_phrases",
    "extract_phrases_from_text",
    "KiwiTokenizer",
    "KomoranTokenizer",
    "KoreanTokenizer",
    "get_tokenizer",
    "__version__",
]
