"""
phrase_extractor.py

KoreanPhraseExtractor: grammar-based phrase extraction for trend and topic
mining over Korean text.

Pipeline
--------
1. Collapse POS-tagged tokens into phrases with the grammar trie
   (초 + 거대 + 기업 + 의 -> 초거대기업 + 의).
2. Group phrases into candidate chunks and trim them to noun boundaries.
3. Expand long chunks into their suffix windows, drop chunks without enough
   substance, deduplicate, and flatten every chunk into one phrase.

Quick usage
-----------
    from koreanphraseminer import KoreanPhraseExtractor

    extractor = KoreanPhraseExtractor(method="kiwi")
    extractor.extract_phrase_texts("한국어를 처리하는 예시입니다")
    # ['한국어', '처리하는 예시']

    records, sentences_by_doc = extractor.mine_phrases(docs)
    df = extractor.records_to_frame(records)
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd

from .chunker import (
    KoreanPhrase,
    PhraseChunk,
    get_candidate_phrase_chunks,
    trim_phrase_chunk,
)
from .collapser import collapse_pos
from .config import DEFAULT_CONFIG, PhraseExtractorConfig
from .pos import KoreanPos, KoreanToken
from .tokenizer import KiwiTokenizer, KoreanTokenizer, get_tokenizer


@dataclass
class PhraseRecord:
    phrase: str        # surface text of the phrase
    pos: str           # "Noun", or "Hashtag" for hashtag pass-through
    doc_index: int
    sent_index: int
    offset: int        # character offset in the (preprocessed) document
    length: int        # characters covered in the document
    n_tokens: int      # non-space tokens in the phrase


# ---------------------------------------------------------------------------
# Windowing, substance filter, flattening
# ---------------------------------------------------------------------------
def is_proper_phrase_chunk(
    phrase_chunk: Sequence[KoreanPhrase], config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> bool:
    if len(phrase_chunk) > config.min_phrases_per_phrase_chunk:
        return True
    total_chars = sum(phrase.text_length for phrase in phrase_chunk)
    return total_chars >= config.min_chars_per_phrase_chunk


def permutate_candidates(
    candidates: Sequence[PhraseChunk], config: PhraseExtractorConfig = DEFAULT_CONFIG
) -> List[PhraseChunk]:
    """
    Expand every chunk longer than ``min_phrases_per_phrase_chunk`` into its
    suffix windows ``chunk[i:]`` for ``i`` in ``0..len - min_phrases``, each
    trimmed again. Shorter chunks pass through unchanged.
    """
    windows: List[PhraseChunk] = []
    min_phrases = config.min_phrases_per_phrase_chunk
    for chunk in candidates:
        if len(chunk) > min_phrases:
            windows.extend(
                trim_phrase_chunk(chunk[i:]) for i in range(len(chunk) - min_phrases + 1)
            )
        else:
            windows.append(chunk)
    return windows


def _contains_spam(phrase: KoreanPhrase, config: PhraseExtractorConfig) -> bool:
    return any(
        token.pos is KoreanPos.Noun and token.text in config.spam_nouns
        for token in phrase.tokens
    )


def extract_phrases(
    tokens: Sequence[KoreanToken],
    config: PhraseExtractorConfig = DEFAULT_CONFIG,
    *,
    filter_spam: bool = False,
    enable_hashtags: bool = False,
) -> List[KoreanPhrase]:
    """
    Find phrases suitable for trending topics.

    Parameters
    ----------
    tokens:
        Tagged tokens with Space tokens preserved between words.
    config:
        Thresholds and lexical sets.
    filter_spam:
        Drop phrases that contain a noun from ``config.spam_nouns``.
    enable_hashtags:
        Append every hashtag in ``tokens`` as a one-token Hashtag phrase.

    Returns
    -------
    List[KoreanPhrase]
        Distinct phrases in discovery order.
    """
    collapsed = collapse_pos(tokens)
    candidates = get_candidate_phrase_chunks(collapsed, config)

    proper_chunks = [
        chunk
        for chunk in permutate_candidates(candidates, config)
        if is_proper_phrase_chunk(chunk, config)
    ]

    phrases = [
        KoreanPhrase(tuple(token for phrase in trim_phrase_chunk(chunk) for token in phrase.tokens))
        for chunk in dict.fromkeys(proper_chunks)
    ]

    if filter_spam:
        phrases = [phrase for phrase in phrases if not _contains_spam(phrase, config)]

    if enable_hashtags:
        phrases.extend(
            KoreanPhrase((token,), KoreanPos.Hashtag)
            for token in tokens
            if token.pos is KoreanPos.Hashtag
        )

    return list(dict.fromkeys(phrases))


@lru_cache(maxsize=1)
def _default_tokenizer() -> KoreanTokenizer:
    return KiwiTokenizer()


def extract_phrases_from_text(
    text: str,
    tokenizer: Optional[KoreanTokenizer] = None,
    config: PhraseExtractorConfig = DEFAULT_CONFIG,
) -> List[str]:
    """
    Tokenize ``text`` (no stemming, spaces kept) and return the surface
    text of every extracted phrase.
    """
    tokenizer = tokenizer or _default_tokenizer()
    tokens = tokenizer.tokenize(text, stemming=False, keep_space=True)
    return [phrase.text for phrase in extract_phrases(tokens, config)]


# ---------------------------------------------------------------------------
# ---------- Main KoreanPhraseExtractor class ----------
# ---------------------------------------------------------------------------
class KoreanPhraseExtractor:
    """
    Grammar-based phrase extraction for Korean text.

    This class is responsible for:
      * Tokenization and POS-tagging (Kiwi or Komoran backend)
      * (Optionally) light Markdown cleanup before tagging
      * Running the collapse / chunk / window pipeline per sentence
      * Producing PhraseRecord metadata for batches of documents

    Extraction itself is deterministic and side-effect free; this class only
    adds tokenization, document handling and progress logging around it.
    """

    def __init__(
        self,
        method: str = "kiwi",
        tokenizer: Optional[KoreanTokenizer] = None,
        config: PhraseExtractorConfig = DEFAULT_CONFIG,
        clean_markdown: bool = False,
        filter_spam: bool = False,
        enable_hashtags: bool = False,
        logger: Optional[Callable[[str], None]] = None,
        verbose: bool = False,
    ) -> None:
        """
        Parameters
        ----------
        method:
            Either ``"kiwi"`` (default) or ``"komoran"``. Ignored when
            ``tokenizer`` is given.
        tokenizer:
            A ready tokenizer backend, e.g. ``KiwiTokenizer(kiwi=my_kiwi)``.
        config:
            Thresholds and lexical sets used by the pipeline.
        clean_markdown:
            If ``True``, each document is cleaned from Markdown to plain text
            before tagging (reference/footnote lines removed, links
            flattened, code blocks dropped).
        filter_spam, enable_hashtags:
            Passed through to :func:`extract_phrases`.
        logger:
            Optional logging callback used when ``verbose=True``. Falls back
            to ``print``.
        verbose:
            Emit progress messages from :meth:`mine_phrases`.
        """
        self.tokenizer = tokenizer if tokenizer is not None else get_tokenizer(method)
        self.method = self.tokenizer.name
        self.config = config
        self.clean_markdown = clean_markdown
        self.filter_spam = filter_spam
        self.enable_hashtags = enable_hashtags
        self.logger = logger
        self.verbose = verbose

    def _log(self, message: str) -> None:
        if not self.verbose:
            return
        if self.logger is not None:
            self.logger(message)
        else:
            print(message)

    # ------------------
    # Public API
    # ------------------
    def extract_phrases(self, tokens: Sequence[KoreanToken]) -> List[KoreanPhrase]:
        """Extract phrases from already tagged tokens."""
        return extract_phrases(
            tokens,
            self.config,
            filter_spam=self.filter_spam,
            enable_hashtags=self.enable_hashtags,
        )

    def extract_phrase_texts(self, text: str) -> List[str]:
        """Tokenize ``text`` and return the surface text of each phrase."""
        text = self._preprocess_document_text(text)
        tokens = self.tokenizer.tokenize(text, stemming=False, keep_space=True)
        return [phrase.text for phrase in self.extract_phrases(tokens)]

    def mine_phrases(
        self, texts: Sequence[str]
    ) -> Tuple[List[PhraseRecord], List[List[str]]]:
        """
        Extract phrases from many documents, sentence by sentence.

        Returns
        -------
        phrase_records:
            One PhraseRecord per extracted phrase occurrence. Offsets refer
            to the preprocessed document text.
        sentences_by_doc:
            Nested list of sentence strings, aligned with PhraseRecord
            indices::

                sentences_by_doc[doc_index][sent_index] -> sentence text
        """
        phrase_records: List[PhraseRecord] = []
        sentences_by_doc: List[List[str]] = []

        for doc_index, raw_doc in enumerate(texts):
            doc = self._preprocess_document_text(raw_doc)
            doc_sentences: List[str] = []

            for sent_index, (sent_start, sent_text) in enumerate(
                self.tokenizer.split_sentences(doc)
            ):
                doc_sentences.append(sent_text)
                tokens = self.tokenizer.tokenize(sent_text, stemming=False, keep_space=True)
                for phrase in self.extract_phrases(tokens):
                    phrase_records.append(
                        PhraseRecord(
                            phrase=phrase.text,
                            pos=str(phrase.pos),
                            doc_index=doc_index,
                            sent_index=sent_index,
                            offset=sent_start + phrase.offset,
                            length=phrase.length,
                            n_tokens=sum(
                                1 for token in phrase.tokens if token.pos is not KoreanPos.Space
                            ),
                        )
                    )

            sentences_by_doc.append(doc_sentences)
            self._log(
                f"[KoreanPhraseExtractor] doc {doc_index}: {len(doc_sentences)} sentence(s), "
                f"{len(phrase_records)} phrase record(s) so far"
            )

        return phrase_records, sentences_by_doc

    @staticmethod
    def records_to_frame(phrase_records: Sequence[PhraseRecord]) -> pd.DataFrame:
        """
        Pandas DataFrame with one row per PhraseRecord. Columns follow the
        PhraseRecord fields.
        """
        columns = list(PhraseRecord.__dataclass_fields__)
        return pd.DataFrame([asdict(record) for record in phrase_records], columns=columns)

    # ---------------------------------------
    # Document-level preprocessing
    # ---------------------------------------
    def _preprocess_document_text(self, text: str) -> str:
        # Decomposed jamo (NFD, e.g. from macOS file names) would break both
        # the taggers and final-consonant checks.
        text = unicodedata.normalize("NFC", text)
        if not self.clean_markdown:
            return text
        return clean_markdown_text(text)


# ---------------------------------------------------------------------------
# Markdown cleanup
# ---------------------------------------------------------------------------
# "[ref]: https://..." and "[^1]: note" definition lines
_MD_DEFINITION_RE = re.compile(r"^ {0,3}\[\^?[^\]\n]+\]:[ \t]+.*$", re.MULTILINE)
# Footnote markers only; bracketed labels such as [속보] or [단독] are text.
_MD_FOOTNOTE_REF_RE = re.compile(r"\[\^[^\]\s]+\]")
# Any horizontal whitespace, the ideographic space U+3000 included
_HSPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def clean_markdown_text(text: str) -> str:
    """
    Convert Markdown to plain text suitable for Korean tagging.

    - Drops link/footnote definition lines and ``[^n]`` footnote markers.
    - Renders with ``markdown`` and extracts text with ``beautifulsoup4``;
      code blocks and inline code are removed.
    - Inline markup (links, emphasis) stays on its line, so it does not
      break a sentence; block elements end up on separate lines.
    - Full-width punctuation is left as written (Kiwi tags it); full-width
      spaces become ordinary spaces.
    """
    import markdown
    from bs4 import BeautifulSoup

    text = _MD_DEFINITION_RE.sub("", text)
    text = _MD_FOOTNOTE_REF_RE.sub("", text)

    soup = BeautifulSoup(markdown.markdown(text, output_format="html"), "html.parser")
    for tag in soup.find_all(["code", "pre"]):
        tag.decompose()

    lines = (_HSPACE_RE.sub(" ", line).strip() for line in soup.get_text().splitlines())
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()
