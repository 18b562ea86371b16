"""
tokenizer.py

Upstream tokenizer backends. Both turn raw Korean text into
:class:`~koreanphraseminer.pos.KoreanToken` lists tagged with
:class:`~koreanphraseminer.pos.KoreanPos`:

- ``KiwiTokenizer``    – kiwipiepy's ``Kiwi`` (default, pure pip install)
- ``KomoranTokenizer`` – konlpy's ``Komoran`` (needs a JVM)

Morpheme analysers split predicates into stem + endings (예쁘 + ᆫ). The
phrase grammar expects surface predicates (예쁜), so a predicate stem and the
endings glued to it are merged back into one token spanning the original
text. With ``stemming=True`` that token becomes the dictionary form
(예쁘다) instead.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .pos import KoreanPos, KoreanToken

# Sejong tag set, shared by Kiwi and Komoran.
SEJONG_TAG_MAP: Dict[str, KoreanPos] = {
    "NNG": KoreanPos.Noun,
    "NNP": KoreanPos.Noun,
    "NNB": KoreanPos.Noun,
    "NR": KoreanPos.Noun,
    "NP": KoreanPos.Noun,
    "XR": KoreanPos.Noun,
    # Unanalysable chunks and user-dictionary words are treated as nouns.
    "UN": KoreanPos.Noun,
    "NA": KoreanPos.Noun,
    "NF": KoreanPos.Noun,
    "USER0": KoreanPos.Noun,
    "USER1": KoreanPos.Noun,
    "USER2": KoreanPos.Noun,
    "USER3": KoreanPos.Noun,
    "USER4": KoreanPos.Noun,
    "NV": KoreanPos.Verb,
    "VV": KoreanPos.Verb,
    "VX": KoreanPos.Verb,
    "XSV": KoreanPos.Verb,
    "VA": KoreanPos.Adjective,
    "XSA": KoreanPos.Adjective,
    "VCP": KoreanPos.Adjective,
    "VCN": KoreanPos.Adjective,
    "MM": KoreanPos.Determiner,
    "MAG": KoreanPos.Adverb,
    "MAJ": KoreanPos.Conjunction,
    "IC": KoreanPos.Exclamation,
    "JKS": KoreanPos.Josa,
    "JKC": KoreanPos.Josa,
    "JKG": KoreanPos.Josa,
    "JKO": KoreanPos.Josa,
    "JKB": KoreanPos.Josa,
    "JKV": KoreanPos.Josa,
    "JKQ": KoreanPos.Josa,
    "JX": KoreanPos.Josa,
    "JC": KoreanPos.Josa,
    "EP": KoreanPos.PreEomi,
    "EF": KoreanPos.Eomi,
    "EC": KoreanPos.Eomi,
    "ETN": KoreanPos.Eomi,
    "ETM": KoreanPos.Eomi,
    "XPN": KoreanPos.NounPrefix,
    "XSN": KoreanPos.Suffix,
    "XSM": KoreanPos.Suffix,
    "Z_SIOT": KoreanPos.Suffix,
    "Z_CODA": KoreanPos.Eomi,
    "SN": KoreanPos.Number,
    "SL": KoreanPos.Alpha,
    "SH": KoreanPos.Foreign,
    "SF": KoreanPos.Punctuation,
    "SP": KoreanPos.Punctuation,
    "SS": KoreanPos.Punctuation,
    "SSO": KoreanPos.Punctuation,
    "SSC": KoreanPos.Punctuation,
    "SE": KoreanPos.Punctuation,
    "SO": KoreanPos.Punctuation,
    "SW": KoreanPos.Punctuation,
    "SB": KoreanPos.Punctuation,
    "W_HASHTAG": KoreanPos.Hashtag,
    "W_URL": KoreanPos.URL,
    "W_EMAIL": KoreanPos.Email,
    "W_MENTION": KoreanPos.ScreenName,
    "W_SERIAL": KoreanPos.Number,
    "W_EMOJI": KoreanPos.Punctuation,
}

PREDICATE_POSES = (KoreanPos.Verb, KoreanPos.Adjective)
ENDING_POSES = (KoreanPos.Eomi, KoreanPos.PreEomi)


def map_tag(tag: str) -> KoreanPos:
    """Map a Sejong tag (Kiwi's ``VV-R`` / ``VA-I`` variants included)."""
    base = tag.split("-", 1)[0]
    return SEJONG_TAG_MAP.get(base, KoreanPos.Unknown)


@dataclass(frozen=True)
class Morpheme:
    form: str
    pos: KoreanPos
    start: int
    end: int


@dataclass
class _Span:
    form: str
    pos: KoreanPos
    start: int
    end: int


# ---------------------------------------------------------------------
# Morpheme → surface token conversion
# ---------------------------------------------------------------------
def merge_morphemes(morphemes: Sequence[Morpheme]) -> List[_Span]:
    """
    Group analyser morphemes into surface spans.

    - A morpheme overlapping the previous span is absorbed into it
      (contractions such as 했 = 하 + 았, 난 = 나 + ㄴ).
    - A Verb/Adjective starts a new span and absorbs the Eomi/PreEomi
      morphemes that follow it (예쁘 + ㄴ -> 예쁜).
    - Other zero-width morphemes are absorbed by the previous span.
    """
    spans: List[_Span] = []
    for m in morphemes:
        last = spans[-1] if spans else None
        if last is not None and m.start < last.end:
            last.end = max(last.end, m.end)
        elif m.pos in PREDICATE_POSES:
            spans.append(_Span(m.form, m.pos, m.start, m.end))
        elif last is not None and last.pos in PREDICATE_POSES and m.pos in ENDING_POSES:
            last.end = max(last.end, m.end)
        elif m.start == m.end:
            if last is not None:
                last.end = max(last.end, m.end)
        else:
            spans.append(_Span(m.form, m.pos, m.start, m.end))
    return spans


_GAP_RE = re.compile(r"(\S*)(\s*)(.*)", re.DOTALL)


def close_gaps(spans: Sequence[_Span], text: str) -> List[_Span]:
    """
    Extend spans over characters the analyser skipped, so that only
    whitespace is left between them.

    Non-space text right after a span joins that span; whatever follows the
    first run of whitespace joins the next span.
    """
    closed = [replace(span) for span in spans]
    cursor = 0
    for i, span in enumerate(closed):
        gap = text[cursor : span.start]
        if gap and not gap.isspace():
            if i == 0:
                span.start -= len(gap.lstrip())
            else:
                lead, _, rest = _GAP_RE.fullmatch(gap).groups()
                closed[i - 1].end += len(lead)
                span.start -= len(rest)
        cursor = max(cursor, span.end)

    if closed:
        lead = _GAP_RE.fullmatch(text[cursor:]).group(1)
        closed[-1].end += len(lead)
    return closed


def spans_to_tokens(
    spans: Sequence[_Span], text: str, stemming: bool = False, keep_space: bool = False
) -> List[KoreanToken]:
    """
    Turn spans into tokens carrying the original surface text.

    With ``stemming`` predicates take their dictionary form (stem + 다).
    With ``keep_space`` the whitespace between spans becomes Space tokens.
    """
    tokens: List[KoreanToken] = []
    cursor = 0
    for span in close_gaps(spans, text):
        if keep_space and span.start > cursor:
            tokens.append(KoreanToken(text[cursor : span.start], KoreanPos.Space, cursor))
        if stemming and span.pos in PREDICATE_POSES:
            surface = span.form + "다"
        else:
            surface = text[span.start : span.end]
        tokens.append(KoreanToken(surface, span.pos, span.start))
        cursor = max(cursor, span.end)
    return tokens


# ---------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------
def _load_kiwi() -> Any:
    try:
        from kiwipiepy import Kiwi
    except ImportError as e:
        raise ImportError(
            "kiwipiepy is required for tagging and sentence splitting. "
            "Install with 'pip install kiwipiepy'."
        ) from e
    return Kiwi()


def _kiwi_sentences(kiwi: Any, text: str) -> List[Tuple[int, str]]:
    # Kiwi's splitter keeps decimals (3.5%) and abbreviations together.
    return [(sentence.start, sentence.text) for sentence in kiwi.split_into_sents(text)]


class KoreanTokenizer:
    """
    Base class: subclasses implement :meth:`analyze` (morphemes with
    character spans); this class turns them into surface tokens.
    """

    name = "base"

    def analyze(self, text: str) -> List[Morpheme]:
        raise NotImplementedError

    def tokenize(
        self, text: str, stemming: bool = False, keep_space: bool = False
    ) -> List[KoreanToken]:
        """
        Parameters
        ----------
        text:
            Raw input text.
        stemming:
            Replace predicates with their dictionary form (stem + 다).
        keep_space:
            Insert Space tokens for the whitespace between tokens.
        """
        spans = merge_morphemes(self.analyze(text))
        return spans_to_tokens(spans, text, stemming=stemming, keep_space=keep_space)

    def split_sentences(self, text: str) -> List[Tuple[int, str]]:
        """
        Split ``text`` into sentences.

        Line breaks always end a sentence, so headings and list items are not
        glued to what follows; each line is then split by the backend.

        Returns
        -------
        List[Tuple[int, str]]
            (start offset in ``text``, stripped sentence text) pairs.
        """
        sentences: List[Tuple[int, str]] = []
        line_start = 0
        for line in text.splitlines(keepends=True):
            if line.strip():
                for start, sentence in self._split_line(line.rstrip("\r\n")):
                    stripped = sentence.strip()
                    if stripped:
                        offset = start + len(sentence) - len(sentence.lstrip())
                        sentences.append((line_start + offset, stripped))
            line_start += len(line)
        return sentences

    def _split_line(self, line: str) -> List[Tuple[int, str]]:
        raise NotImplementedError


class KiwiTokenizer(KoreanTokenizer):
    """
    Tokenizer backed by ``kiwipiepy.Kiwi``.

    Parameters
    ----------
    kiwi:
        A ready ``Kiwi`` instance (or anything with compatible ``tokenize``
        and ``split_into_sents``). Loaded on first use when omitted.
    """

    name = "kiwi"

    def __init__(self, kiwi: Optional[Any] = None) -> None:
        self._kiwi = kiwi

    @property
    def kiwi(self) -> Any:
        if self._kiwi is None:
            self._kiwi = _load_kiwi()
        return self._kiwi

    def analyze(self, text: str) -> List[Morpheme]:
        return [
            Morpheme(token.form, map_tag(str(token.tag)), token.start, token.start + token.len)
            for token in self.kiwi.tokenize(text)
        ]

    def _split_line(self, line: str) -> List[Tuple[int, str]]:
        return _kiwi_sentences(self.kiwi, line)


class KomoranTokenizer(KoreanTokenizer):
    """
    Tokenizer backed by ``konlpy.tag.Komoran``.

    Komoran returns bare (form, tag) pairs, so each whitespace-separated
    eojeol is analysed on its own and morphemes are located inside it.
    Contracted morphemes that cannot be found verbatim (했 → 하 + 았) span
    up to the next morpheme that can.

    Komoran has no sentence splitter of its own; sentences are split with
    Kiwi (``kiwi``, loaded on first use when omitted).
    """

    name = "komoran"

    _eojeol_re = re.compile(r"\S+")

    def __init__(self, komoran: Optional[Any] = None, kiwi: Optional[Any] = None) -> None:
        self._komoran = komoran
        self._kiwi = kiwi

    @property
    def komoran(self) -> Any:
        if self._komoran is None:
            self._komoran = self._load_komoran()
        return self._komoran

    @property
    def kiwi(self) -> Any:
        if self._kiwi is None:
            self._kiwi = _load_kiwi()
        return self._kiwi

    def _split_line(self, line: str) -> List[Tuple[int, str]]:
        return _kiwi_sentences(self.kiwi, line)

    def analyze(self, text: str) -> List[Morpheme]:
        morphemes: List[Morpheme] = []
        for match in self._eojeol_re.finditer(text):
            pairs = self.komoran.pos(match.group())
            for form, tag, start, end in self._locate(match.group(), pairs):
                morphemes.append(
                    Morpheme(form, map_tag(tag), match.start() + start, match.start() + end)
                )
        return morphemes

    @staticmethod
    def _locate(
        eojeol: str, pairs: Sequence[Tuple[str, str]]
    ) -> List[Tuple[str, str, int, int]]:
        located: List[Tuple[str, str, int, int]] = []
        pending: List[Tuple[str, str]] = []
        cursor = 0
        for form, tag in pairs:
            idx = eojeol.find(form, cursor) if form else -1
            if idx < 0:
                pending.append((form, tag))
                continue
            # Contracted morphemes share the gap before the next verbatim one.
            located.extend((p_form, p_tag, cursor, idx) for p_form, p_tag in pending)
            start = idx if pending else cursor
            pending = []
            located.append((form, tag, start, idx + len(form)))
            cursor = idx + len(form)

        located.extend((p_form, p_tag, cursor, len(eojeol)) for p_form, p_tag in pending)
        return located

    @staticmethod
    def _load_komoran() -> Any:
        try:
            from konlpy.tag import Komoran
        except ImportError as e:
            raise ImportError(
                "konlpy is required for method='komoran'. Install with 'pip install konlpy'."
            ) from e
        return Komoran()


def get_tokenizer(method: str = "kiwi") -> KoreanTokenizer:
    """Tokenizer backend by name: ``"kiwi"`` or ``"komoran"``."""
    method = method.lower()
    if method == "kiwi":
        return KiwiTokenizer()
    if method == "komoran":
        return KomoranTokenizer()
    raise ValueError("method must be 'kiwi' or 'komoran'")
