"""
hangul.py

Hangul syllable decomposition into lead consonant (초성), vowel (중성) and
trailing consonant (종성), using compatibility jamo so that results compare
directly against characters such as ``'ㄴ'`` and ``'ㄹ'``.
"""

from __future__ import annotations

from typing import NamedTuple

HANGUL_BASE = 0xAC00
HANGUL_END = 0xD7A3
ONSET_BLOCK = 588  # 21 vowels * 28 codas
CODA_COUNT = 28

ONSET_LIST = "ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ"
VOWEL_LIST = "ㅏㅐㅑㅒㅓㅔㅕㅖㅗㅘㅙㅚㅛㅜㅝㅞㅟㅠㅡㅢㅣ"
# Index 0 is "no trailing consonant".
CODA_LIST = ("",) + tuple("ㄱㄲㄳㄴㄵㄶㄷㄹㄺㄻㄼㄽㄾㄿㅀㅁㅂㅄㅅㅆㅇㅈㅊㅋㅌㅍㅎ")


class HangulChar(NamedTuple):
    onset: str
    vowel: str
    coda: str


def is_hangul_syllable(ch: str) -> bool:
    return len(ch) == 1 and HANGUL_BASE <= ord(ch) <= HANGUL_END


def decompose_hangul(ch: str) -> HangulChar:
    """
    Decompose a precomposed Hangul syllable.

    >>> decompose_hangul("는")
    HangulChar(onset='ㄴ', vowel='ㅡ', coda='ㄴ')

    Raises ``ValueError`` if ``ch`` is not a single Hangul syllable.
    """
    if not is_hangul_syllable(ch):
        raise ValueError(f"Not a Hangul syllable: {ch!r}")

    s_index = ord(ch) - HANGUL_BASE
    onset = s_index // ONSET_BLOCK
    vowel = (s_index % ONSET_BLOCK) // CODA_COUNT
    coda = s_index % CODA_COUNT
    return HangulChar(ONSET_LIST[onset], VOWEL_LIST[vowel], CODA_LIST[coda])
