"""
grammar.py

Declarative POS collapsing rules and their compilation into a trie of
POS-transition nodes.

A rule is a string of (symbol, multiplicity) pairs, e.g. ``"D0p*N1s0"``:

    0   optional
    1   required
    *   optional, repeatable
    +   required, repeatable

Symbols are the one-letter shortcuts from :data:`pos.SHORTCUTS`. Every rule
maps to the POS tag assigned to a token run that fully matches it.

Levels of the Korean grammar the default rules cover
------------------------------------------------------
    Substantive: 체언 (초거대기업의)
    Predicate:   용언 (하였었습니다, 개예뻤었다)
    Modifier:    수식언 (모르는 할수도있는 보이기도하는 예뻐 예쁜 완전 잘 잘한)
    Standalone:  독립언
    Functional:  관계언 (조사)
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .pos import SHORTCUTS, KoreanPos

MULTIPLICITIES = frozenset("01*+")


class GrammarError(ValueError):
    """Raised when a collapsing rule cannot be compiled."""


@dataclass(frozen=True, eq=False)
class PosTrie:
    """
    One position of a compiled rule.

    ``next_nodes`` may contain :data:`SELF_NODE`, which stands for this very
    node (a repeatable symbol). ``ending`` is set when a rule may terminate
    after matching this node.
    """

    pos: Optional[KoreanPos]
    next_nodes: Tuple["PosTrie", ...]
    ending: Optional[KoreanPos] = None

    @property
    def loops(self) -> bool:
        return any(node is SELF_NODE for node in self.next_nodes)

    def resolve_next(self) -> Tuple["PosTrie", ...]:
        """Successor frontier with the self-loop marker replaced by this node."""
        return tuple(self if node is SELF_NODE else node for node in self.next_nodes)


SELF_NODE = PosTrie(None, ())


def _is_final(rest: str) -> bool:
    # Terminal when nothing required is left in the pattern.
    return not any(rule in "1+" for rule in rest[1::2])


def _build(pattern: str, ending_pos: KoreanPos) -> List[PosTrie]:
    if len(pattern) < 2:
        return []

    symbol, rule, rest = pattern[0], pattern[1], pattern[2:]
    pos = SHORTCUTS.get(symbol)
    if pos is None:
        raise GrammarError(f"Unknown POS symbol {symbol!r} in rule {pattern!r}")
    if rule not in MULTIPLICITIES:
        raise GrammarError(f"Unknown multiplicity {rule!r} in rule {pattern!r}")

    end = ending_pos if _is_final(rest) else None

    if rule == "+":
        return [PosTrie(pos, (SELF_NODE, *_build(rest, ending_pos)), end)]
    if rule == "*":
        return [PosTrie(pos, (SELF_NODE, *_build(rest, ending_pos)), end)] + _build(
            rest, ending_pos
        )
    if rule == "1":
        return [PosTrie(pos, tuple(_build(rest, ending_pos)), end)]
    # "0"
    return [PosTrie(pos, tuple(_build(rest, ending_pos)), end)] + _build(rest, ending_pos)


def build_trie(pattern: str, ending_pos: KoreanPos) -> List[PosTrie]:
    """
    Compile a single rule into its root-level nodes.

    Raises
    ------
    GrammarError
        If the pattern is empty, has an odd length, or uses an unknown
        symbol or multiplicity.
    """
    if not pattern or len(pattern) % 2 != 0:
        raise GrammarError(
            f"Rule {pattern!r} must be a non-empty sequence of (symbol, multiplicity) pairs"
        )
    return _build(pattern, ending_pos)


def _merge_nodes(nodes: Iterable[PosTrie]) -> Tuple[PosTrie, ...]:
    """
    Merge sibling nodes that match the same symbol, carry the same ending and
    agree on having a self-loop. Successors are merged recursively.
    """
    has_self = False
    groups: Dict[Tuple[Optional[KoreanPos], Optional[KoreanPos], bool], List[PosTrie]] = {}
    for node in nodes:
        if node is SELF_NODE:
            has_self = True
            continue
        groups.setdefault((node.pos, node.ending, node.loops), []).append(node)

    merged: List[PosTrie] = [SELF_NODE] if has_self else []
    for (pos, ending, _), group in groups.items():
        children = _merge_nodes(chain.from_iterable(n.next_nodes for n in group))
        merged.append(PosTrie(pos, children, ending))
    return tuple(merged)


def get_trie(rules: Mapping[str, KoreanPos]) -> Tuple[PosTrie, ...]:
    """
    Compile all rules, in mapping order, into one forest of root nodes.
    """
    return _merge_nodes(
        chain.from_iterable(build_trie(pattern, ending) for pattern, ending in rules.items())
    )


COLLAPSING_RULES: Dict[str, KoreanPos] = {
    # Substantive
    "D0p*N1s0": KoreanPos.Noun,
    # Predicate: 초기뻐하다, 와주세요, 초기뻤었고, 추첨하다, 기뻐하는, 기쁜, 걸려있을
    "v*V1r*e0": KoreanPos.Verb,
    "v*J1r*e0": KoreanPos.Adjective,
    # Standalone
    "A1": KoreanPos.Adverb,
    "j1": KoreanPos.Josa,
    "C1": KoreanPos.Conjunction,
    "E+": KoreanPos.Exclamation,
    "o1": KoreanPos.Others,
}

COLLAPSE_TRIE: Tuple[PosTrie, ...] = get_trie(COLLAPSING_RULES)
