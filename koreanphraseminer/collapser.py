"""
collapser.py

Collapse a token sequence into phrases by walking it against the grammar
trie.

The walk is an exhaustive backtracking search: at every token the
collapser may close the phrase in progress (when the grammar allows it),
extend it along any matching trie edge, or pass a chunk-level token through
on its own. Every complete path contributes its phrase list, and the lists
are concatenated in branch order. Paths that hit an ungrammatical token
simply contribute nothing.

The search runs on an explicit stack, so its depth is not bounded by the
interpreter's recursion limit.
"""

from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Tuple

from .chunker import KoreanPhrase
from .grammar import COLLAPSE_TRIE, PosTrie
from .pos import OTHER_POSES, KoreanPos, KoreanToken


class _State(NamedTuple):
    index: int
    trie: Tuple[PosTrie, ...]
    final_phrases: Tuple[KoreanPhrase, ...]
    cur_tokens: Tuple[KoreanToken, ...]
    ending: Optional[KoreanPos]


def _branches(
    tokens: Sequence[KoreanToken], root: Tuple[PosTrie, ...], state: _State
) -> List[_State]:
    """Successor states of ``state``, in output order."""
    head = tokens[state.index]
    branches: List[_State] = []

    if head.pos is KoreanPos.Space:
        # Spaces never consume a grammar symbol but stay in the open phrase.
        branches.append(
            state._replace(index=state.index + 1, cur_tokens=state.cur_tokens + (head,))
        )
    elif state.ending is not None:
        # Close the pending phrase and retry this token from the root.
        branches.append(
            _State(
                state.index,
                root,
                state.final_phrases + (KoreanPhrase(state.cur_tokens, state.ending),),
                (),
                None,
            )
        )

    for node in state.trie:
        if node.pos is head.pos:
            branches.append(
                _State(
                    state.index + 1,
                    node.resolve_next(),
                    state.final_phrases,
                    state.cur_tokens + (head,),
                    node.ending,
                )
            )
        elif node.pos is KoreanPos.Others and head.pos in OTHER_POSES:
            branches.append(
                _State(
                    state.index + 1,
                    root,
                    state.final_phrases + (KoreanPhrase((head,), head.pos),),
                    (),
                    None,
                )
            )
    return branches


def collapse_pos(
    tokens: Sequence[KoreanToken],
    trie: Tuple[PosTrie, ...] = COLLAPSE_TRIE,
) -> List[KoreanPhrase]:
    """
    Collapse ``tokens`` into phrases.

    Parameters
    ----------
    tokens:
        Tagged tokens, spaces included.
    trie:
        Root frontier of the grammar. Every restart after a closed phrase
        returns to it.

    Returns
    -------
    List[KoreanPhrase]
        Phrases of every complete path, concatenated. No deduplication.
    """
    tokens = tuple(tokens)
    output: List[KoreanPhrase] = []
    stack = [_State(0, trie, (), (), None)]

    while stack:
        state = stack.pop()
        if state.index == len(tokens):
            output.extend(state.final_phrases)
            if state.cur_tokens:
                # No grammar ending here: the phrase takes its last token's tag.
                output.append(KoreanPhrase(state.cur_tokens, state.cur_tokens[-1].pos))
            continue
        # Depth-first, first branch on top.
        stack.extend(reversed(_branches(tokens, trie, state)))

    return output
