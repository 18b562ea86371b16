import unittest

from koreanphraseminer.chunker import KoreanPhrase
from koreanphraseminer.collapser import collapse_pos
from koreanphraseminer.grammar import get_trie
from koreanphraseminer.pos import KoreanPos, KoreanToken


def tok(text, pos):
    return KoreanToken(text, pos)


SPACE = tok(" ", KoreanPos.Space)


def summary(phrases):
    return [(p.text, p.pos) for p in phrases]


class TestCollapsePos(unittest.TestCase):
    def test_other_pos_passes_through_as_single_phrase(self):
        bang = tok("!", KoreanPos.Punctuation)

        phrases = collapse_pos([bang])

        self.assertEqual(len(phrases), 1)
        self.assertEqual(phrases[0].tokens, (bang,))
        self.assertIs(phrases[0].pos, KoreanPos.Punctuation)

    def test_noun_and_josa(self):
        phrases = collapse_pos([tok("사과", KoreanPos.Noun), tok("를", KoreanPos.Josa)])

        self.assertEqual(
            summary(phrases),
            [("사과", KoreanPos.Noun), ("를", KoreanPos.Josa)],
        )

    def test_prefix_noun_suffix_collapse_to_noun(self):
        phrases = collapse_pos(
            [
                tok("초", KoreanPos.NounPrefix),
                tok("인간", KoreanPos.Noun),
                tok("적", KoreanPos.Suffix),
                tok("의", KoreanPos.Josa),
            ]
        )

        # Closing right after the noun leaves "적" ungrammatical at the root,
        # so only the full match survives.
        self.assertEqual(
            summary(phrases),
            [("초인간적", KoreanPos.Noun), ("의", KoreanPos.Josa)],
        )

    def test_spaces_stay_in_open_phrase(self):
        phrases = collapse_pos([tok("사과", KoreanPos.Noun), SPACE, tok("배", KoreanPos.Noun)])

        self.assertEqual(
            summary(phrases),
            [("사과 ", KoreanPos.Noun), ("배", KoreanPos.Noun)],
        )

    def test_exhausted_tokens_take_last_token_tag(self):
        phrases = collapse_pos([tok("먹", KoreanPos.Verb), tok("는", KoreanPos.Eomi)])

        self.assertEqual(summary(phrases), [("먹는", KoreanPos.Eomi)])

    def test_incomplete_rule_falls_back_to_last_token_tag(self):
        phrases = collapse_pos([tok("새", KoreanPos.Determiner)])

        self.assertEqual(summary(phrases), [("새", KoreanPos.Determiner)])

    def test_ungrammatical_sequence_contributes_nothing(self):
        self.assertEqual(collapse_pos([tok("는", KoreanPos.Eomi)]), [])

    def test_branches_are_concatenated_close_first(self):
        phrases = collapse_pos(
            [tok("헐", KoreanPos.Exclamation), tok("헐", KoreanPos.Exclamation)]
        )

        self.assertEqual(
            summary(phrases),
            [
                ("헐", KoreanPos.Exclamation),
                ("헐", KoreanPos.Exclamation),
                ("헐헐", KoreanPos.Exclamation),
            ],
        )

    def test_custom_trie_is_root_for_restarts(self):
        trie = get_trie({"N+": KoreanPos.Noun})

        phrases = collapse_pos([tok("a", KoreanPos.Noun), tok("b", KoreanPos.Noun)], trie=trie)

        self.assertEqual([p.text for p in phrases], ["a", "b", "ab"])

    def test_example_sentence(self):
        tokens = [
            tok("한국어", KoreanPos.Noun),
            tok("를", KoreanPos.Josa),
            SPACE,
            tok("처리", KoreanPos.Noun),
            tok("하는", KoreanPos.Verb),
            SPACE,
            tok("예시", KoreanPos.Noun),
            tok("입니다", KoreanPos.Adjective),
        ]

        phrases = collapse_pos(tokens)

        self.assertEqual(
            summary(phrases),
            [
                ("한국어", KoreanPos.Noun),
                ("를 ", KoreanPos.Josa),
                ("처리", KoreanPos.Noun),
                ("하는 ", KoreanPos.Verb),
                ("예시", KoreanPos.Noun),
                ("입니다", KoreanPos.Adjective),
            ],
        )

    def test_phrases_keep_input_order(self):
        tokens = [tok("가", KoreanPos.Noun), tok("!", KoreanPos.Punctuation), tok("나", KoreanPos.Noun)]

        phrases = collapse_pos(tokens)

        self.assertEqual(phrases[0], KoreanPhrase((tokens[0],)))
        self.assertEqual([p.text for p in phrases], ["가", "!", "나"])

    def test_long_input(self):
        tokens = [tok("사과", KoreanPos.Noun), tok("를", KoreanPos.Josa), SPACE] * 400

        phrases = collapse_pos(tokens)

        self.assertEqual(len(phrases), 800)
        self.assertEqual(summary(phrases[:2]), [("사과", KoreanPos.Noun), ("를 ", KoreanPos.Josa)])
        # The trailing space has no successor, so the last phrase keeps its tag.
        self.assertEqual(summary(phrases[-1:]), [("를 ", KoreanPos.Space)])

    def test_long_branching_input_keeps_branch_order(self):
        tokens = [tok("헐", KoreanPos.Exclamation)] * 3

        phrases = collapse_pos(tokens)

        self.assertEqual(
            [p.text for p in phrases],
            ["헐", "헐", "헐", "헐", "헐헐", "헐헐", "헐", "헐헐헐"],
        )


if __name__ == "__main__":
    unittest.main()
