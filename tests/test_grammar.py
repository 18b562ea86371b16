import unittest

from koreanphraseminer.grammar import (
    COLLAPSE_TRIE,
    SELF_NODE,
    GrammarError,
    build_trie,
    get_trie,
)
from koreanphraseminer.pos import KoreanPos


class TestBuildTrie(unittest.TestCase):
    def test_single_required_symbol(self):
        nodes = build_trie("N1", KoreanPos.Noun)

        self.assertEqual(len(nodes), 1)
        self.assertIs(nodes[0].pos, KoreanPos.Noun)
        self.assertIs(nodes[0].ending, KoreanPos.Noun)
        self.assertEqual(nodes[0].next_nodes, ())

    def test_optional_and_repeatable_symbols_branch(self):
        """
        D0p*N1s0: Determiner may be skipped, prefixes repeat, the noun is
        required and the suffix is optional.
        """
        nodes = build_trie("D0p*N1s0", KoreanPos.Noun)

        self.assertEqual(
            [n.pos for n in nodes],
            [KoreanPos.Determiner, KoreanPos.NounPrefix, KoreanPos.Noun],
        )
        determiner, prefix, noun = nodes

        # Nothing can terminate before the required noun
        self.assertIsNone(determiner.ending)
        self.assertIsNone(prefix.ending)
        self.assertIs(noun.ending, KoreanPos.Noun)

        self.assertEqual(
            [n.pos for n in determiner.next_nodes],
            [KoreanPos.NounPrefix, KoreanPos.Noun],
        )
        self.assertTrue(prefix.loops)
        self.assertIs(prefix.next_nodes[0], SELF_NODE)

        suffix = noun.next_nodes[0]
        self.assertIs(suffix.pos, KoreanPos.Suffix)
        self.assertIs(suffix.ending, KoreanPos.Noun)

    def test_required_repeatable_loops_and_terminates(self):
        (node,) = build_trie("E+", KoreanPos.Exclamation)

        self.assertTrue(node.loops)
        self.assertIs(node.ending, KoreanPos.Exclamation)
        self.assertEqual(node.resolve_next(), (node,))

    def test_predicate_terminates_after_stem(self):
        nodes = build_trie("v*V1r*e0", KoreanPos.Verb)
        verb = [n for n in nodes if n.pos is KoreanPos.Verb][0]

        self.assertIs(verb.ending, KoreanPos.Verb)
        self.assertEqual(
            [n.pos for n in verb.next_nodes],
            [KoreanPos.PreEomi, KoreanPos.Eomi],
        )

    def test_malformed_rules_fail_at_build_time(self):
        for pattern in ("X1", "N2", "N", "", "N1s"):
            with self.subTest(pattern=pattern):
                with self.assertRaises(GrammarError):
                    build_trie(pattern, KoreanPos.Noun)

    def test_grammar_error_is_value_error(self):
        with self.assertRaises(ValueError):
            get_trie({"N1": KoreanPos.Noun, "Q+": KoreanPos.Noun})


class TestGetTrie(unittest.TestCase):
    def test_default_trie_merges_shared_prefixes(self):
        self.assertEqual(
            [n.pos for n in COLLAPSE_TRIE],
            [
                KoreanPos.Determiner,
                KoreanPos.NounPrefix,
                KoreanPos.Noun,
                KoreanPos.VerbPrefix,
                KoreanPos.Verb,
                KoreanPos.Adjective,
                KoreanPos.Adverb,
                KoreanPos.Josa,
                KoreanPos.Conjunction,
                KoreanPos.Exclamation,
                KoreanPos.Others,
            ],
        )

        verb_prefix = COLLAPSE_TRIE[3]
        self.assertEqual(
            [n.pos for n in verb_prefix.next_nodes],
            [None, KoreanPos.Verb, KoreanPos.Adjective],
        )
        self.assertIs(verb_prefix.resolve_next()[0], verb_prefix)

    def test_identical_nodes_merge_successors(self):
        trie = get_trie({"N1": KoreanPos.Noun, "N1s0": KoreanPos.Noun})

        self.assertEqual(len(trie), 1)
        self.assertEqual([n.pos for n in trie[0].next_nodes], [KoreanPos.Suffix])

    def test_loop_mismatch_keeps_nodes_apart(self):
        trie = get_trie({"N+": KoreanPos.Noun, "N1": KoreanPos.Noun})

        self.assertEqual(len(trie), 2)
        self.assertEqual([n.loops for n in trie], [True, False])

    def test_different_endings_keep_nodes_apart(self):
        trie = get_trie({"A1": KoreanPos.Adverb, "A1N1": KoreanPos.Noun})

        self.assertEqual([n.ending for n in trie], [KoreanPos.Adverb, None])


if __name__ == "__main__":
    unittest.main()
