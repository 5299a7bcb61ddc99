import unittest

from domain.entities import SearchResult
from domain.errors import IndexUnavailable
from infrastructure.index.in_memory_term_index import InMemoryTermIndex


class _FailingIndex(InMemoryTermIndex):
    def lookup(self, term: str) -> dict[str, int]:
        raise IndexUnavailable("test", "connection refused")


class TestSearchResultOperations(unittest.TestCase):
    def test_or_adds_scores_of_shared_documents(self):
        result = SearchResult({"d": 3}).or_(SearchResult({"d": 4}))
        self.assertEqual(dict(result.scores), {"d": 7})

    def test_or_keeps_documents_from_either_side(self):
        result = SearchResult({"a": 1, "b": 2}) | SearchResult({"b": 3, "c": 4})
        self.assertEqual(dict(result.scores), {"a": 1, "b": 5, "c": 4})

    def test_and_keeps_only_shared_documents(self):
        result = SearchResult({"x": 1, "y": 2}).and_(SearchResult({"y": 3, "z": 4}))
        self.assertEqual(dict(result.scores), {"y": 5})

    def test_and_requires_stored_entry_even_if_score_is_zero(self):
        result = SearchResult({"x": 0, "y": 2}) & SearchResult({"x": 0})
        self.assertEqual(dict(result.scores), {"x": 0})

    def test_or_and_are_commutative(self):
        a = SearchResult({"x": 1, "y": 2, "w": 7})
        b = SearchResult({"y": 3, "z": 4, "w": 1})
        self.assertEqual(a.or_(b), b.or_(a))
        self.assertEqual(a.and_(b), b.and_(a))

    def test_minus_clamps_at_zero_and_keeps_document(self):
        result = SearchResult({"d": 2}).minus(SearchResult({"d": 5}))
        self.assertEqual(dict(result.scores), {"d": 0})
        self.assertIn("d", result)

    def test_minus_retains_left_membership(self):
        result = SearchResult({"d": 2, "e": 1}) - SearchResult({"d": 1})
        self.assertEqual(dict(result.scores), {"d": 1, "e": 1})

    def test_minus_ignores_right_only_documents(self):
        result = SearchResult({"d": 2}).minus(SearchResult({"f": 9}))
        self.assertEqual(dict(result.scores), {"d": 2})

    def test_operands_are_not_modified(self):
        a = SearchResult({"d": 2, "e": 1})
        b = SearchResult({"d": 1, "f": 3})
        a.or_(b)
        a.and_(b)
        a.minus(b)
        self.assertEqual(dict(a.scores), {"d": 2, "e": 1})
        self.assertEqual(dict(b.scores), {"d": 1, "f": 3})

    def test_constructor_copies_input_mapping(self):
        raw = {"d": 1}
        result = SearchResult(raw)
        raw["d"] = 100
        raw["e"] = 5
        self.assertEqual(dict(result.scores), {"d": 1})
        with self.assertRaises(TypeError):
            result.scores["d"] = 2  # type: ignore[index]

    def test_total_relevance_hook_is_used_by_or_and_and(self):
        class MaxResult(SearchResult):
            __slots__ = ()

            @staticmethod
            def total_relevance(left: int, right: int) -> int:
                return max(left, right)

        a = MaxResult({"d": 3, "e": 1})
        b = MaxResult({"d": 4})
        self.assertEqual(dict(a.or_(b).scores), {"d": 4, "e": 1})
        self.assertEqual(dict(a.and_(b).scores), {"d": 4})
        self.assertIsInstance(a.or_(b), MaxResult)

    def test_operators_follow_overridden_methods(self):
        class StrictOr(SearchResult):
            __slots__ = ()

            def or_(self, other: SearchResult) -> SearchResult:
                return self.and_(other)

        a = StrictOr({"x": 1, "y": 2})
        b = StrictOr({"y": 3})
        self.assertEqual(dict((a | b).scores), {"y": 5})
        self.assertEqual(dict((a & b).scores), {"y": 5})
        self.assertEqual(dict((a - b).scores), {"x": 1, "y": 0})

    def test_negative_scores_are_rejected(self):
        with self.assertRaises(ValueError):
            SearchResult({"d": -1})
        self.assertEqual(SearchResult({"d": 0}).relevance("d"), 0)


class TestSearchResultLookupAndRank(unittest.TestCase):
    def test_relevance_defaults_to_zero(self):
        self.assertEqual(SearchResult().relevance("anything"), 0)
        self.assertEqual(SearchResult({"a": 4}).relevance("a"), 4)
        self.assertEqual(SearchResult({"a": 4}).relevance("b"), 0)

    def test_rank_is_ascending(self):
        result = SearchResult({"a": 5, "b": 1, "c": 3})
        self.assertEqual(result.rank(), [("b", 1), ("c", 3), ("a", 5)])

    def test_rank_keeps_mapping_order_for_ties(self):
        result = SearchResult({"a": 2, "b": 1, "c": 2})
        self.assertEqual(result.rank(), [("b", 1), ("a", 2), ("c", 2)])

    def test_describe_lists_ranked_lines(self):
        self.assertEqual(SearchResult({"u1": 2, "u2": 1}).describe(), ["u2\t1", "u1\t2"])

    def test_container_protocol(self):
        result = SearchResult({"a": 1, "b": 2})
        self.assertEqual(len(result), 2)
        self.assertEqual(sorted(result), ["a", "b"])
        self.assertNotIn("c", result)


class TestSearchResultFromTerm(unittest.TestCase):
    def setUp(self) -> None:
        self.index = InMemoryTermIndex()
        self.index.add_counts("https://en.wikipedia.org/wiki/Java", {"java": 4, "programming": 2})
        self.index.add_counts("https://en.wikipedia.org/wiki/Python", {"python": 5, "programming": 3})

    def test_wraps_raw_counts(self):
        result = SearchResult.from_term("programming", self.index)
        self.assertEqual(
            dict(result.scores),
            {
                "https://en.wikipedia.org/wiki/Java": 2,
                "https://en.wikipedia.org/wiki/Python": 3,
            },
        )

    def test_unknown_term_yields_empty_result(self):
        empty = SearchResult.from_term("cobol", self.index)
        other = SearchResult.from_term("programming", self.index)
        self.assertEqual(len(empty), 0)
        self.assertEqual(empty.relevance("anything"), 0)
        self.assertEqual(empty.or_(other), other)
        self.assertEqual(other.or_(empty), other)
        self.assertEqual(len(empty.and_(other)), 0)
        self.assertEqual(len(other.and_(empty)), 0)
        self.assertEqual(len(empty.minus(other)), 0)
        self.assertEqual(other.minus(empty), other)

    def test_index_failure_propagates(self):
        with self.assertRaises(IndexUnavailable):
            SearchResult.from_term("java", _FailingIndex())


if __name__ == "__main__":
    unittest.main()
