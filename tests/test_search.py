import unittest

from application.use_cases.search import CombinedQuery, TermQuery, chain, ranked, search
from domain.entities import SearchResult
from domain.errors import IndexUnavailable
from infrastructure.index.in_memory_term_index import InMemoryTermIndex


class _UnreachableIndex(InMemoryTermIndex):
    def lookup(self, term: str) -> dict[str, int]:
        raise IndexUnavailable("test", "timed out")


class TestSearchUseCase(unittest.TestCase):
    def setUp(self) -> None:
        self.index = InMemoryTermIndex()
        self.index.add_counts("java", {"java": 10, "programming": 4, "coffee": 1})
        self.index.add_counts("python", {"python": 8, "programming": 5})
        self.index.add_counts("espresso", {"coffee": 6})

    def test_single_term(self):
        result = search(TermQuery("programming"), term_index=self.index)
        self.assertEqual(dict(result.scores), {"java": 4, "python": 5})

    def test_and_query(self):
        query = CombinedQuery("and", TermQuery("java"), TermQuery("programming"))
        self.assertEqual(dict(search(query, term_index=self.index).scores), {"java": 14})

    def test_nested_query(self):
        query = CombinedQuery(
            "minus",
            CombinedQuery("or", TermQuery("programming"), TermQuery("coffee")),
            TermQuery("java"),
        )
        result = search(query, term_index=self.index)
        self.assertEqual(dict(result.scores), {"java": 0, "python": 5, "espresso": 6})

    def test_unknown_operator_is_rejected(self):
        with self.assertRaises(ValueError):
            search(CombinedQuery("xor", TermQuery("java"), TermQuery("python")), term_index=self.index)  # type: ignore[arg-type]

    def test_chain_builds_left_deep_tree(self):
        query = chain("programming", [("or", "coffee"), ("minus", "java")])
        self.assertEqual(
            query,
            CombinedQuery(
                "minus",
                CombinedQuery("or", TermQuery("programming"), TermQuery("coffee")),
                TermQuery("java"),
            ),
        )
        self.assertEqual(chain("java", []), TermQuery("java"))

    def test_index_failure_propagates(self):
        with self.assertRaises(IndexUnavailable):
            search(chain("java", [("and", "python")]), term_index=_UnreachableIndex())


class TestRanked(unittest.TestCase):
    def test_ascending_by_default(self):
        result = SearchResult({"a": 5, "b": 1, "c": 3})
        self.assertEqual(ranked(result), [("b", 1), ("c", 3), ("a", 5)])

    def test_descending_on_request(self):
        result = SearchResult({"a": 5, "b": 1, "c": 3})
        self.assertEqual(ranked(result, order="desc"), [("a", 5), ("c", 3), ("b", 1)])


if __name__ == "__main__":
    unittest.main()
