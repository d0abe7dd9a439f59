import pytest

from searchable.core.exceptions import SearchConfigurationError
from searchable.services.search_normalization import normalize_query, tokenize
from searchable.services.word_filter import PatternRule, PredicateRule, filter_words, to_rules


class TestTokenize:
    def test_normalize_trims_and_lowercases(self):
        assert normalize_query("  Al 1967 BOB ") == "al 1967 bob"
        assert normalize_query(None) == ""

    def test_tokenize_keeps_duplicates(self):
        assert tokenize("bob  al bob") == ["bob", "al", "bob"]

    def test_tokenize_empty(self):
        assert tokenize("") == []


class TestFilterWords:
    def test_column_without_conditions_keeps_all_words(self):
        words = ["al", "1967", "bob"]
        assert filter_words("email", {"name": to_rules("[a-z]{3,}")}, words) == words
        assert filter_words("email", None, words) == words

    def test_pattern_is_anchored(self):
        rules = {"age": to_rules(r"\d+")}
        assert filter_words("age", rules, ["12", "a12", "12b", "7"]) == ["12", "7"]

    def test_rules_are_or_combined_and_order_is_kept(self):
        rules = {"name": to_rules([r"\d{4}", "[a-z]{3,}"])}
        assert filter_words("name", rules, ["al", "1967", "bob", "x"]) == ["1967", "bob"]

    def test_predicate_rule(self):
        rules = {"age": to_rules(lambda word: word.isdigit() and 0 < int(word) < 120)}
        assert filter_words("age", rules, ["42", "1967", "bob"]) == ["42"]

    def test_all_words_rejected(self):
        rules = {"name": to_rules("[a-z]{3,}")}
        assert filter_words("name", rules, ["al", "1967"]) == []

    def test_malformed_pattern_raises_on_use(self):
        rule = PatternRule("[a-z")
        with pytest.raises(SearchConfigurationError):
            rule.matches("bob")


class TestToRules:
    def test_coerces_mixed_values(self):
        rules = to_rules(["[a-z]+", str.isdigit, PatternRule("x")])
        assert isinstance(rules[0], PatternRule)
        assert isinstance(rules[1], PredicateRule)
        assert rules[2] == PatternRule("x")

    def test_rejects_unsupported_values(self):
        with pytest.raises(ValueError):
            to_rules(42)
        with pytest.raises(ValueError):
            to_rules([])
