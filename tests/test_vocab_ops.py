"""Unit tests for the pure vocabulary helpers."""

from collections import Counter

from vocabtok._vocab import (
    MAX_MATCH_LEN,
    distinct_symbols,
    longest_match,
    most_frequent_pair,
    pair_freqs,
)


# distinct_symbols
# ---------------------------------------------------------------------------


def test_distinct_symbols_first_occurrence_order():
    """Symbols are kept in the order they first appear."""
    assert distinct_symbols("banana") == ["b", "a", "n"]
    assert distinct_symbols("") == []


# pair_freqs / most_frequent_pair
# ---------------------------------------------------------------------------


def test_pair_freqs_counts_overlaps():
    """Overlapping pairs are counted independently."""
    assert pair_freqs("aaaa") == Counter({"aa": 3})
    assert pair_freqs("a") == Counter()
    assert list(pair_freqs("abcab")) == ["ab", "bc", "ca"]


def test_most_frequent_pair_skips_known_and_rare():
    """Pairs already in the vocabulary or seen once are not eligible."""
    freqs = Counter({"ab": 3, "bc": 2, "cd": 1})
    assert most_frequent_pair(freqs, {"ab"}) == ("bc", 2)
    assert most_frequent_pair(freqs, {"ab", "bc"}) is None


def test_most_frequent_pair_tie_keeps_first():
    """The first pair wins among equal counts."""
    freqs = Counter({"xy": 2, "yz": 2})
    assert most_frequent_pair(freqs, set()) == ("xy", 2)


# longest_match
# ---------------------------------------------------------------------------


def test_longest_match_greedy():
    """The longest vocabulary entry wins at each position."""
    vocab = {"a", "b", "ab", "abb"}
    assert longest_match("abbab", vocab) == ["abb", "ab"]


def test_longest_match_fallback():
    """Characters outside the vocabulary become single tokens."""
    assert longest_match("azb", {"a", "b"}) == ["a", "z", "b"]
    assert longest_match("", {"a"}) == []


def test_longest_match_length_cap():
    """Entries longer than MAX_MATCH_LEN are never matched."""
    assert MAX_MATCH_LEN == 10
    text = "abcdefghijkl"
    too_long = {text, *text}
    assert longest_match(text, too_long) == list(text)
    at_cap = {text[:10], *text}
    assert longest_match(text, at_cap) == [text[:10], "k", "l"]
