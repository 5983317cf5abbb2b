"""
Core vocabulary operations shared by the tokenizers.
"""

from collections import Counter
from collections.abc import Collection, Iterable
from typing import Final

from .types import Token

# longest candidate tried by segmentation, independent of the learned vocabulary
MAX_MATCH_LEN: Final[int] = 10


def distinct_symbols(text: Iterable[str]) -> list[Token]:
    """
    Return the distinct symbols of ``text`` in first-occurrence order.

    Each symbol is recorded the first time it is seen, so the resulting order
    is the order in which token ids get assigned.
    """
    seen: set[Token] = set()
    ordered: list[Token] = []
    for sym in text:
        if sym not in seen:
            seen.add(sym)
            ordered.append(sym)
    return ordered


def pair_freqs(text: str) -> Counter[Token]:
    """
    Count every adjacent two-character substring of ``text``.

    Overlapping pairs are counted independently, so ``"aaaa"`` yields
    ``{"aa": 3}``. The counter keeps pairs in first-occurrence order.

    Args:
        text (str): Raw text to scan.

    Returns:
        Counter[Token]: Mapping of two-character strings to their occurrence counts.
    """
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def most_frequent_pair(
    freqs: Counter[Token], exclude: Collection[Token]
) -> tuple[Token, int] | None:
    """
    Pick the most frequent pair that is eligible for promotion.

    A pair is eligible when it is not in ``exclude`` and occurs more than once.
    Among equally frequent pairs the one seen first in the text wins.

    :returns: ``(pair, count)`` or ``None`` when no pair is eligible.
    """
    best: tuple[Token, int] | None = None
    for pair, count in freqs.items():
        if count <= 1 or pair in exclude:
            continue
        # strict comparison keeps the earliest pair on ties
        if best is None or count > best[1]:
            best = (pair, count)
    return best


def longest_match(
    text: str, vocabulary: Collection[Token], max_len: int = MAX_MATCH_LEN
) -> list[Token]:
    """
    Segment ``text`` greedily into the longest vocabulary entries.

    At each position candidates of length ``min(remaining, max_len)`` down to 1
    are tried and the first one present in ``vocabulary`` is emitted. When no
    candidate matches, the raw character is emitted on its own, so this never
    fails; the fallback token need not be part of ``vocabulary``.

    Args:
        text (str): Text to segment.
        vocabulary (Collection[Token]): Known tokens, used for membership tests only.
        max_len (int): Longest candidate substring to try.

    Returns:
        list[Token]: Token strings whose concatenation equals ``text``.
    """
    toks: list[Token] = []
    i = 0
    n = len(text)

    while i < n:
        for length in range(min(n - i, max_len), 0, -1):
            candidate = text[i : i + length]
            if candidate in vocabulary:
                toks.append(candidate)
                i += length
                break
        else:
            # unseen character: literal one-character token
            toks.append(text[i])
            i += 1

    return toks
