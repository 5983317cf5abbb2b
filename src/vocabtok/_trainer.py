"""Standalone subword vocabulary construction."""

from dataclasses import dataclass
import logging

from ._vocab import distinct_symbols, most_frequent_pair, pair_freqs
from .types import Token

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PairPromotion:
    """One adjacent character pair added to the vocabulary."""

    pair: Token
    count: int


@dataclass
class VocabTrainingResult:
    """Results from one vocabulary construction run."""

    tokens: list[Token]
    promotions: list[PairPromotion]
    n_promotions_requested: int

    @property
    def n_promotions_completed(self) -> int:
        return len(self.promotions)


def train_subword_vocab(
    corpus: str, max_vocab_size: int, verbose: bool = False
) -> VocabTrainingResult:
    """
    Grow a vocabulary from the character alphabet of ``corpus``.

    Starting from the distinct characters of the corpus, the most frequent
    adjacent character pair that is not yet in the vocabulary and occurs more
    than once is appended, until ``max_vocab_size`` entries exist or no pair
    qualifies. Pairs are always taken from the raw corpus characters, never
    from a corpus re-segmented with earlier promotions, so every promoted
    entry is exactly two characters long.

    :param corpus: Training text.
    :param max_vocab_size: Cap on the number of vocabulary entries.
    :param verbose: Log each promotion at INFO level when ``True``.
    :returns: Tokens in id order plus the promotion history.
    """
    tokens = distinct_symbols(corpus)
    vocab = set(tokens)
    n_requested = max(0, max_vocab_size - len(tokens))

    # the corpus never changes between iterations so neither do its pair counts
    freqs = pair_freqs(corpus)
    log.debug(f"counted {len(freqs)} distinct pairs over {len(corpus)} characters")

    promotions: list[PairPromotion] = []
    while len(tokens) < max_vocab_size:
        best = most_frequent_pair(freqs, vocab)
        if best is None:
            break

        pair, count = best
        tokens.append(pair)
        vocab.add(pair)
        promotions.append(PairPromotion(pair, count))

        if verbose:
            log.info(
                "promotion %d/%d: %r (count %d) -> %d",
                len(promotions),
                n_requested,
                pair,
                count,
                len(tokens) - 1,
            )

    return VocabTrainingResult(
        tokens=tokens,
        promotions=promotions,
        n_promotions_requested=n_requested,
    )


__all__ = ["PairPromotion", "VocabTrainingResult", "train_subword_vocab"]
