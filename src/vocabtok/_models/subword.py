"""Frequency-driven subword tokenizer implementation."""

import logging
from collections.abc import Collection
from typing import Final, Self

from typing_extensions import override

from .base import ModelState, Tokenizer
from .._decorators import measure_time
from .._trainer import PairPromotion, VocabTrainingResult, train_subword_vocab
from .._vocab import MAX_MATCH_LEN, longest_match
from ..errors import VocabularyError
from ..types import Token, TokenId

DEFAULT_MAX_VOCAB_SIZE: Final[int] = 100

log = logging.getLogger(__name__)


class SubwordTokenizer(Tokenizer):
    """
    Simplified BPE-style tokenizer.

    The vocabulary starts as the corpus character alphabet and grows by
    promoting frequent adjacent character pairs. Text is segmented by
    longest-match-first lookup against that vocabulary, which typically
    produces fewer tokens than :class:`CharTokenizer`.
    """

    TOKENIZER_TYPE = "subword"

    def __init__(
        self,
        corpus: str,
        max_vocab_size: int = DEFAULT_MAX_VOCAB_SIZE,
        verbose: bool = False,
    ) -> None:
        """
        Learn a vocabulary from ``corpus``.

        :param corpus: Training text.
        :param max_vocab_size: Stop promoting pairs once the vocabulary has this
            many entries. The character alphabet is always kept in full, even
            when it alone is larger than the cap.
        :param verbose: Log each promoted pair when ``True``.
        :raises VocabularyError: If ``max_vocab_size`` is not a positive integer.
        """
        if (
            isinstance(max_vocab_size, bool)
            or not isinstance(max_vocab_size, int)
            or max_vocab_size < 1
        ):
            raise VocabularyError(
                "max vocab size must be a positive integer",
                max_vocab_size=max_vocab_size,
            )

        result = self._train(corpus, max_vocab_size, verbose)
        super().__init__(result.tokens)
        self.max_vocab_size = max_vocab_size
        self._promotions: tuple[PairPromotion, ...] = tuple(result.promotions)

        log.info(f"built subword vocabulary with {self.vocab_size()} tokens")

    @staticmethod
    @measure_time
    def _train(corpus: str, max_vocab_size: int, verbose: bool) -> VocabTrainingResult:
        result = train_subword_vocab(corpus, max_vocab_size, verbose=verbose)
        if result.n_promotions_completed < result.n_promotions_requested:
            log.warning(
                f"no more pairs to promote after {result.n_promotions_completed} promotions "
                f"(requested {result.n_promotions_requested}) stopping early"
            )
        return result

    @property
    def promotions(self) -> tuple[PairPromotion, ...]:
        """Promoted pairs in promotion order, with the corpus count of each."""
        return self._promotions

    def get_vocabulary(self) -> frozenset[Token]:
        """Return a read-only snapshot of the learned vocabulary."""
        return frozenset(self._token_to_id)

    def tokenize_with_vocabulary(
        self, text: str, vocabulary: Collection[Token] | None = None
    ) -> list[Token]:
        """
        Split ``text`` into token strings, longest match first.

        Candidates of up to ``MAX_MATCH_LEN`` characters are tried at each
        position. Characters matching nothing become literal one-character
        tokens, so this never fails.

        :param text: Text to segment.
        :param vocabulary: Tokens to match against; defaults to the learned vocabulary.
        """
        if vocabulary is None:
            vocabulary = self._token_to_id
        return longest_match(text, vocabulary, MAX_MATCH_LEN)

    @override
    def encode(self, text: str) -> list[TokenId]:
        """
        Encode text into token ids.

        The segmentation step tolerates unseen characters but the id lookup
        does not, so text containing a character absent from the training
        corpus fails here.

        :param text: Text to encode.
        :returns: Token ids of the longest-match segmentation.
        :raises UnknownSymbolError: On the first token that has no id.
        """
        ids: list[TokenId] = []
        pos = 0
        for tok in self.tokenize_with_vocabulary(text):
            ids.append(self._lookup(tok, pos))
            pos += len(tok)
        return ids

    @override
    def _max_vocab_size(self) -> int:
        return self.max_vocab_size

    @override
    def _token_count(self, tok: Token) -> int:
        for promo in self._promotions:
            if promo.pair == tok:
                return promo.count
        return 0

    @override
    @classmethod
    def _from_state(cls, state: ModelState) -> Self:
        tokenizer = super()._from_state(state)
        tokenizer.max_vocab_size = state.max_vocab_size
        tokenizer._promotions = tuple(
            PairPromotion(tok, count)
            for tok, count in zip(state.tokens, state.counts, strict=True)
            if len(tok) > 1
        )
        return tokenizer
