"""Character-level tokenizer implementation."""

import logging
from typing_extensions import override

from .base import Tokenizer
from .._vocab import distinct_symbols
from ..types import TokenId

log = logging.getLogger(__name__)


class CharTokenizer(Tokenizer):
    """
    Tokenizer with one vocabulary entry per distinct corpus character.

    Encoding and decoding are direct lookups, which makes this the exact,
    lossless baseline that subword tokenization is compared against.
    """

    TOKENIZER_TYPE = "char"

    def __init__(self, corpus: str) -> None:
        """
        Build the vocabulary from the distinct characters of ``corpus``.

        Ids follow first-occurrence order. An empty corpus gives an empty
        vocabulary, after which encoding any non-empty text fails.
        """
        super().__init__(distinct_symbols(corpus))
        log.info(f"built character vocabulary with {self.vocab_size()} tokens")

    @override
    def encode(self, text: str) -> list[TokenId]:
        """
        Encode text one character at a time.

        :param text: Text to encode.
        :returns: One token id per character of ``text``.
        :raises UnknownSymbolError: On the first character absent from the vocabulary.
        """
        return [self._lookup(c, pos) for pos, c in enumerate(text)]
