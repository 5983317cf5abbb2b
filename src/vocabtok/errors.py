"""Custom exception hierarchy for vocabtok tokenization errors."""

from .types import Token, TokenId


class VocabTokError(Exception):
    """Base exception for all vocabtok errors."""


class VocabularyError(VocabTokError):
    """Raised when vocabulary configuration or lookup fails."""

    def __init__(
        self,
        message: str,
        *,
        max_vocab_size: object | None = None,
        symbol: Token | None = None,
        position: int | None = None,
        token_id: TokenId | None = None,
    ) -> None:
        """Initialize with optional details that get appended to the message."""
        extra = " "
        # construction: invalid size cap
        if max_vocab_size is not None:
            extra += f"(max vocab size: {max_vocab_size!r}) "
        # encoding: symbol not in vocab
        if symbol is not None:
            extra += f"(symbol: {symbol!r}) "
        if position is not None:
            extra += f"(position: {position}) "
        # decoding: id never assigned
        if token_id is not None:
            extra += f"(invalid token id: {token_id}) "
        super().__init__(message + extra)
        self.max_vocab_size = max_vocab_size
        self.symbol = symbol
        self.position = position
        self.token_id = token_id


class UnknownSymbolError(VocabularyError):
    """Raised when encoding meets a symbol that has no token id."""

    def __init__(
        self,
        message: str = "symbol not found in vocabulary",
        *,
        symbol: Token,
        position: int | None = None,
    ) -> None:
        """
        Initialize with the symbol that could not be mapped.

        :param message: Error message.
        :param symbol: The character (or fallback token) absent from the vocabulary.
        :param position: Offset of ``symbol`` in the text being encoded.
        """
        super().__init__(message, symbol=symbol, position=position)


class UnknownTokenIdError(VocabularyError):
    """Raised when decoding meets an id that was never assigned."""

    def __init__(
        self, message: str = "token id not found in vocabulary", *, token_id: TokenId
    ) -> None:
        super().__init__(message, token_id=token_id)


class ModelLoadError(VocabTokError):
    """Raised when loading a tokenizer model fails."""

    def __init__(
        self,
        message: str,
        *,
        model_path: str | None = None,
        version_mismatch: tuple[str, str] | None = None,
        type_mismatch: tuple[str, list[str]] | None = None,
    ) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        if version_mismatch is not None:
            extra += f"(expected: {version_mismatch[1]}) (got {version_mismatch[0]}) "
        if type_mismatch is not None:
            extra += f"(expected one of: {type_mismatch[1]}) (got {type_mismatch[0]}) "
        super().__init__(message + extra)
        self.model_path = model_path
        self.version_mismatch = version_mismatch
        self.type_mismatch = type_mismatch


class ReferenceEncodingError(VocabTokError):
    """Raised when a reference encoding cannot be loaded."""

    def __init__(self, message: str, *, encoding: str) -> None:
        super().__init__(f"{message} (encoding: {encoding}) ")
        self.encoding = encoding
