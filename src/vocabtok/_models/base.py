"""
Base tokenizer interface for vocabulary-driven tokenization implementations.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from types import MappingProxyType
from typing import Final, Self

from .._sanitise import render_token
from ..errors import (
    ModelLoadError,
    UnknownSymbolError,
    UnknownTokenIdError,
    VocabularyError,
)
from ..types import Encoding, Token, TokenId, Vocabulary


PREFIX: Final[str] = "VocabTok"
try:
    _version = version("vocabtok")
except PackageNotFoundError:
    _version = "dev"


VERSION: Final[str] = _version
MODEL_SUFFIX: Final[str] = ".model"
VOCAB_SUFFIX: Final[str] = ".vocab"

log = logging.getLogger(__name__)


class Tokenizer(ABC):
    """
    Abstract base class for vocabulary-driven tokenizers.

    Owns the token <-> id mappings, decoding, and serialization. Mappings are
    built once from an ordered, duplicate-free token sequence and never change
    afterwards; ids are dense and follow that order.
    """

    TOKENIZER_TYPE: str = "base"

    def __init__(self, tokens: Iterable[Token]) -> None:
        """Assign dense ids ``0..n-1`` to ``tokens`` in the given order."""
        super().__init__()
        # token -> id
        self._token_to_id: Encoding = {}
        # id -> token
        self._vocab: Vocabulary = {}
        for tok in tokens:
            if tok in self._token_to_id:
                raise VocabularyError("duplicate token in vocabulary", symbol=tok)
            idx = len(self._vocab)
            self._token_to_id[tok] = idx
            self._vocab[idx] = tok

    @abstractmethod
    def encode(self, text: str) -> list[TokenId]:
        """Encode text into a sequence of token ids."""
        ...

    def decode(self, ids: Sequence[TokenId]) -> str:
        """
        Decode a sequence of token ids back into text.

        :param ids: Token ids to decode.
        :returns: Concatenation of the tokens the ids stand for.
        :raises UnknownTokenIdError: On the first id that was never assigned.
        """
        parts: list[Token] = []
        for idx in ids:
            # 1.0 and True hash like 1 but are not token ids
            if isinstance(idx, bool) or not isinstance(idx, int):
                raise UnknownTokenIdError(token_id=idx)
            try:
                parts.append(self._vocab[idx])
            except KeyError:
                raise UnknownTokenIdError(token_id=idx) from None
        return "".join(parts)

    def encode_batch(self, texts: Iterable[str]) -> list[list[TokenId]]:
        """Encode multiple texts in order."""
        return [self.encode(text) for text in texts]

    def decode_batch(self, batch: Iterable[Sequence[TokenId]]) -> list[str]:
        """Decode multiple id sequences in order."""
        return [self.decode(ids) for ids in batch]

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self._vocab)

    @property
    def token_to_id(self) -> MappingProxyType[Token, TokenId]:
        """Read-only forward mapping, token -> id."""
        return MappingProxyType(self._token_to_id)

    @property
    def vocab(self) -> MappingProxyType[TokenId, Token]:
        """Read-only reverse mapping, id -> token."""
        return MappingProxyType(self._vocab)

    def _lookup(self, tok: Token, position: int) -> TokenId:
        """Map one token to its id, failing fast when it is unknown."""
        try:
            return self._token_to_id[tok]
        except KeyError:
            raise UnknownSymbolError(symbol=tok, position=position) from None

    # serialization
    # ---------------------------------------------------------------------------

    def _max_vocab_size(self) -> int:
        """Size cap written to the model header; 0 means uncapped."""
        return 0

    def _token_count(self, tok: Token) -> int:
        """Corpus count recorded next to a token in the model file."""
        return 0

    def save(self, file_prefix: str) -> None:
        """
        Save tokenizer state to disk.

        Creates two files: a .model file that :meth:`load` reads back and a
        .vocab file with human-readable token representations.

        :param file_prefix: Path prefix for output files.
        """
        log.info(f"saving tokenizer to {file_prefix}")
        self._save_model(file_prefix)
        self._save_vocab(file_prefix)
        log.info("tokenizer saved successfully")

    def _save_model(self, file_prefix: str) -> None:
        """Persist the ordered vocabulary to a .model file."""
        model_path = Path(file_prefix).with_suffix(MODEL_SUFFIX)
        # create directory if does not exist
        model_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving {len(self._vocab)} tokens to {model_path}")

        with model_path.open("w", encoding="utf-8", newline="\n") as f:
            # header: version, tokenizer type, size cap
            f.write(f"{PREFIX} {VERSION}\n")
            f.write(f"type {self.TOKENIZER_TYPE}\n")
            f.write(f"max_vocab {self._max_vocab_size()}\n")
            f.write("---\n")
            f.write(f"{len(self._vocab)}\n")
            # body: count followed by the token's code points, in id order
            # so that whitespace and newlines inside tokens survive
            for idx in range(len(self._vocab)):
                tok = self._vocab[idx]
                cps = " ".join(str(ord(c)) for c in tok)
                f.write(f"{self._token_count(tok)} {cps}\n")
            f.write("---\n")

    def _save_vocab(self, file_prefix: str) -> None:
        """Persist human-readable token representations to a .vocab file."""
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for idx, tok in self._vocab.items():
                if len(tok) > 1:
                    # promoted pair: show the characters it was built from
                    parts = "".join(f"[{render_token(c)}]" for c in tok)
                    f.write(f"[{idx}] {parts} -> {render_token(tok)}\n")
                else:
                    f.write(f"[{idx}] {render_token(tok)}\n")

    @classmethod
    def load(cls, model_filename: str) -> Self:
        """
        Restore a tokenizer from a .model file written by :meth:`save`.

        :param model_filename: Path to the .model file.
        :raises ModelLoadError: If the file is missing, malformed, or was
            written by another version or tokenizer type.
        """
        return cls._restore(read_model(model_filename), model_filename)

    @classmethod
    def _restore(cls, state: "ModelState", model_filename: str) -> Self:
        """Check the saved tokenizer type and build an instance from ``state``."""
        if state.tok_type != cls.TOKENIZER_TYPE:
            raise ModelLoadError(
                "tokenizer type mismatch",
                model_path=model_filename,
                type_mismatch=(state.tok_type, [cls.TOKENIZER_TYPE]),
            )

        tokenizer = cls._from_state(state)
        log.info(
            f"model loaded successfully: {tokenizer.vocab_size()} tokens from {model_filename}"
        )
        return tokenizer

    @classmethod
    def _from_state(cls, state: "ModelState") -> Self:
        """Build an instance from saved state without a training corpus."""
        tokenizer = cls.__new__(cls)
        Tokenizer.__init__(tokenizer, state.tokens)
        return tokenizer


@dataclass
class ModelState:
    """Parsed contents of a .model file."""

    tok_type: str
    max_vocab_size: int
    tokens: list[Token]
    counts: list[int]


def _read_int(raw: str, what: str, path: Path) -> int:
    try:
        value = int(raw)
        if value < 0:
            raise ValueError()
    except ValueError:
        raise ModelLoadError(f"invalid {what}: {raw!r}", model_path=str(path))
    return value


def read_model(model_filename: str) -> ModelState:
    """
    Parse a .model file.

    :param model_filename: Path to the .model file.
    :raises ModelLoadError: If the file does not exist, the extension is not
        .model, the version does not match, or any section is malformed.
    """
    path = Path(model_filename)

    if not path.exists():
        raise ModelLoadError("model filepath does not exist", model_path=str(path))

    if not path.suffix == MODEL_SUFFIX:
        raise ModelLoadError("expected .model file", model_path=str(path))

    log.info(f"loading model from {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            # verify version match
            header = f.readline().strip().split(" ")
            if len(header) != 2 or header[0] != PREFIX:
                raise ModelLoadError("not a vocabtok model file", model_path=str(path))
            if header[1] != VERSION:
                raise ModelLoadError(
                    "model version mismatch",
                    model_path=str(path),
                    version_mismatch=(header[1], VERSION),
                )

            tok_type = f.readline().strip()
            if not tok_type.startswith("type "):
                raise ModelLoadError(
                    f"expected tokenizer type got {tok_type!r}", model_path=str(path)
                )
            tok_type = tok_type[5:]

            max_vocab = f.readline().strip()
            if not max_vocab.startswith("max_vocab "):
                raise ModelLoadError(
                    f"expected max_vocab got {max_vocab!r}", model_path=str(path)
                )
            max_vocab_size = _read_int(max_vocab[10:], "max_vocab", path)

            start_marker = f.readline().strip()
            if start_marker != "---":
                raise ModelLoadError(
                    f"start sequence marker missing: (expected ---) (got {start_marker})",
                    model_path=str(path),
                )

            n_tokens = _read_int(f.readline().strip(), "token count", path)
            log.debug(f"loading {n_tokens} tokens")

            tokens: list[Token] = []
            counts: list[int] = []
            seen: set[Token] = set()
            for _ in range(n_tokens):
                fields = f.readline().split()
                # count plus at least one code point
                if len(fields) < 2:
                    raise ModelLoadError(
                        f"invalid token line after {len(tokens)} tokens",
                        model_path=str(path),
                    )
                try:
                    count = int(fields[0])
                    tok = "".join(chr(int(cp)) for cp in fields[1:])
                except (ValueError, OverflowError):
                    raise ModelLoadError(
                        f"invalid token line: {' '.join(fields)}", model_path=str(path)
                    )
                if tok in seen:
                    raise ModelLoadError(
                        f"duplicate token: {tok!r}", model_path=str(path)
                    )
                seen.add(tok)
                tokens.append(tok)
                counts.append(count)

            end_marker = f.readline().strip()
            if end_marker != "---":
                raise ModelLoadError(
                    f"end sequence marker missing: (expected ---) (got {end_marker})",
                    model_path=str(path),
                )
    except UnicodeDecodeError as e:
        raise ModelLoadError("model file is not valid UTF-8", model_path=str(path)) from e

    return ModelState(tok_type, max_vocab_size, tokens, counts)
