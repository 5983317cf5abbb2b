"""Factory functions for creating tokenizers."""

from typing import Final, Literal, overload

from ._models.base import Tokenizer, read_model
from ._models.char import CharTokenizer
from ._models.subword import SubwordTokenizer
from .errors import ModelLoadError, VocabTokError


TokenizerKind = Literal["char", "subword"]

_TOKENIZER_REGISTRY: Final[dict[str, type[Tokenizer]]] = {
    "char": CharTokenizer,
    "subword": SubwordTokenizer,
}


def list_tokenizers() -> list[str]:
    """Return names of all available tokenizer kinds."""
    return list(_TOKENIZER_REGISTRY.keys())


@overload
def get_tokenizer(kind: Literal["char"], corpus: str) -> CharTokenizer: ...


@overload
def get_tokenizer(
    kind: Literal["subword"], corpus: str, **kwargs: object
) -> SubwordTokenizer: ...


def get_tokenizer(kind: TokenizerKind, corpus: str, **kwargs) -> Tokenizer:
    """
    Create a tokenizer of the given kind trained on ``corpus``.

    :param kind: "char" or "subword".
    :param corpus: Training text.
    :param kwargs: Extra constructor arguments, e.g. ``max_vocab_size``.
    :return: Tokenizer instance.
    :raises VocabTokError: If ``kind`` is unknown.

    .. code-block:: python

        tokenizer = get_tokenizer("subword", "the cat sat on the mat", max_vocab_size=50)
    """
    if kind not in _TOKENIZER_REGISTRY:
        raise VocabTokError(
            f"unknown tokenizer kind: {kind!r} (available: {list_tokenizers()})"
        )
    return _TOKENIZER_REGISTRY[kind](corpus, **kwargs)


def from_pretrained(model_path: str) -> Tokenizer:
    """
    Load a saved tokenizer from disk.

    Automatically detects tokenizer type from the model file header and
    loads the appropriate implementation.

    :param model_path: Path to the .model file.
    :return: Loaded tokenizer instance with the saved vocabulary.
    :raises ModelLoadError: If file doesn't exist, has wrong extension, or contains
                            unknown tokenizer type.

    .. code-block:: python

        tokenizer = from_pretrained("path/to/model.model")
        ids = tokenizer.encode("cat sat mat")
    """
    # one read serves both type detection and restoring the vocabulary
    state = read_model(model_path)
    tok_type = state.tok_type

    if tok_type not in _TOKENIZER_REGISTRY:
        raise ModelLoadError(
            "unknown tokenizer type in model file",
            model_path=model_path,
            type_mismatch=(tok_type, list_tokenizers()),
        )

    return _TOKENIZER_REGISTRY[tok_type]._restore(state, model_path)
