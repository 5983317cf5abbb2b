"""VocabTok: character and subword tokenization built from a corpus."""

from ._models.base import Tokenizer
from ._models.char import CharTokenizer
from ._models.subword import DEFAULT_MAX_VOCAB_SIZE, SubwordTokenizer
from ._trainer import PairPromotion
from ._vocab import MAX_MATCH_LEN
from .errors import (
    ModelLoadError,
    ReferenceEncodingError,
    UnknownSymbolError,
    UnknownTokenIdError,
    VocabTokError,
    VocabularyError,
)
from .factory import from_pretrained, get_tokenizer, list_tokenizers

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("vocabtok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "CharTokenizer",
    "SubwordTokenizer",
    "PairPromotion",
    "DEFAULT_MAX_VOCAB_SIZE",
    "MAX_MATCH_LEN",
    "VocabTokError",
    "VocabularyError",
    "UnknownSymbolError",
    "UnknownTokenIdError",
    "ModelLoadError",
    "ReferenceEncodingError",
    "get_tokenizer",
    "from_pretrained",
    "list_tokenizers",
]
