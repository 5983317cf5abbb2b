"""
Token counts from a production BPE encoding, for comparison with the
tokenizers trained here.

Uses the pretrained encodings shipped with `tiktoken`. ``o200k_base`` is the
encoding of GPT-4o class models.
"""

import logging
from typing import Final

import tiktoken

from .errors import ReferenceEncodingError

DEFAULT_REFERENCE_ENCODING: Final[str] = "o200k_base"

log = logging.getLogger(__name__)


def get_reference_encoding(name: str = DEFAULT_REFERENCE_ENCODING) -> tiktoken.Encoding:
    """
    Return the tiktoken encoding called ``name``.

    :raises ReferenceEncodingError: If tiktoken does not know the encoding.
    """
    try:
        return tiktoken.get_encoding(name)
    except ValueError as e:
        raise ReferenceEncodingError("unknown reference encoding", encoding=name) from e


def count_reference_tokens(text: str, encoding: str = DEFAULT_REFERENCE_ENCODING) -> int:
    """Return the number of tokens ``encoding`` splits ``text`` into."""
    enc = get_reference_encoding(encoding)
    # special-token markers in text are counted as plain text
    n_tokens = len(enc.encode(text, disallowed_special=()))
    log.debug(f"{encoding}: {len(text)} chars -> {n_tokens} tokens")
    return n_tokens


def reference_round_trip(text: str, encoding: str = DEFAULT_REFERENCE_ENCODING) -> str:
    """Encode then decode ``text`` with ``encoding``, to check it is lossless."""
    enc = get_reference_encoding(encoding)
    return enc.decode(enc.encode(text, disallowed_special=()))
