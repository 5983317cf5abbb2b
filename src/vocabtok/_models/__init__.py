"""Tokenizer implementations for vocabulary-driven text processing."""

from .base import Tokenizer
from .char import CharTokenizer
from .subword import SubwordTokenizer


__all__ = ["Tokenizer", "CharTokenizer", "SubwordTokenizer"]
