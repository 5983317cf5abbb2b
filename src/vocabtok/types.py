"""
Core types for tokenization.
"""

from typing import TypeAlias

Token: TypeAlias = str
TokenId: TypeAlias = int
Encoding: TypeAlias = dict[Token, TokenId]
Vocabulary: TypeAlias = dict[TokenId, Token]
