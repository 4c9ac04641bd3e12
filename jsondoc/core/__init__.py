"""
jsondoc core: tokenizer, parser and renderer.
"""

from .engine import Parser, parse, parse_tokens
from .renderer import Renderer, render
from .tokenizer import Lexer, Position, Token, TokenType, tokenize

__all__ = [
    'parse', 'parse_tokens', 'Parser',
    'render', 'Renderer',
    'tokenize', 'Lexer', 'Token', 'TokenType', 'Position'
]
