"""Tokens produced by the Monkey lexer. Tokens carry no position information, so every diagnostic built from them
is positionless.
"""

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    # Meta
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"
    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"
    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="
    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    MACRO = "MACRO"

    def __str__(self):
        return self.value


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
    "macro": TokenKind.MACRO,
}

# single and double character operators/delimiters the lexer recognizes
SYMBOLS = {kind.value: kind for kind in TokenKind if not kind.value.isalpha()}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: str

    def __str__(self):
        if self.kind == TokenKind.EOF:
            return "end-of-input"
        return self.literal

    @staticmethod
    def lookup_identifier(identifier):
        """Returns the keyword kind of identifier, or IDENT if it isn't a keyword."""
        return KEYWORDS.get(identifier, TokenKind.IDENT)
