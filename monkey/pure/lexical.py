"""Lexical analysis for the Monkey language: turns source text into Tokens.

The lexer is lazy: nothing is scanned until next_token is called, and each call scans exactly one token. Only one
character of lookahead is ever needed (to tell `=` from `==` and `!` from `!=`).

```
<ident>   ::= (<letter> | "_") (<letter> | <digit> | "_")*   ; keywords are looked up in token.KEYWORDS
<int>     ::= <digit>+                                       ; no sign, no floats (unary "-" is a parser matter)
<string>  ::= '"' <char>* '"'                                ; no escapes; an unterminated string runs to the end
```
"""

from monkey.pure.token import SYMBOLS, Token, TokenKind


class Lexer:
    """Scans one Token at a time from source. Once the end of the input is reached, every further call to next_token
    returns an EOF token again.
    """
    EOF_LITERAL = ""

    def __init__(self, source):
        self.source = source
        self.position = 0  # index of the character under examination

    def __iter__(self):
        """Yields every Token of source, EOF included, starting over from the beginning of the input."""
        lexer = Lexer(self.source)
        while True:
            token = lexer.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    @staticmethod
    def is_letter(char):
        return char.isalpha() or char == "_"

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    def _current_character(self):
        if self.position >= len(self.source):
            return Lexer.EOF_LITERAL
        return self.source[self.position]

    def _peek_character(self):
        if self.position + 1 >= len(self.source):
            return Lexer.EOF_LITERAL
        return self.source[self.position + 1]

    def _skip_whitespace(self):
        while self._current_character() and self._current_character().isspace():
            self.position += 1

    def _read_while(self, predicate):
        """Advances past the longest run of characters satisfying predicate and returns it."""
        start = self.position
        while self._current_character() and predicate(self._current_character()):
            self.position += 1
        return self.source[start:self.position]

    def _read_string(self):
        self.position += 1  # opening quote
        literal = self._read_while(lambda char: char != "\"")
        if self._current_character() == "\"":
            self.position += 1  # closing quote
        return literal

    def next_token(self):
        """Scans and returns the next Token."""
        self._skip_whitespace()
        char = self._current_character()

        if char == Lexer.EOF_LITERAL:
            return Token(TokenKind.EOF, Lexer.EOF_LITERAL)

        if char == "\"":
            return Token(TokenKind.STRING, self._read_string())

        if Lexer.is_letter(char):
            literal = self._read_while(lambda c: Lexer.is_letter(c) or Lexer.is_digit(c))
            return Token(Token.lookup_identifier(literal), literal)

        if Lexer.is_digit(char):
            return Token(TokenKind.INT, self._read_while(Lexer.is_digit))

        double = char + self._peek_character()
        if len(double) == 2 and double in SYMBOLS:
            self.position += 2
            return Token(SYMBOLS[double], double)

        self.position += 1
        return Token(SYMBOLS.get(char, TokenKind.ILLEGAL), char)
