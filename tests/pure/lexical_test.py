import unittest

from monkey.pure.lexical import Lexer
from monkey.pure.token import Token, TokenKind


def kinds_and_literals(source):
    return [(token.kind, token.literal) for token in Lexer(source)]


class TokenTestCase(unittest.TestCase):

    def test_lookup_identifier(self):
        cases = {
            "fn": TokenKind.FUNCTION,
            "let": TokenKind.LET,
            "true": TokenKind.TRUE,
            "false": TokenKind.FALSE,
            "if": TokenKind.IF,
            "else": TokenKind.ELSE,
            "return": TokenKind.RETURN,
            "macro": TokenKind.MACRO,
            "fun": TokenKind.IDENT,
            "lets": TokenKind.IDENT,
            "_x": TokenKind.IDENT,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Token.lookup_identifier(case), case)

    def test_str(self):
        self.assertEqual("==", str(TokenKind.EQ))
        self.assertEqual("IDENT", str(TokenKind.IDENT))
        self.assertEqual("end-of-input", str(Token(TokenKind.EOF, "")))
        self.assertEqual("x", str(Token(TokenKind.IDENT, "x")))


class LexerTestCase(unittest.TestCase):

    def test_next_token(self):
        source = """let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
!-/*5;
5 < 10 > 5;

if (5 < 10) {
    return true;
} else {
    return false;
}

10 == 10;
10 != 9;
"foobar"
"foo bar"
[1, 2];
{"foo": "bar"}
macro(x, y) { x + y; };
"""
        expected = [
            (TokenKind.LET, "let"), (TokenKind.IDENT, "five"), (TokenKind.ASSIGN, "="), (TokenKind.INT, "5"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.LET, "let"), (TokenKind.IDENT, "ten"), (TokenKind.ASSIGN, "="), (TokenKind.INT, "10"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.LET, "let"), (TokenKind.IDENT, "add"), (TokenKind.ASSIGN, "="), (TokenKind.FUNCTION, "fn"),
            (TokenKind.LPAREN, "("), (TokenKind.IDENT, "x"), (TokenKind.COMMA, ","), (TokenKind.IDENT, "y"),
            (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"), (TokenKind.IDENT, "x"), (TokenKind.PLUS, "+"),
            (TokenKind.IDENT, "y"), (TokenKind.SEMICOLON, ";"), (TokenKind.RBRACE, "}"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.LET, "let"), (TokenKind.IDENT, "result"), (TokenKind.ASSIGN, "="), (TokenKind.IDENT, "add"),
            (TokenKind.LPAREN, "("), (TokenKind.IDENT, "five"), (TokenKind.COMMA, ","), (TokenKind.IDENT, "ten"),
            (TokenKind.RPAREN, ")"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.BANG, "!"), (TokenKind.MINUS, "-"), (TokenKind.SLASH, "/"), (TokenKind.ASTERISK, "*"),
            (TokenKind.INT, "5"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "5"), (TokenKind.LT, "<"), (TokenKind.INT, "10"), (TokenKind.GT, ">"),
            (TokenKind.INT, "5"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.IF, "if"), (TokenKind.LPAREN, "("), (TokenKind.INT, "5"), (TokenKind.LT, "<"),
            (TokenKind.INT, "10"), (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.TRUE, "true"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"), (TokenKind.ELSE, "else"), (TokenKind.LBRACE, "{"),
            (TokenKind.RETURN, "return"), (TokenKind.FALSE, "false"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.RBRACE, "}"),
            (TokenKind.INT, "10"), (TokenKind.EQ, "=="), (TokenKind.INT, "10"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.INT, "10"), (TokenKind.NOT_EQ, "!="), (TokenKind.INT, "9"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.STRING, "foobar"),
            (TokenKind.STRING, "foo bar"),
            (TokenKind.LBRACKET, "["), (TokenKind.INT, "1"), (TokenKind.COMMA, ","), (TokenKind.INT, "2"),
            (TokenKind.RBRACKET, "]"), (TokenKind.SEMICOLON, ";"),
            (TokenKind.LBRACE, "{"), (TokenKind.STRING, "foo"), (TokenKind.COLON, ":"), (TokenKind.STRING, "bar"),
            (TokenKind.RBRACE, "}"),
            (TokenKind.MACRO, "macro"), (TokenKind.LPAREN, "("), (TokenKind.IDENT, "x"), (TokenKind.COMMA, ","),
            (TokenKind.IDENT, "y"), (TokenKind.RPAREN, ")"), (TokenKind.LBRACE, "{"), (TokenKind.IDENT, "x"),
            (TokenKind.PLUS, "+"), (TokenKind.IDENT, "y"), (TokenKind.SEMICOLON, ";"), (TokenKind.RBRACE, "}"),
            (TokenKind.SEMICOLON, ";"),
            (TokenKind.EOF, ""),
        ]

        lexer = Lexer(source)
        for expected_kind, expected_literal in expected:
            token = lexer.next_token()
            self.assertEqual(expected_kind, token.kind, expected_literal)
            self.assertEqual(expected_literal, token.literal)

    def test_edge_cases(self):
        cases = {
            "": [(TokenKind.EOF, "")],
            "   \n\t ": [(TokenKind.EOF, "")],
            "=": [(TokenKind.ASSIGN, "="), (TokenKind.EOF, "")],
            "!": [(TokenKind.BANG, "!"), (TokenKind.EOF, "")],
            "a==b": [(TokenKind.IDENT, "a"), (TokenKind.EQ, "=="), (TokenKind.IDENT, "b"), (TokenKind.EOF, "")],
            "= =": [(TokenKind.ASSIGN, "="), (TokenKind.ASSIGN, "="), (TokenKind.EOF, "")],
            "@": [(TokenKind.ILLEGAL, "@"), (TokenKind.EOF, "")],
            "5.5": [(TokenKind.INT, "5"), (TokenKind.ILLEGAL, "."), (TokenKind.INT, "5"), (TokenKind.EOF, "")],
            "\"abc": [(TokenKind.STRING, "abc"), (TokenKind.EOF, "")],
            "\"\"": [(TokenKind.STRING, ""), (TokenKind.EOF, "")],
            "\"a\\\"": [(TokenKind.STRING, "a\\"), (TokenKind.EOF, "")],
            "foo_bar1 2x": [(TokenKind.IDENT, "foo_bar1"), (TokenKind.INT, "2"), (TokenKind.IDENT, "x"),
                            (TokenKind.EOF, "")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds_and_literals(case), case)

    def test_eof_is_repeated(self):
        lexer = Lexer("x")
        self.assertEqual(TokenKind.IDENT, lexer.next_token().kind)
        for __ in range(3):
            self.assertEqual(Token(TokenKind.EOF, ""), lexer.next_token())

    def test_iter_restarts(self):
        lexer = Lexer("let x")
        lexer.next_token()

        expected = [(TokenKind.LET, "let"), (TokenKind.IDENT, "x"), (TokenKind.EOF, "")]
        self.assertEqual(expected, [(token.kind, token.literal) for token in lexer])
        self.assertEqual(expected, [(token.kind, token.literal) for token in lexer])


if __name__ == '__main__':
    unittest.main()
