"""Parser for the Monkey language: recursive descent for statements, operator-precedence (Pratt) parsing for
expressions.

```
<program>     ::= <statement>*
<statement>   ::= <let_stmt> | <return_stmt> | <expr_stmt>
<let_stmt>    ::= "let" <ident> "=" <expression> [";"]
<return_stmt> ::= "return" [<expression>] [";"]
<expr_stmt>   ::= <expression> [";"]                 ; semicolons are optional after a bare expression
```

The parser never raises on malformed input. Every problem becomes a diagnostic string in Parser.errors and the
offending statement is dropped, so that all diagnostics of a program can be reported together.
"""

import enum

from monkey.pure.ast import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    MacroLiteral,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from monkey.pure.lexical import Lexer
from monkey.pure.token import TokenKind

INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


class Precedence(enum.IntEnum):
    LOWEST = enum.auto()
    EQUALS = enum.auto()       # == !=
    LESSGREATER = enum.auto()  # < >
    SUM = enum.auto()          # + -
    PRODUCT = enum.auto()      # * /
    PREFIX = enum.auto()       # -x !x
    CALL = enum.auto()         # f(x) a[x]


class Parser:
    """Two-token lookahead parser. current_token is the token under examination, peek_token the one after it."""
    PRECEDENCES = {
        TokenKind.EQ: Precedence.EQUALS,
        TokenKind.NOT_EQ: Precedence.EQUALS,
        TokenKind.LT: Precedence.LESSGREATER,
        TokenKind.GT: Precedence.LESSGREATER,
        TokenKind.PLUS: Precedence.SUM,
        TokenKind.MINUS: Precedence.SUM,
        TokenKind.ASTERISK: Precedence.PRODUCT,
        TokenKind.SLASH: Precedence.PRODUCT,
        TokenKind.LPAREN: Precedence.CALL,
        TokenKind.LBRACKET: Precedence.CALL,
    }

    def __init__(self, source):
        self.lexer = Lexer(source)
        self.errors = []

        self.current_token = None
        self.peek_token = None

        self.prefix_parse_functions = {}
        self.infix_parse_functions = {}

        self._register_prefix(TokenKind.IDENT, Parser.parse_identifier)
        self._register_prefix(TokenKind.INT, Parser.parse_integer_literal)
        self._register_prefix(TokenKind.STRING, Parser.parse_string_literal)
        self._register_prefix(TokenKind.TRUE, Parser.parse_boolean)
        self._register_prefix(TokenKind.FALSE, Parser.parse_boolean)
        self._register_prefix(TokenKind.BANG, Parser.parse_prefix_expression)
        self._register_prefix(TokenKind.MINUS, Parser.parse_prefix_expression)
        self._register_prefix(TokenKind.LPAREN, Parser.parse_grouped_expression)
        self._register_prefix(TokenKind.IF, Parser.parse_if_expression)
        self._register_prefix(TokenKind.FUNCTION, Parser.parse_function_literal)
        self._register_prefix(TokenKind.MACRO, Parser.parse_macro_literal)
        self._register_prefix(TokenKind.LBRACKET, Parser.parse_array_literal)
        self._register_prefix(TokenKind.LBRACE, Parser.parse_hash_literal)

        for kind in (TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
                     TokenKind.EQ, TokenKind.NOT_EQ, TokenKind.LT, TokenKind.GT):
            self._register_infix(kind, Parser.parse_infix_expression)
        self._register_infix(TokenKind.LPAREN, Parser.parse_call_expression)
        self._register_infix(TokenKind.LBRACKET, Parser.parse_index_expression)

        # read two tokens, so current_token and peek_token are both set
        self.next_token()
        self.next_token()

    def _register_prefix(self, kind, parse):
        self.prefix_parse_functions[kind] = parse

    def _register_infix(self, kind, parse):
        self.infix_parse_functions[kind] = parse

    def next_token(self):
        """Advances current_token and peek_token together."""
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _current_is(self, kind):
        return self.current_token.kind == kind

    def _peek_is(self, kind):
        return self.peek_token.kind == kind

    def _expect_peek(self, kind):
        """Advances if peek_token is of kind. Otherwise records a diagnostic and returns False."""
        if self._peek_is(kind):
            self.next_token()
            return True
        self.errors.append(f"expected next token to be {kind}, got {self.peek_token.kind} instead")
        return False

    def _peek_precedence(self):
        return Parser.PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def _current_precedence(self):
        return Parser.PRECEDENCES.get(self.current_token.kind, Precedence.LOWEST)

    def _skip_semicolon(self):
        if self._peek_is(TokenKind.SEMICOLON):
            self.next_token()

    def parse_program(self):
        """Parses the whole input. Statements that fail to parse are left out of the Program; see self.errors."""
        program = Program()
        while not self._current_is(TokenKind.EOF):
            statement = self.parse_statement()
            if statement is not None:
                program.statements.append(statement)
            self.next_token()
        return program

    # Statements

    def parse_statement(self):
        if self._current_is(TokenKind.LET):
            return self.parse_let_statement()
        if self._current_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        token = self.current_token
        if not self._expect_peek(TokenKind.IDENT):
            return None

        name = Identifier(self.current_token, self.current_token.literal)
        if not self._expect_peek(TokenKind.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.current_token
        if self._peek_is(TokenKind.SEMICOLON) or self._peek_is(TokenKind.RBRACE) or self._peek_is(TokenKind.EOF):
            self._skip_semicolon()
            return ReturnStatement(token)

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        self._skip_semicolon()
        return ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.current_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        self._skip_semicolon()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self):
        token = self.current_token
        statements = []
        self.next_token()

        while not self._current_is(TokenKind.RBRACE):
            if self._current_is(TokenKind.EOF):
                self.errors.append(f"expected next token to be {TokenKind.RBRACE}, got {TokenKind.EOF} instead")
                return None
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()

        return BlockStatement(token, tuple(statements))

    # Expressions

    def parse_expression(self, precedence):
        """Pratt loop: parses a prefix expression, then keeps folding it into infix expressions while the next
        operator binds tighter than precedence.
        """
        parse_prefix = self.prefix_parse_functions.get(self.current_token.kind)
        if parse_prefix is None:
            self.errors.append(f"no prefix parse function for {self.current_token.kind} found")
            return None

        left = parse_prefix(self)
        while left is not None and not self._peek_is(TokenKind.SEMICOLON) and precedence < self._peek_precedence():
            parse_infix = self.infix_parse_functions.get(self.peek_token.kind)
            if parse_infix is None:
                return left

            self.next_token()
            left = parse_infix(self, left)

        return left

    def parse_identifier(self):
        return Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self):
        literal = self.current_token.literal
        try:
            value = int(literal)
        except ValueError:
            value = None

        if value is None or not INT64_MIN <= value <= INT64_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return IntegerLiteral(self.current_token, value)

    def parse_string_literal(self):
        return StringLiteral(self.current_token, self.current_token.literal)

    def parse_boolean(self):
        return BooleanLiteral(self.current_token, self._current_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        token = self.current_token
        self.next_token()

        operand = self.parse_expression(Precedence.PREFIX)
        if operand is None:
            return None
        return PrefixExpression(token, token.literal, operand)

    def parse_infix_expression(self, left):
        token = self.current_token
        precedence = self._current_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenKind.RPAREN):
            return None
        return expression

    def parse_if_expression(self):
        token = self.current_token
        if not self._expect_peek(TokenKind.LPAREN):
            return None

        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self._expect_peek(TokenKind.RPAREN) or not self._expect_peek(TokenKind.LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self._peek_is(TokenKind.ELSE):
            self.next_token()
            if not self._expect_peek(TokenKind.LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(token, condition, consequence, alternative)

    def _parse_parameters_and_body(self):
        """Parses `(a, b) { body }` for function and macro literals. Returns None on failure."""
        if not self._expect_peek(TokenKind.LPAREN):
            return None

        parameters = self._parse_list(TokenKind.RPAREN, Parser._parse_parameter)
        if parameters is None or not self._expect_peek(TokenKind.LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return tuple(parameters), body

    def _parse_parameter(self):
        if not self._current_is(TokenKind.IDENT):
            self.errors.append(f"expected next token to be {TokenKind.IDENT}, got {self.current_token.kind} instead")
            return None
        return self.parse_identifier()

    def parse_function_literal(self):
        token = self.current_token
        parsed = self._parse_parameters_and_body()
        if parsed is None:
            return None
        return FunctionLiteral(token, *parsed)

    def parse_macro_literal(self):
        token = self.current_token
        parsed = self._parse_parameters_and_body()
        if parsed is None:
            return None
        return MacroLiteral(token, *parsed)

    def _parse_list(self, end, parse_item):
        """Parses comma-separated items up to and including the end token. current_token must be the opening
        delimiter. parse_item is called with current_token on the first token of each item. Returns None on failure.
        """
        items = []
        if self._peek_is(end):
            self.next_token()
            return items

        self.next_token()
        item = parse_item(self)
        if item is None:
            return None
        items.append(item)

        while self._peek_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            item = parse_item(self)
            if item is None:
                return None
            items.append(item)

        if not self._expect_peek(end):
            return None
        return items

    def _parse_list_expression(self):
        return self.parse_expression(Precedence.LOWEST)

    def _parse_pair(self):
        key = self.parse_expression(Precedence.LOWEST)
        if key is None or not self._expect_peek(TokenKind.COLON):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        return key, value

    def parse_call_expression(self, callee):
        token = self.current_token
        arguments = self._parse_list(TokenKind.RPAREN, Parser._parse_list_expression)
        if arguments is None:
            return None
        return CallExpression(token, callee, tuple(arguments))

    def parse_array_literal(self):
        token = self.current_token
        elements = self._parse_list(TokenKind.RBRACKET, Parser._parse_list_expression)
        if elements is None:
            return None
        return ArrayLiteral(token, tuple(elements))

    def parse_hash_literal(self):
        token = self.current_token
        pairs = self._parse_list(TokenKind.RBRACE, Parser._parse_pair)
        if pairs is None:
            return None
        return HashLiteral(token, tuple(pairs))

    def parse_index_expression(self, collection):
        token = self.current_token
        self.next_token()

        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self._expect_peek(TokenKind.RBRACKET):
            return None
        return IndexExpression(token, collection, index)


def parse(source):
    """Parses source into a Program. Returns the Program and the list of diagnostics (empty if source is valid)."""
    parser = Parser(source)
    program = parser.parse_program()
    return program, parser.errors
