"""quote/unquote: the primitives macros are built from.

`quote(expr)` evaluates to a Quote of expr's AST instead of expr's value. Inside it, `unquote(expr)` is evaluated
right away and its value is spliced back into the quoted AST. Unquote calls are resolved bottom-up, like every
modify, so nested quotes resolve innermost first.
"""

from monkey.lang.error import MacroError
from monkey.lang.objects import Boolean, Integer, Quote, is_error
from monkey.pure.ast import BooleanLiteral, CallExpression, IntegerLiteral, modify
from monkey.pure.token import Token, TokenKind

QUOTE = "quote"
UNQUOTE = "unquote"


def is_unquote_call(node):
    return isinstance(node, CallExpression) and node.callee.token_literal() == UNQUOTE and len(node.arguments) == 1


def to_node(obj):
    """Converts the value of an unquote call back into an AST node."""
    if isinstance(obj, Integer):
        return IntegerLiteral(Token(TokenKind.INT, str(obj.value)), obj.value)
    if isinstance(obj, Boolean):
        kind = TokenKind.TRUE if obj.value else TokenKind.FALSE
        return BooleanLiteral(Token(kind, obj.inspect()), obj.value)
    if isinstance(obj, Quote):
        return obj.node
    raise MacroError("cannot convert {} to an AST node: {}", (str(obj.kind), obj.inspect()))


def quote(node, env, evaluate):
    """Resolves every unquote call in node against env, using evaluate(node, env) to evaluate their arguments, and
    wraps the result in a Quote. If an unquoted expression evaluates to an Error, the first such Error is returned
    instead of the Quote.
    """
    errors = []

    def unquote(node):
        if not is_unquote_call(node) or errors:
            return node

        value = evaluate(node.arguments[0], env)
        if is_error(value):
            errors.append(value)
            return node
        return to_node(value)

    quoted = modify(node, unquote)
    return errors[0] if errors else Quote(quoted)
