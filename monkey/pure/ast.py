"""Abstract syntax tree of the Monkey language.

Every node keeps the Token it was built from (token_literal, for diagnostics) and renders itself back to source with
as_string. Rendering is precise enough that a rendered Program reparses into the same tree:

```
-a * b                      ->  ((-a) * b)
a * [1, 2][b * c]           ->  (a * ([1, 2][(b * c)]))
if (x) { y } else { z }     ->  if (x) { y } else { z }
let f = fn(x) { x; }; f(1)  ->  let f = fn(x) { x }; f(1)
```

Nodes are immutable. The only way to "change" a tree is modify, which rebuilds it bottom-up.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from monkey.pure.token import Token


class Node(ABC):
    """Superclass of every AST node."""
    token: Token

    def token_literal(self):
        return self.token.literal

    @abstractmethod
    def as_string(self):
        """Renders this node back to Monkey source."""

    def __str__(self):
        return self.as_string()


class Statement(Node):
    """Superclass of the nodes that appear in a Program or a block."""


class Expression(Node):
    """Superclass of the nodes that produce a value."""


def _join_statements(statements):
    """Joins rendered statements so that consecutive expression statements stay separate when reparsed."""
    rendered = [statement.as_string() for statement in statements]
    for idx, text in enumerate(rendered[:-1]):
        if not text.endswith(";"):
            rendered[idx] = text + ";"
    return " ".join(rendered)


def _join(nodes):
    return ", ".join(node.as_string() for node in nodes)


@dataclass
class Program(Node):
    """Root of every tree the parser produces: the top-level statements in source order. statements is a plain list
    because macro definitions are removed from it in place (see lang/macro.py).
    """
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self):
        return self.statements[0].token_literal() if self.statements else ""

    def as_string(self):
        return _join_statements(self.statements)


@dataclass(frozen=True)
class Identifier(Expression):
    token: Token
    value: str

    def as_string(self):
        return self.value


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def as_string(self):
        return f"{self.token_literal()} {self.name.as_string()} = {self.value.as_string()};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    value: Optional[Expression] = None

    def as_string(self):
        if self.value is None:
            return f"{self.token_literal()};"
        return f"{self.token_literal()} {self.value.as_string()};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token  # first token of the expression
    expression: Expression

    def as_string(self):
        return self.expression.as_string()


@dataclass(frozen=True)
class BlockStatement(Statement):
    token: Token  # the { token
    statements: Tuple[Statement, ...] = ()

    def as_string(self):
        if not self.statements:
            return "{ }"
        return f"{{ {_join_statements(self.statements)} }}"


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    token: Token
    value: int

    def as_string(self):
        return self.token_literal()


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    token: Token
    value: bool

    def as_string(self):
        return self.token_literal()


@dataclass(frozen=True)
class StringLiteral(Expression):
    token: Token
    value: str

    def as_string(self):
        return f"\"{self.value}\""


@dataclass(frozen=True)
class PrefixExpression(Expression):
    token: Token
    operator: str  # "!" or "-"
    operand: Expression

    def as_string(self):
        return f"({self.operator}{self.operand.as_string()})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    token: Token
    left: Expression
    operator: str
    right: Expression

    def as_string(self):
        return f"({self.left.as_string()} {self.operator} {self.right.as_string()})"


@dataclass(frozen=True)
class IfExpression(Expression):
    token: Token
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def as_string(self):
        result = f"if ({self.condition.as_string()}) {self.consequence.as_string()}"
        if self.alternative is not None:
            result += f" else {self.alternative.as_string()}"
        return result


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def as_string(self):
        return f"{self.token_literal()}({_join(self.parameters)}) {self.body.as_string()}"


@dataclass(frozen=True)
class MacroLiteral(Expression):
    token: Token
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def as_string(self):
        return f"{self.token_literal()}({_join(self.parameters)}) {self.body.as_string()}"


@dataclass(frozen=True)
class CallExpression(Expression):
    token: Token  # the ( token
    callee: Expression  # Identifier or FunctionLiteral
    arguments: Tuple[Expression, ...] = ()

    def as_string(self):
        return f"{self.callee.as_string()}({_join(self.arguments)})"


@dataclass(frozen=True)
class ArrayLiteral(Expression):
    token: Token
    elements: Tuple[Expression, ...] = ()

    def as_string(self):
        return f"[{_join(self.elements)}]"


@dataclass(frozen=True)
class IndexExpression(Expression):
    token: Token  # the [ token
    collection: Expression
    index: Expression

    def as_string(self):
        return f"({self.collection.as_string()}[{self.index.as_string()}])"


@dataclass(frozen=True)
class HashLiteral(Expression):
    token: Token
    pairs: Tuple[Tuple[Expression, Expression], ...] = ()  # in declaration order

    def as_string(self):
        pairs = ", ".join(f"{key.as_string()}: {value.as_string()}" for key, value in self.pairs)
        return f"{{{pairs}}}"


LEAVES = (Identifier, IntegerLiteral, BooleanLiteral, StringLiteral)


def modify(node, modifier):
    """Rebuilds node bottom-up: every child is modified first, then modifier is applied to the rebuilt node and its
    result returned. modifier receives leaves too. node itself is left untouched.
    """

    def _modify(child):
        return modify(child, modifier)

    def _modify_all(children):
        return tuple(_modify(child) for child in children)

    if isinstance(node, Program):
        modified = Program([_modify(statement) for statement in node.statements])

    elif isinstance(node, BlockStatement):
        modified = replace(node, statements=_modify_all(node.statements))

    elif isinstance(node, ExpressionStatement):
        modified = replace(node, expression=_modify(node.expression))

    elif isinstance(node, LetStatement):
        modified = replace(node, name=_modify(node.name), value=_modify(node.value))

    elif isinstance(node, ReturnStatement):
        modified = node if node.value is None else replace(node, value=_modify(node.value))

    elif isinstance(node, PrefixExpression):
        modified = replace(node, operand=_modify(node.operand))

    elif isinstance(node, InfixExpression):
        modified = replace(node, left=_modify(node.left), right=_modify(node.right))

    elif isinstance(node, IndexExpression):
        modified = replace(node, collection=_modify(node.collection), index=_modify(node.index))

    elif isinstance(node, IfExpression):
        alternative = None if node.alternative is None else _modify(node.alternative)
        modified = replace(node, condition=_modify(node.condition), consequence=_modify(node.consequence),
                           alternative=alternative)

    elif isinstance(node, (FunctionLiteral, MacroLiteral)):
        modified = replace(node, parameters=_modify_all(node.parameters), body=_modify(node.body))

    elif isinstance(node, CallExpression):
        modified = replace(node, callee=_modify(node.callee), arguments=_modify_all(node.arguments))

    elif isinstance(node, ArrayLiteral):
        modified = replace(node, elements=_modify_all(node.elements))

    elif isinstance(node, HashLiteral):
        modified = replace(node, pairs=tuple((_modify(key), _modify(value)) for key, value in node.pairs))

    elif isinstance(node, LEAVES):
        modified = node

    else:
        raise TypeError(f"cannot modify node of type '{type(node).__name__}'")

    return modifier(modified)
