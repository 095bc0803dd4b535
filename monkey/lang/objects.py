"""Runtime values of the Monkey language. Every value is an Object with a kind tag and an inspect() rendering.

Integer, Boolean and String values can be used as hash keys. Their HashKey is derived from their kind and their
primitive value, so two separately built Integer(1) objects are the same key while Integer(1) and Boolean(true)
are not.
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

from monkey.pure.ast import BlockStatement, Identifier, Node


class ObjectKind(enum.Enum):
    INTEGER = "integer"
    BOOLEAN = "boolean"
    NULL = "null"
    STRING = "string"
    ARRAY = "array"
    HASH = "hash"
    FUNCTION = "function"
    BUILTIN = "builtin"
    RETURN_VALUE = "return_value"
    ERROR = "error"
    QUOTE = "quote"
    MACRO = "macro"

    def __str__(self):
        return self.value


class HashKey(NamedTuple):
    kind: ObjectKind
    value: Any


class Object(ABC):
    """Superclass of every runtime value."""
    kind: ObjectKind

    @abstractmethod
    def inspect(self):
        """Returns the text shown for this value by puts and the REPL."""

    def __str__(self):
        return self.inspect()


class Hashable(Object):
    """Object that can be used as a hash key."""
    value: Any

    def hash_key(self):
        return HashKey(self.kind, self.value)


@dataclass(frozen=True)
class Integer(Hashable):
    value: int
    kind = ObjectKind.INTEGER

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Hashable):
    value: bool
    kind = ObjectKind.BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Hashable):
    value: str
    kind = ObjectKind.STRING

    def inspect(self):
        return self.value


@dataclass(frozen=True)
class Null(Object):
    kind = ObjectKind.NULL

    def inspect(self):
        return "null"


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


def native_bool(value):
    """Returns the shared Boolean for a Python bool."""
    return TRUE if value else FALSE


@dataclass
class Array(Object):
    elements: List[Object] = field(default_factory=list)
    kind = ObjectKind.ARRAY

    def inspect(self):
        return f"[{', '.join(element.inspect() for element in self.elements)}]"


@dataclass
class HashPair:
    key: Hashable
    value: Object


@dataclass
class Hash(Object):
    """Mapping of HashKey to the original key Object and its value, in insertion order."""
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)
    kind = ObjectKind.HASH

    def get(self, key):
        """Returns the value stored under key, or None if it is missing."""
        pair = self.pairs.get(key.hash_key())
        return None if pair is None else pair.value

    def set(self, key, value):
        self.pairs[key.hash_key()] = HashPair(key, value)

    def inspect(self):
        pairs = ", ".join(f"{pair.key.inspect()}: {pair.value.inspect()}" for pair in self.pairs.values())
        return f"{{{pairs}}}"


def _render_callable(keyword, parameters, body):
    return f"{keyword}({', '.join(param.as_string() for param in parameters)}) {body.as_string()}"


@dataclass(eq=False)
class Function(Object):
    """Closure: env is the Environment the function literal was evaluated in, shared rather than copied."""
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: Any
    kind = ObjectKind.FUNCTION

    def inspect(self):
        return _render_callable("fn", self.parameters, self.body)


@dataclass(eq=False)
class Builtin(Object):
    """Native function. arity is the exact number of arguments it takes, or None if it takes any number."""
    name: str
    fn: Callable[..., Object]
    arity: Optional[int] = None
    kind = ObjectKind.BUILTIN

    def inspect(self):
        return "builtin function"


@dataclass(frozen=True)
class ReturnValue(Object):
    """Wraps the value of a return statement while it unwinds to the enclosing function call."""
    value: Object
    kind = ObjectKind.RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    """Runtime error. Travels through evaluation like any other value, stopping every block and argument list it
    reaches.
    """
    message: str
    kind = ObjectKind.ERROR

    def inspect(self):
        return f"Error: {self.message}"


@dataclass(frozen=True)
class Quote(Object):
    """Unevaluated AST fragment produced by quote()."""
    node: Node
    kind = ObjectKind.QUOTE

    def inspect(self):
        return f"QUOTE({self.node.as_string()})"


@dataclass(eq=False)
class Macro(Object):
    """Like Function, but called at expansion time with quoted arguments, and its body must evaluate to a Quote."""
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: Any
    kind = ObjectKind.MACRO

    def inspect(self):
        return _render_callable("macro", self.parameters, self.body)


def is_error(obj):
    return isinstance(obj, Error)


def is_truthy(obj):
    """null and false are falsy, everything else (0 and "" included) is truthy."""
    if isinstance(obj, Null):
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True
