"""Builtin functions of the Monkey language. The evaluator checks arity before calling them, so each function only
validates the kinds of its arguments. Misuse yields an Error object, never an exception.
"""

from monkey.lang.objects import NULL, Array, Builtin, Error, Integer, ObjectKind


def _unsupported(name, arg):
    return Error(f"argument to `{name}` not supported, got {arg.kind}")


def _not_array(name, arg):
    return Error(f"argument to `{name}` must be array, got {arg.kind}")


def monkey_len(arg):
    """Character count of a string or element count of an array."""
    if arg.kind == ObjectKind.STRING:
        return Integer(len(arg.value))
    if arg.kind == ObjectKind.ARRAY:
        return Integer(len(arg.elements))
    return _unsupported("len", arg)


def monkey_first(arg):
    if arg.kind != ObjectKind.ARRAY:
        return _not_array("first", arg)
    return arg.elements[0] if arg.elements else NULL


def monkey_last(arg):
    if arg.kind != ObjectKind.ARRAY:
        return _not_array("last", arg)
    return arg.elements[-1] if arg.elements else NULL


def monkey_rest(arg):
    """New array of every element but the first, or null for an empty array."""
    if arg.kind != ObjectKind.ARRAY:
        return _not_array("rest", arg)
    return Array(list(arg.elements[1:])) if arg.elements else NULL


def monkey_push(arg, value):
    """New array with value appended; arg itself is left unchanged."""
    if arg.kind != ObjectKind.ARRAY:
        return _not_array("push", arg)
    return Array(list(arg.elements) + [value])


def monkey_puts(*args):
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS = {
    "len": Builtin("len", monkey_len, 1),
    "first": Builtin("first", monkey_first, 1),
    "last": Builtin("last", monkey_last, 1),
    "rest": Builtin("rest", monkey_rest, 1),
    "push": Builtin("push", monkey_push, 2),
    "puts": Builtin("puts", monkey_puts),
}
