"""Tree-walking evaluator for the Monkey language: maps AST nodes to runtime Objects.

Runtime errors are Error objects, not exceptions. Every recursive evaluation is checked with is_error before its
result is used, so the first error stops the enclosing block, program or argument list and is returned as is.
ReturnValue works the same way, except that it stops at the nearest enclosing function call (or the program).

Exceptions are only raised for interpreter bugs (InternalError) and macro misuse inside quote (MacroError).
"""

import sys

from monkey.lang.builtins import BUILTINS
from monkey.lang.config import Config
from monkey.lang.environment import Environment
from monkey.lang.error import InternalError
from monkey.lang.objects import (
    NULL,
    Array,
    Boolean,
    Builtin,
    Error,
    Function,
    Hash,
    Hashable,
    Integer,
    ObjectKind,
    ReturnValue,
    String,
    is_error,
    is_truthy,
    native_bool,
)
from monkey.lang.quote import QUOTE, quote
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
from monkey.pure.parser import INT64_MAX, INT64_MIN


def wrong_arguments(got, want):
    return Error(f"wrong number of arguments. got={got}, want={want}")


class Evaluator:
    """Evaluates nodes against Environments. Keeps count of nested function calls so that runaway recursion fails
    with an Error once max_call_depth is reached.

    Each Monkey call costs several host frames, so the host recursion limit is raised to recursion_limit (never
    lowered) to let max_call_depth be reached before Python gives up.
    """

    def __init__(self, max_call_depth=Config.max_call_depth, recursion_limit=Config.recursion_limit):
        self.max_call_depth = max_call_depth
        self.call_depth = 0
        if sys.getrecursionlimit() < recursion_limit:
            sys.setrecursionlimit(recursion_limit)

        self._dispatch = {
            Program: self._eval_program,
            BlockStatement: self._eval_block_statement,
            ExpressionStatement: self._eval_expression_statement,
            ReturnStatement: self._eval_return_statement,
            LetStatement: self._eval_let_statement,
            IntegerLiteral: self._eval_integer_literal,
            BooleanLiteral: self._eval_boolean_literal,
            StringLiteral: self._eval_string_literal,
            PrefixExpression: self._eval_prefix_expression,
            InfixExpression: self._eval_infix_expression,
            IfExpression: self._eval_if_expression,
            Identifier: self._eval_identifier,
            FunctionLiteral: self._eval_function_literal,
            MacroLiteral: self._eval_macro_literal,
            CallExpression: self._eval_call_expression,
            ArrayLiteral: self._eval_array_literal,
            IndexExpression: self._eval_index_expression,
            HashLiteral: self._eval_hash_literal,
        }

    def eval(self, node, env):
        """Evaluates node in env and returns the resulting Object."""
        evaluate = self._dispatch.get(type(node))
        if evaluate is None:
            raise InternalError("evaluation of {} not implemented", type(node).__name__)
        return evaluate(node, env)

    def _eval_expressions(self, nodes, env):
        """Evaluates nodes left to right. Returns the list of values, or the first Error encountered."""
        values = []
        for node in nodes:
            value = self.eval(node, env)
            if is_error(value):
                return value
            values.append(value)
        return values

    # Statements

    def _eval_program(self, node, env):
        result = NULL
        for statement in node.statements:
            result = self.eval(statement, env)
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    def _eval_block_statement(self, node, env):
        result = NULL
        for statement in node.statements:
            result = self.eval(statement, env)
            if result.kind in (ObjectKind.RETURN_VALUE, ObjectKind.ERROR):
                return result  # unwrapped by the enclosing call or program
        return result

    def _eval_expression_statement(self, node, env):
        return self.eval(node.expression, env)

    def _eval_return_statement(self, node, env):
        if node.value is None:
            return ReturnValue(NULL)

        value = self.eval(node.value, env)
        if is_error(value):
            return value
        return ReturnValue(value)

    def _eval_let_statement(self, node, env):
        value = self.eval(node.value, env)
        if is_error(value):
            return value
        return env.set(node.name.value, value)

    # Literals

    def _eval_integer_literal(self, node, env):
        return Integer(node.value)

    def _eval_boolean_literal(self, node, env):
        return native_bool(node.value)

    def _eval_string_literal(self, node, env):
        return String(node.value)

    def _eval_function_literal(self, node, env):
        return Function(node.parameters, node.body, env)

    def _eval_macro_literal(self, node, env):
        return Error("macro literals can only be bound by top-level let statements")

    def _eval_array_literal(self, node, env):
        elements = self._eval_expressions(node.elements, env)
        if is_error(elements):
            return elements
        return Array(elements)

    def _eval_hash_literal(self, node, env):
        result = Hash()
        for key_node, value_node in node.pairs:
            key = self.eval(key_node, env)
            if is_error(key):
                return key
            if not isinstance(key, Hashable):
                return Error(f"unusable as hash key: {key.kind}")

            value = self.eval(value_node, env)
            if is_error(value):
                return value

            result.set(key, value)
        return result

    # Operators

    def _eval_prefix_expression(self, node, env):
        operand = self.eval(node.operand, env)
        if is_error(operand):
            return operand

        if node.operator == "!":
            return native_bool(not is_truthy(operand))
        if node.operator == "-":
            if operand.kind != ObjectKind.INTEGER:
                return Error(f"unknown operator: -{operand.kind}")
            return _checked_integer(-operand.value, f"-{operand.value}")
        return Error(f"unknown operator: {node.operator}{operand.kind}")

    def _eval_infix_expression(self, node, env):
        left = self.eval(node.left, env)
        if is_error(left):
            return left

        right = self.eval(node.right, env)
        if is_error(right):
            return right

        return eval_infix(node.operator, left, right)

    # Control flow

    def _eval_if_expression(self, node, env):
        condition = self.eval(node.condition, env)
        if is_error(condition):
            return condition

        if is_truthy(condition):
            return self.eval(node.consequence, env)
        if node.alternative is not None:
            return self.eval(node.alternative, env)
        return NULL

    def _eval_identifier(self, node, env):
        value = env.get(node.value)
        if value is not None:
            return value

        builtin = BUILTINS.get(node.value)
        if builtin is not None:
            return builtin
        return Error(f"identifier {node.value} not found!")

    def _eval_call_expression(self, node, env):
        if node.callee.token_literal() == QUOTE:
            if len(node.arguments) != 1:
                return wrong_arguments(len(node.arguments), 1)
            return quote(node.arguments[0], env, self.eval)

        function = self.eval(node.callee, env)
        if is_error(function):
            return function

        args = self._eval_expressions(node.arguments, env)
        if is_error(args):
            return args

        return self.apply_function(function, args)

    def apply_function(self, function, args):
        """Calls a Function or Builtin with already evaluated args."""
        if isinstance(function, Function):
            if len(args) != len(function.parameters):
                return wrong_arguments(len(args), len(function.parameters))
            if self.call_depth >= self.max_call_depth:
                return Error(f"maximum call depth exceeded: {self.max_call_depth}")

            env = Environment.enclosed(function.env, [param.value for param in function.parameters], args)
            self.call_depth += 1
            try:
                result = self.eval(function.body, env)
            finally:
                self.call_depth -= 1

            return result.value if isinstance(result, ReturnValue) else result

        if isinstance(function, Builtin):
            if function.arity is not None and len(args) != function.arity:
                return wrong_arguments(len(args), function.arity)
            return function.fn(*args)

        return Error(f"not a function: {function.kind}")

    def _eval_index_expression(self, node, env):
        collection = self.eval(node.collection, env)
        if is_error(collection):
            return collection

        index = self.eval(node.index, env)
        if is_error(index):
            return index

        if collection.kind == ObjectKind.ARRAY and index.kind == ObjectKind.INTEGER:
            if index.value < 0 or index.value >= len(collection.elements):
                return NULL
            return collection.elements[index.value]

        if collection.kind == ObjectKind.HASH:
            if not isinstance(index, Hashable):
                return Error(f"unusable as hash key: {index.kind}")
            value = collection.get(index)
            return NULL if value is None else value

        return Error(f"index operator not supported: {collection.kind}")


def _checked_integer(value, expr):
    if not INT64_MIN <= value <= INT64_MAX:
        return Error(f"integer overflow: {expr}")
    return Integer(value)


def _eval_integer_infix(operator, left, right):
    expr = f"{left} {operator} {right}"
    if operator == "+":
        return _checked_integer(left + right, expr)
    if operator == "-":
        return _checked_integer(left - right, expr)
    if operator == "*":
        return _checked_integer(left * right, expr)
    if operator == "/":
        if right == 0:
            return Error("division by zero")
        quotient = abs(left) // abs(right)  # truncates toward zero
        return _checked_integer(quotient if (left < 0) == (right < 0) else -quotient, expr)
    if operator == "<":
        return native_bool(left < right)
    if operator == ">":
        return native_bool(left > right)
    if operator == "==":
        return native_bool(left == right)
    if operator == "!=":
        return native_bool(left != right)
    return Error(f"unknown operator: {ObjectKind.INTEGER} {operator} {ObjectKind.INTEGER}")


def eval_infix(operator, left, right):
    """Applies a binary operator to two evaluated operands."""
    if left.kind != right.kind:
        return Error(f"type mismatch: {left.kind} {operator} {right.kind}")

    if left.kind == ObjectKind.INTEGER:
        return _eval_integer_infix(operator, left.value, right.value)

    if left.kind == ObjectKind.STRING:
        if operator == "+":
            return String(left.value + right.value)
        return Error(f"unknown operator: {left.kind} {operator} {right.kind}")

    if operator in ("==", "!="):
        # booleans compare by value, every other kind by identity
        equal = left.value == right.value if isinstance(left, Boolean) else left is right
        return native_bool(equal == (operator == "=="))

    return Error(f"unknown operator: {left.kind} {operator} {right.kind}")


def evaluate(node, env):
    """Evaluates node in env with a default Evaluator."""
    return Evaluator().eval(node, env)
