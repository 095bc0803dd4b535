"""Macro expansion, run between parsing and evaluation.

```
let unless = macro(cond, a, b) { quote(if (!(unquote(cond))) { unquote(a) } else { unquote(b) }) };
unless(10 > 5, puts("no"), puts("yes"));
```

1. define_macros moves every top-level `let <name> = macro(...) {...}` out of the program and into a macro
   environment, as a Macro object.
2. expand_macros replaces every call to a name bound to a Macro with the AST the macro body evaluates to. The
   arguments are not evaluated: each one is bound to the macro's parameter as a Quote of its AST. In the example the
   call becomes `if (!(10 > 5)) { puts("no") } else { puts("yes") }`.
"""

import logging

from monkey.lang.environment import Environment
from monkey.lang.error import InternalError, MacroError
from monkey.lang.evaluator import Evaluator
from monkey.lang.objects import Macro, Quote, ReturnValue
from monkey.pure.ast import CallExpression, Identifier, LetStatement, MacroLiteral, modify

logger = logging.getLogger(__name__)


def is_macro_definition(statement):
    return isinstance(statement, LetStatement) and isinstance(statement.value, MacroLiteral)


def define_macros(program, env):
    """Removes the top-level macro definitions from program (in place) and binds them in env. Returns the names of
    the macros defined, in source order.
    """
    defined = []
    statements = []
    for statement in program.statements:
        if not is_macro_definition(statement):
            statements.append(statement)
            continue

        literal = statement.value
        env.set(statement.name.value, Macro(literal.parameters, literal.body, env))
        defined.append(statement.name.value)
        logger.debug("defined macro %s", statement.as_string())

    program.statements[:] = statements
    return defined


def macro_for(node, env):
    """Returns the Macro called by node, or None if node isn't a call to a macro bound in env."""
    if not isinstance(node, CallExpression) or not isinstance(node.callee, Identifier):
        return None

    obj = env.get(node.callee.value)
    return obj if isinstance(obj, Macro) else None


def expand_macros(program, env, evaluator=None):
    """Returns a copy of program (any node) in which every macro call is replaced by its expansion."""
    if evaluator is None:
        evaluator = Evaluator()

    def expand(node):
        macro = macro_for(node, env)
        if macro is None:
            return node

        if len(node.arguments) != len(macro.parameters):
            msg = "wrong number of arguments to macro {}. got={}, want={}"
            raise MacroError(msg, (node.callee.value, str(len(node.arguments)), str(len(macro.parameters))))

        args = [Quote(arg) for arg in node.arguments]
        eval_env = Environment.enclosed(macro.env, [param.value for param in macro.parameters], args)
        evaluated = evaluator.eval(macro.body, eval_env)
        if isinstance(evaluated, ReturnValue):
            evaluated = evaluated.value

        if not isinstance(evaluated, Quote):
            msg = "macro {} must return an AST node (a quote), got {}"
            raise InternalError(msg, (node.callee.value, evaluated.inspect()))

        logger.debug("expanded %s into %s", node.as_string(), evaluated.node.as_string())
        return evaluated.node

    return modify(program, expand)
