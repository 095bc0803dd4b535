import io
import unittest
from contextlib import redirect_stdout

from monkey.lang.environment import Environment
from monkey.lang.error import InternalError, MacroError
from monkey.lang.evaluator import Evaluator
from monkey.lang.macro import define_macros, expand_macros, is_macro_definition, macro_for
from monkey.lang.objects import Macro, String
from monkey.lang.quote import to_node
from monkey.pure.parser import parse


def parse_ok(source):
    program, errors = parse(source)
    assert not errors, errors
    return program


def expand(source):
    env = Environment()
    program = parse_ok(source)
    define_macros(program, env)
    return expand_macros(program, env)


class DefineMacrosTestCase(unittest.TestCase):

    def test_define_macros(self):
        program = parse_ok("""
let number = 1;
let function = fn(x, y) { x + y };
let mymacro = macro(x, y) { x + y; };
""")
        env = Environment()

        self.assertEqual(["mymacro"], define_macros(program, env))
        self.assertEqual(2, len(program.statements))
        self.assertIsNone(env.get("number"))
        self.assertIsNone(env.get("function"))

        macro = env.get("mymacro")
        self.assertIsInstance(macro, Macro)
        self.assertEqual(["x", "y"], [param.value for param in macro.parameters])
        self.assertEqual("{ (x + y) }", macro.body.as_string())
        self.assertEqual("macro(x, y) { (x + y) }", macro.inspect())
        self.assertIs(env, macro.env)

    def test_only_top_level(self):
        program = parse_ok("let f = fn() { let m = macro() { quote(1) }; m }; macro(x) { x }")
        env = Environment()

        self.assertEqual([], define_macros(program, env))
        self.assertEqual(2, len(program.statements))
        self.assertEqual({}, env.store)

    def test_is_macro_definition(self):
        should_fail = ["let a = 1;", "let f = fn(x) { x };", "macro(x) { x };", "a;"]
        for case in should_fail:
            self.assertFalse(is_macro_definition(parse_ok(case).statements[0]), case)

        should_pass = ["let m = macro(x) { x };", "let m = macro() { quote(1) }"]
        for case in should_pass:
            self.assertTrue(is_macro_definition(parse_ok(case).statements[0]), case)


class ExpandMacrosTestCase(unittest.TestCase):

    def test_expand_macros(self):
        cases = {
            "let infixExpression = macro() { quote(1 + 2); }; infixExpression();": "(1 + 2)",
            "let reverse = macro(a, b) { quote(unquote(b) - unquote(a)); }; reverse(2 + 2, 10 - 5);":
                "(10 - 5) - (2 + 2)",
            """
let unless = macro(condition, consequence, alternative) {
    quote(if (!(unquote(condition))) {
        unquote(consequence);
    } else {
        unquote(alternative);
    });
};

unless(10 > 5, puts("not greater"), puts("greater"));
""": "if (!(10 > 5)) { puts(\"not greater\") } else { puts(\"greater\") }",
            "let m = macro(x) { return quote(unquote(x) * 2); }; m(3)": "3 * 2",
            "let twice = macro(x) { quote(unquote(x) + unquote(x)) }; let f = fn(y) { twice(y) };":
                "let f = fn(y) { (y + y) };",
            "let add = fn(a, b) { a + b }; add(1, 2)": "let add = fn(a, b) { a + b }; add(1, 2)",
            "let m = macro() { quote(1) }; [m(), m()]": "[1, 1]",
        }
        for case, expected in cases.items():
            self.assertEqual(parse_ok(expected).as_string(), expand(case).as_string(), case)

    def test_expansion_leaves_original(self):
        env = Environment()
        program = parse_ok("let m = macro() { quote(1) }; m() + 1")
        define_macros(program, env)

        expanded = expand_macros(program, env)
        self.assertEqual("(m() + 1)", program.as_string())
        self.assertEqual("(1 + 1)", expanded.as_string())

    def test_evaluate_expansion(self):
        output = io.StringIO()
        with redirect_stdout(output):
            program = expand("""
let unless = macro(condition, consequence, alternative) {
    quote(if (!(unquote(condition))) { unquote(consequence); } else { unquote(alternative); });
};
unless(10 > 5, puts("not greater"), puts("greater"));
""")
            Evaluator().eval(program, Environment())

        self.assertEqual("greater\n", output.getvalue())

    def test_macros_across_programs(self):
        env = Environment()
        first = parse_ok("let double = macro(x) { quote(unquote(x) * 2) };")
        define_macros(first, env)
        self.assertEqual([], first.statements)

        second = parse_ok("double(1 + 1)")
        define_macros(second, env)
        self.assertEqual("((1 + 1) * 2)", expand_macros(second, env).as_string())

    def test_macro_for(self):
        env = Environment()
        program = parse_ok("let m = macro() { quote(1) }; m(); f(); fn() { 1 }()")
        define_macros(program, env)

        calls = [statement.expression for statement in program.statements]
        self.assertIs(env.get("m"), macro_for(calls[0], env))
        self.assertIsNone(macro_for(calls[1], env))
        self.assertIsNone(macro_for(calls[2], env))
        self.assertIsNone(macro_for(calls[0].callee, env))

    def test_errors(self):
        should_raise = {
            "let m = macro(x) { quote(unquote(x)) }; m()": MacroError,
            "let m = macro(x) { quote(unquote(x)) }; m(1, 2)": MacroError,
            "let m = macro() { quote(unquote(\"a\")) }; m()": MacroError,
            "let m = macro() { quote(unquote([1])) }; m()": MacroError,
            "let m = macro() { 1 }; m()": InternalError,
            "let m = macro(x) { x + 1 }; m(1)": InternalError,
        }
        for case, error in should_raise.items():
            self.assertRaises(error, expand, case)

        try:
            expand("let m = macro(x) { 1 }; m(1, 2)")
        except MacroError as e:
            self.assertEqual(["m", "2", "1"], e.exprs)
        else:
            self.fail("MacroError not raised")


class ToNodeTestCase(unittest.TestCase):

    def test_to_node(self):
        self.assertRaises(MacroError, to_node, String("a"))

        program = parse_ok("quote(unquote(1 < 2))")
        result = Evaluator().eval(program, Environment())
        self.assertEqual("true", result.node.as_string())
        self.assertTrue(result.node.value)


if __name__ == '__main__':
    unittest.main()
