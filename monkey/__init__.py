"""Monkey language interpreter.

Basic program flow:
    1. Lexer: turns source text into Tokens, one at a time (see monkey/pure/lexical.py)
    2. Parser: builds a Program (AST) from the Tokens with a Pratt parser, collecting diagnostics instead of stopping
       on the first malformed statement (see monkey/pure/parser.py)
    3. Macro expansion: `let name = macro(...) {...}` definitions are hoisted into a macro environment, then every
       macro call is replaced by the AST its body quotes (see monkey/lang/macro.py)
    4. Evaluation: tree-walking evaluation of the expanded Program into runtime Objects (see monkey/lang/evaluator.py)

The `pure` package holds everything about syntax, the `lang` package everything about running it.
"""
