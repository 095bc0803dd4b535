"""Syntax of the Monkey language: tokens, lexer, AST and parser."""
