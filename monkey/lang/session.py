"""Session control for the Monkey interpreter, either in command-line mode or file interpretation mode.

A session keeps two environments alive between inputs: one for values and one for macros, so that macros defined
in one REPL line can be called in the next while never being visible as values.
"""

import logging

from monkey.lang.config import Config
from monkey.lang.environment import Environment
from monkey.lang.error import GenericException, ParseError
from monkey.lang.evaluator import Evaluator
from monkey.lang.macro import define_macros, expand_macros, is_macro_definition
from monkey.pure.lexical import Lexer
from monkey.pure.parser import parse
from monkey.pure.token import TokenKind

logger = logging.getLogger(__name__)

OPENING = (TokenKind.LPAREN, TokenKind.LBRACE, TokenKind.LBRACKET)
CLOSING = (TokenKind.RPAREN, TokenKind.RBRACE, TokenKind.RBRACKET)


class Session:
    """Governs a Monkey session: parses and expands inputs with add, evaluates them with run."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, config=None, cmd_line=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.config = config if config is not None else Config()

        self.env = Environment()        # global value bindings
        self.macro_env = Environment()  # macros, kept apart from values
        self.evaluator = Evaluator(self.config.max_call_depth, self.config.recursion_limit)

        self.to_exec = {}  # dict of line num: expanded Programs to evaluate
        self.results = []  # Objects produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Returns line without trailing whitespace and whether it still has unclosed (, { or [, i.e. whether the
        next line should be added to it before it is run.
        """
        line = line.rstrip()

        balance = 0
        for token in Lexer(line):
            if token.kind in OPENING:
                balance += 1
            elif token.kind in CLOSING:
                balance -= 1

        return line, balance > 0

    def add(self, source, line_num):
        """Parses source, moves its macro definitions into the macro environment and expands its macro calls. The
        expanded program is evaluated by the next run. Raises ParseError if source could not be parsed, and leaves the
        macro environment as it was if expansion fails.
        """
        self.error_handler.register_line(self.path, source.strip(), line_num)  # in case error is raised

        program, diagnostics = parse(source)
        if diagnostics:
            raise ParseError(diagnostics)

        for statement in program.statements:
            if is_macro_definition(statement) and statement.name.value in self.macro_env:
                self.error_handler.warn("macro '{}' redefined", statement.name.value)

        committed = dict(self.macro_env.store)
        try:
            define_macros(program, self.macro_env)
            expanded = expand_macros(program, self.macro_env, self.evaluator)
        except Exception:
            self.macro_env.store = committed  # a line that fails to expand defines nothing
            raise

        if expanded.statements:
            self.to_exec[line_num] = expanded
        else:
            logger.debug("nothing to evaluate on line %s after macro expansion", line_num)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates the programs queued by add, in order, and appends their results to self.results."""
        for line_num, program in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, program.as_string(), line_num)

            try:
                result = self.evaluator.eval(program, self.env)
            finally:
                del self.to_exec[line_num]

            logger.debug("line %s evaluated to %s", line_num, result.inspect())
            self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
