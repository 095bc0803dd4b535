"""Error handling for the Monkey interpreter. Runtime errors of Monkey programs are ordinary Error objects (see
objects.py) and never reach this module. What does reach it is raised as a GenericException: parser diagnostics,
misuse of the macro system, and internal errors. If another type of error makes it all the way to ErrorHandler, it
is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be reported by ErrorHandler. `{}` slots in msg are filled
    with the bolded exprs.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.exprs = list(exprs)
        self.expr = self.exprs[0] if self.exprs else ""  # exprs[0] should be the offending expr
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Raised when a program could not be parsed. diagnostics holds every parser message, in order."""
    BANNER = "Woops! We ran into some monkey business here!"

    def __init__(self, diagnostics):
        self.diagnostics = list(diagnostics)
        msg = ParseError.BANNER + "\n parser errors:" + "\n\t{}" * len(self.diagnostics)
        super().__init__(msg, self.diagnostics)


class MacroError(GenericException):
    """Misuse of the macro system by a program: wrong macro arity, or unquoting a value with no AST form."""


class InternalError(GenericException):
    """Invariant violation inside the interpreter, i.e. an interpreter bug rather than a program bug."""

    def __init__(self, msg, exprs=None):
        super().__init__(msg, exprs, internal=True)


class ErrorHandler:
    """Context manager that reports Monkey errors/warnings instead of letting them propagate. Reports point at the
    line registered for the input being added or run:

    ```
    <in>:3: error: Woops! We ran into some monkey business here!
     parser errors:
        expected next token to be IDENT, got = instead
        let = 5
    ```
    """
    ERROR = "red"
    WARNING = "magenta"
    HOST_ERRORS = {
        KeyboardInterrupt: "keyboard interrupt",
        RecursionError: "maximum recursion depth exceeded",
    }

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # path: (line, line_num) of the input being added or run

    def register_file(self, path):
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Marks line as the origin of whatever is raised until remove_line. Should be called prior to Session
        add/run.
        """
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def _origin(self):
        """Returns (path, line, line_num) of the registered line, or of the first registered file if no line is."""
        origin = (None, None, None)
        for path, (line, line_num) in self.traceback.items():
            if origin[0] is None or line is not None:
                origin = (path, line, line_num)
        return origin

    @staticmethod
    def _location(path, line_num):
        if path is None:
            return ""
        return colored(f"{path}:{line_num}: " if line_num is not None else f"{path}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and prints a warning message based on args."""
        warning = GenericException(*args, **kwargs)
        path, __, line_num = self._origin()
        print(self._location(path, line_num) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg)

    def throw(self, error):
        """Prints error, a GenericException, against the registered line. Parser diagnostics get a line each. Exits
        if fatal, otherwise forgets the registered line.
        """
        path, line, line_num = self._origin()

        prefix = self._location(path, line_num)
        if error.internal:
            prefix += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        prefix += colored("error: ", ErrorHandler.ERROR, attrs=["bold"])

        if isinstance(error, ParseError):
            report = [prefix + ParseError.BANNER, " parser errors:"]
            report += ["\t" + colored(diagnostic, ErrorHandler.ERROR) for diagnostic in error.diagnostics]
        else:
            report = [prefix + error.msg]

        if line:
            report += ["    " + source_line for source_line in line.splitlines()]
        print("\n".join(report))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or issubclass(exc_type, SystemExit):
            return False

        if issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type in ErrorHandler.HOST_ERRORS:
            self.throw(GenericException(ErrorHandler.HOST_ERRORS[exc_type]))
        else:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            return False  # interpreter bug, let it surface

        return True
