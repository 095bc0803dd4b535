"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from termcolor import colored

from monkey.lang.objects import is_error
from monkey.lang.session import Session

MONKEY_FACE = r"""            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-\"""""""-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'"""


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = MONKEY_FACE + "\nMonkey programming language :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    @staticmethod
    def format_result(result):
        """Returns the REPL rendering of result: its inspect text, in red if it is an error."""
        if is_error(result):
            return colored("-> ", "red", attrs=["bold"]) + colored(result.inspect(), "red")
        return colored("-> ", "green", attrs=["bold"]) + result.inspect()

    def default(self, line):
        """Executes arbitrary Monkey code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = Session.preprocess_line(self._tmp_line + line)

            if add_to_prev:
                self._tmp_line = line + "\n"
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                self.stdout.write(Shell.format_result(self.sess.pop()) + "\n")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write(
            "Welcome to the Monkey interpreter!\n\n"
            "Monkey has integers, booleans, strings, arrays, hashes, first-class functions and macros. Try \n"
            "'let add = fn(a, b) { a + b };' and then 'add(1, 2)'. Builtins: len, first, last, rest, push, puts.\n"
            "Type 'exit' or press Ctrl-D to leave.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
