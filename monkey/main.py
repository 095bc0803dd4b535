"""Runs .monkey files or starts the Monkey REPL. Also uses the error handling context manager. Called from the monkey
console script (see pyproject.toml) or with `python -m monkey.main`.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import logging
import sys

from monkey.lang.config import Config, setup_logging
from monkey.lang.error import ErrorHandler
from monkey.lang.objects import is_error
from monkey.lang.session import Session
from monkey.lang.shell import Shell

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey programming language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-call-depth", type=int, default=Config.max_call_depth,
                        help="nested function calls allowed before evaluation fails (default: %(default)s)")
    parser.add_argument("--log-level", default=Config.log_level,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="logging level (default: %(default)s)")
    return parser.parse_args(argv)


def main(argv=None):
    """Runs the Monkey interpreter. Called from the monkey console script."""
    assert sys.version_info >= (3, 7), "monkey cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = parse_args(argv)
        config = Config(max_call_depth=args.max_call_depth, log_level=args.log_level)

        setup_logging(config.log_level)
        logger.debug("starting with %s", config)

        if args.file is not None:
            sess = Session(error_handler, args.file, config, cmd_line=False)
            sess.run()

            if sess.results and is_error(sess.results[-1]):
                print(sess.results[-1].inspect())
                sys.exit(1)

        else:
            Shell(Session(error_handler, Session.SH_FILE, config, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
