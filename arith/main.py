"""Uses the Arith interpreter to run .arith files, a single program, or command-line mode. Also uses error handling
context manager. Called from the arith console script.
"""

import argparse
import logging
import sys

from arith.lang.error import ErrorHandler
from arith.lang.session import Session
from arith.lang.shell import Shell


def main(argv=None):
    """Runs Arith interpreter. Called from arith console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="arith", description="Run programs written in Arith.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-c", "--command", help="run a single program given as a string")
        parser.add_argument("--max-depth", type=int, default=None, help="maximum nesting of function applications")
        parser.add_argument("--debug", action="store_true", help="log tokens and syntax trees")
        args = parser.parse_args(argv)

        if args.debug:
            logging.basicConfig(level=logging.DEBUG)

        if args.command is not None:
            if not args.command.strip():
                parser.error("program cannot be empty")

            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, max_depth=args.max_depth)
            error_handler.fatal = True

            sess.add(args.command, 1)
            sess.run()
            print(sess.pop())

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, max_depth=args.max_depth)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, max_depth=args.max_depth)).cmdloop()


if __name__ == "__main__":
    sys.exit(main())
