"""Session control for the Arith language. Splits a file (or the shell's input) into programs and runs each of them
through the interpreter, either in command line mode or file interpretation mode.

Programs are independent: every run starts from the empty environment, nothing is carried from one to the next.
"""

import logging

from arith.interpreter import interpret
from arith.lang.error import ArithError
from arith.pure.values import show


logger = logging.getLogger(__name__)

COMMENT = ";;"


class Session:
    """Governs an Arith session: the programs waiting to run and the results of those already run."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, max_depth=None):
        self.error_handler = error_handler

        self.path = path            # used for error messages
        self.cmd_line = cmd_line    # whether or not in command-line mode
        self.max_depth = max_depth  # nested application limit passed to the evaluator

        self.to_exec = {}   # dict of line num: program text to execute
        self.results = []   # text results, in order of execution

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r", encoding="utf-8") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise ArithError(f"'{path}' could not be opened")

            for expr, line_num in exprs:
                self.add(expr, line_num)

        elif not cmd_line:
            raise ArithError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's exprs), but add_to_prev will indicate whether a line continuation is necessary. Returns
        updated value of line and add_to_prev. Must be called before calling add.
        """
        if COMMENT in line:
            line = line[:line.index(COMMENT)]  # get rid of comments

        line = line.strip()
        if exprs is not None:
            if line and not add_to_prev:
                exprs.append((line, line_num))
            elif add_to_prev:
                prev, start_num = exprs.pop()
                line = f"{prev} {line}".strip()
                exprs.append((line, start_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Queues program expr (which started on line_num). Nothing is evaluated until run is called."""
        if not expr:
            raise ValueError("program cannot be empty")
        self.to_exec[line_num] = expr

    def run(self):
        """Runs this session's queued programs in order. Will raise any errors that are encountered, so run inside the
        session's error handler.
        """
        for line_num, expr in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                value = interpret(expr, self.max_depth)
            finally:
                del self.to_exec[line_num]

            self.results.append(show(value))
            logger.debug("line %d: %s -> %s", line_num, expr, self.results[-1])

            self.error_handler.remove_line()

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
