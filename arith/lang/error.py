"""Error handling for the Arith language. Only ArithErrors should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Each pipeline stage has exactly one family of errors:

```
ArithError
 ├── LexError            ; unrecognized character
 ├── ParseError          ; expected-vs-found token mismatch, premature end, trailing tokens
 └── EvaluationError     ; runtime failures
      ├── UnboundName
      ├── TypeMismatch
      ├── DivisionByZero
      ├── NotCallable
      └── StackOverflow
```
"""

import sys

from termcolor import colored

from arith.pure.lexical import format_number


class ArithError(Exception):
    """Templates an Arith error message so that it can be rendered identically whichever stage raised it."""
    stage = "arith"

    def __init__(self, msg, position=None):
        super().__init__(msg)
        self.msg = msg
        self.position = position

    def render(self):
        """Plain one-line diagnostic: '<stage> error[ at position N]: <msg>'."""
        where = f" at position {self.position}" if self.position is not None else ""
        return f"{self.stage} error{where}: {self.msg}"

    def __str__(self):
        return self.render()


class LexError(ArithError):
    stage = "lex"

    def __init__(self, position, character):
        super().__init__(f"unexpected character {character!r}", position)
        self.character = character


class ParseError(ArithError):
    stage = "parse"

    def __init__(self, expected, found, position):
        super().__init__(f"expected {expected}, found {found}", position)
        self.expected = expected
        self.found = found


class EvaluationError(ArithError):
    """Raised while reducing a well-formed tree."""
    stage = "runtime"


class UnboundName(EvaluationError):

    def __init__(self, name, position=None):
        super().__init__(f"unbound name {name!r}", position)
        self.name = name


class TypeMismatch(EvaluationError):

    def __init__(self, operator, side, value, position=None):
        super().__init__(f"'{operator}' got {describe(value)} as its {side} operand", position)
        self.operator = operator
        self.side = side
        self.value = value


class DivisionByZero(EvaluationError):

    def __init__(self, position=None):
        super().__init__("division by zero", position)


class NotCallable(EvaluationError):

    def __init__(self, value, position=None):
        super().__init__(f"{describe(value)} is not a function", position)
        self.value = value


class StackOverflow(EvaluationError):

    def __init__(self, depth=None, position=None):
        if depth is None:
            msg = "stack exhausted during evaluation"
        else:
            msg = f"maximum application depth of {depth} exceeded"
        super().__init__(msg, position)
        self.depth = depth


def describe(value):
    """Short human description of a runtime value, used in error messages."""
    if isinstance(value, bool):
        return f"boolean {'T' if value else 'F'}"
    if isinstance(value, float):
        return f"number {format_number(value)}"
    return "a function"


class ErrorHandler:
    """Context manager that will suppress Python errors and print Arith errors in their place."""
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.location = (None, None, None)  # (path, line, line_num) of the program currently being run
        self.errors = 0

    def register_line(self, path, line, line_num):
        """Registers the program that subsequent errors refer to. Should be called prior to Session add/run."""
        self.location = (path, line, line_num)

    def remove_line(self):
        """Should be called after a successful Session add/run."""
        self.location = (None, None, None)

    @staticmethod
    def diagnose(source, position, length=1):
        """Returns source with the offending span highlighted and underlined."""
        end = min(position + max(length, 1), len(source))

        diagnosis = "  " + source[:position]
        diagnosis += colored(source[position:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += source[end:] + "\n"

        diagnosis += "  " + " " * position
        diagnosis += colored("^" + "~" * (end - position - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error, internal=False):
        """Prints error (an ArithError) against the registered program, then exits if fatal."""
        self.errors += 1
        path, line, line_num = self.location

        error_msg = ""
        if path and line_num is not None:
            error_msg += f"  File '{path}', line {line_num}:\n"

        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored(f"{error.stage} error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not internal and line and error.position is not None and error.position <= len(line):
            print(ErrorHandler.diagnose(line, error.position, _span(error)))

        if self.fatal:
            sys.exit(1)
        self.remove_line()  # if error occurred, reset location (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(ArithError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(StackOverflow())
        elif exc_type is not None and issubclass(exc_type, ArithError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(ArithError(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit


def _span(error):
    """Length of source text to underline for error."""
    if isinstance(error, ParseError) and error.found.startswith("'"):
        return len(error.found) - 2
    if isinstance(error, UnboundName):
        return len(error.name)
    return 1
