"""
Runtime values. Numbers and booleans play themselves (Python float and bool); only functions need help.
"""

from dataclasses import dataclass

from arith.pure.environment import Environment
from arith.pure.lexical import ArithTerm, format_number


@dataclass(frozen=True, eq=False)
class Closure:
    """The run-time manifestation of a Function: a callable value tied to its natal environment."""
    param: str
    body: ArithTerm
    captured: Environment

    def __str__(self):
        return "<function>"


def is_number(value):
    return isinstance(value, float)


def is_boolean(value):
    return isinstance(value, bool)


def show(value):
    """Text form of a final result: canonical decimal for numbers, T/F for booleans, a placeholder for functions."""
    if is_boolean(value):
        return "T" if value else "F"
    if is_number(value):
        return format_number(value)
    return str(value)
