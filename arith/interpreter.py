"""Arith interpreter.

Basic program flow, one call to run per program:
    1. Lexer: turns the source text into tokens (see arith/pure/tokens.py)
    2. Parser: builds one expression tree from the tokens by recursive descent (see arith/grammar/parser.py)
    3. Evaluator: walks the tree under an environment of closures and produces a value (see arith/pure/evaluator.py)

Any stage may fail. run is the only place where those typed failures are collapsed into text, so callers always get
a string back, result or diagnostic, and never need to know about the error classes.
"""

import logging

from arith.grammar.parser import parse
from arith.lang.error import ArithError
from arith.pure.evaluator import evaluate
from arith.pure.tokens import tokenize
from arith.pure.values import show


logger = logging.getLogger(__name__)


def interpret(source, max_depth=None):
    """Lexes, parses and evaluates source, returning the raw value. Raises the first ArithError encountered."""
    tokens = tokenize(source)
    logger.debug("Tokens: %s", tokens)
    tree = parse(tokens)
    return evaluate(tree, max_depth=max_depth)


def run(source, max_depth=None):
    """Runs one Arith program and returns its result as text, or a diagnostic naming the failing stage."""
    try:
        return show(interpret(source, max_depth))
    except ArithError as error:
        logger.debug("%s failed: %r", source, error)
        return error.render()
