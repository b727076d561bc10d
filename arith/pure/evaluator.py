"""Direct tree-walking evaluation of Arith expressions.

Evaluation is pure structural recursion over the tree: nothing in the tree is mutated, and the only state is the depth
counter guarding against runaway application.
"""

import operator

from arith.lang.error import DivisionByZero, NotCallable, StackOverflow, TypeMismatch
from arith.pure import lexical
from arith.pure.environment import EMPTY
from arith.pure.values import Closure, is_boolean, is_number


ARITHMETIC = {
    lexical.BinaryOp.ADD: operator.add,
    lexical.BinaryOp.SUB: operator.sub,
    lexical.BinaryOp.MUL: operator.mul,
    lexical.BinaryOp.DIV: operator.truediv,
}
LOGICAL = {
    lexical.BinaryOp.AND: lambda a, b: a and b,
    lexical.BinaryOp.OR: lambda a, b: a or b,
}


class Evaluator:
    """Reduces one tree to a value. One Evaluator per run: the depth counter is its only state."""
    MAX_DEPTH = 1000  # nested applications allowed before StackOverflow

    def __init__(self, max_depth=None):
        self.max_depth = max_depth if max_depth is not None else Evaluator.MAX_DEPTH
        self.depth = 0

        self._dispatch = {
            lexical.Number: self._number,
            lexical.Boolean: self._boolean,
            lexical.Variable: self._variable,
            lexical.BinaryOp: self._binary_op,
            lexical.Not: self._not,
            lexical.Function: self._function,
            lexical.If: self._if,
            lexical.Apply: self._apply,
        }

    def evaluate(self, expr, env=EMPTY):
        """Evaluates expr under env. Exhausting the Python stack is reported as StackOverflow."""
        try:
            return self._evaluate(expr, env)
        except RecursionError:
            raise StackOverflow(position=expr.position) from None

    def _evaluate(self, expr, env):
        try:
            fn = self._dispatch[type(expr)]
        except KeyError:
            raise NotImplementedError(type(expr), expr)
        return fn(expr, env)

    def _number(self, expr, env):
        return expr.value

    def _boolean(self, expr, env):
        return expr.value

    def _variable(self, expr, env):
        return env.lookup(expr.name, expr.position)

    def _binary_op(self, expr, env):
        left = self._evaluate(expr.left, env)
        right = self._evaluate(expr.right, env)
        op = expr.op

        if op in ARITHMETIC or op == lexical.BinaryOp.LESS_THAN:
            self._expect(is_number, op, left, right, expr)
            if op == lexical.BinaryOp.LESS_THAN:
                return left < right
            if op == lexical.BinaryOp.DIV and right == 0:
                raise DivisionByZero(expr.position)
            return ARITHMETIC[op](left, right)

        if op in LOGICAL:
            self._expect(is_boolean, op, left, right, expr)
            return LOGICAL[op](left, right)

        # equality compares two numbers or two booleans, never a mix
        if is_number(left) or is_boolean(left):
            kind = is_number if is_number(left) else is_boolean
            self._expect(kind, op, left, right, expr)
            return left == right
        raise TypeMismatch(op, "left", left, expr.left.position)

    @staticmethod
    def _expect(kind, op, left, right, expr):
        if not kind(left):
            raise TypeMismatch(op, "left", left, expr.left.position)
        if not kind(right):
            raise TypeMismatch(op, "right", right, expr.right.position)

    def _not(self, expr, env):
        value = self._evaluate(expr.operand, env)
        if not is_boolean(value):
            raise TypeMismatch("!", "only", value, expr.operand.position)
        return not value

    def _function(self, expr, env):
        return Closure(expr.param, expr.body, env)

    def _if(self, expr, env):
        condition = self._evaluate(expr.condition, env)
        if not is_boolean(condition):
            raise TypeMismatch("if", "condition", condition, expr.condition.position)
        return self._evaluate(expr.then_branch if condition else expr.else_branch, env)

    def _apply(self, expr, env):
        callee = self._evaluate(expr.callee, env)
        if not isinstance(callee, Closure):
            raise NotCallable(callee, expr.callee.position)

        argument = self._evaluate(expr.argument, env)
        frame = callee.captured.bind(callee.param, argument)

        if self.depth >= self.max_depth:
            raise StackOverflow(self.max_depth, expr.position)

        self.depth += 1
        try:
            return self._evaluate(callee.body, frame)
        finally:
            self.depth -= 1


def evaluate(expr, env=EMPTY, max_depth=None):
    """Evaluates expr under env and returns a float, a bool or a Closure. Raises EvaluationError."""
    return Evaluator(max_depth).evaluate(expr, env)
