"""Arith abstract syntax tree.

The `pure` directory contains the language core (tokens, tree, environment, values and evaluation); the `lang`
directory wraps it for sessions, errors and the shell.

Every Arith program is exactly one expression:

```
<expr> ::= <number>                                 ; "Number", a float64 literal
         | "T" | "F"                                ; "Boolean"
         | <identifier>                             ; "Variable", resolved against the environment at run time
         | <op> "(" <expr> "," <expr> ")"           ; "BinaryOp", prefix arithmetic/comparison/logic: *(x, x)
         | "!" <expr>                               ; "Not"
         | "func" <identifier> "=>" <expr>          ; "Function", single parameter, lexically scoped
         | "if" <expr> "then" <expr> "else" <expr>  ; "If"
         | "apply" "(" <expr> "," <expr> ")"        ; "Apply", call-by-value application
```

Nodes are built bottom-up by the parser and never mutated afterwards. Each node owns its children exclusively, so a
tree never shares subtrees or contains cycles. position (offset of the node's first token) is only used for error
messages and takes no part in equality.
"""

import math
from abc import ABC, abstractmethod
from decimal import Decimal


class ArithTerm(ABC):
    """Superclass that represents any Arith expression."""

    def __init__(self, position=None):
        self.position = position
        self._cls = type(self).__name__

    @property
    @abstractmethod
    def nodes(self):
        """Child expressions, left to right."""

    @abstractmethod
    def _key(self):
        """Tuple identifying this node's own (non-child) data, used for equality."""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <ArithTerm>(expr='<expr>', nodes=[
            <ArithTerm>(expr='<expr>', nodes=[
                ...
                <ArithTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self}')"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self._key() == other._key() and self.nodes == other.nodes

    def __hash__(self):
        return hash((self._cls, self._key(), self.nodes))


class Number(ArithTerm):

    def __init__(self, value, position=None):
        super().__init__(position)
        self.value = float(value)

    @property
    def nodes(self):
        return ()

    def _key(self):
        return (self.value,)

    def __str__(self):
        return format_number(self.value)


class Boolean(ArithTerm):

    def __init__(self, value, position=None):
        super().__init__(position)
        self.value = bool(value)

    @property
    def nodes(self):
        return ()

    def _key(self):
        return (self.value,)

    def __str__(self):
        return "T" if self.value else "F"


class Variable(ArithTerm):
    """Name bound by an enclosing Function. Resolved when evaluated, never when parsed."""

    def __init__(self, name, position=None):
        super().__init__(position)
        self.name = name

    @property
    def nodes(self):
        return ()

    def _key(self):
        return (self.name,)

    def __str__(self):
        return self.name


class BinaryOp(ArithTerm):
    """Prefix binary operator applied to two operands. Both operands are always evaluated, left first."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    LESS_THAN = "<"
    EQUALS = "=="
    AND = "&"
    OR = "|"

    OPERATORS = [ADD, SUB, MUL, DIV, LESS_THAN, EQUALS, AND, OR]

    def __init__(self, op, left, right, position=None):
        assert op in BinaryOp.OPERATORS, f"{op} not a valid operator"
        super().__init__(position)
        self.op = op
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return (self.left, self.right)

    def _key(self):
        return (self.op,)

    def __str__(self):
        return f"{self.op}({self.left}, {self.right})"


class Not(ArithTerm):

    def __init__(self, operand, position=None):
        super().__init__(position)
        self.operand = operand

    @property
    def nodes(self):
        return (self.operand,)

    def _key(self):
        return ()

    def __str__(self):
        return f"!{self.operand}"


class Function(ArithTerm):
    """Single-parameter function literal. Evaluates to a Closure over the environment it is evaluated in."""

    def __init__(self, param, body, position=None):
        super().__init__(position)
        self.param = param
        self.body = body

    @property
    def nodes(self):
        return (self.body,)

    def _key(self):
        return (self.param,)

    def __str__(self):
        return f"func {self.param} => {self.body}"


class If(ArithTerm):
    """Conditional. Only the branch selected by the condition is evaluated."""

    def __init__(self, condition, then_branch, else_branch, position=None):
        super().__init__(position)
        self.condition = condition
        self.then_branch = then_branch
        self.else_branch = else_branch

    @property
    def nodes(self):
        return (self.condition, self.then_branch, self.else_branch)

    def _key(self):
        return ()

    def __str__(self):
        return f"if {self.condition} then {self.then_branch} else {self.else_branch}"


class Apply(ArithTerm):

    def __init__(self, callee, argument, position=None):
        super().__init__(position)
        self.callee = callee
        self.argument = argument

    @property
    def nodes(self):
        return (self.callee, self.argument)

    def _key(self):
        return ()

    def __str__(self):
        return f"apply({self.callee}, {self.argument})"


def format_number(value):
    """Canonical decimal text of a float, never in exponent form: integral values drop their fractional part
    (12.0 -> '12', 1e16 -> '10000000000000000') and the rest keep their shortest round-trip digits (1e-07 -> '0.0000001').
    """
    if not math.isfinite(value):
        return repr(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
