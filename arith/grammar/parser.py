"""Arith recursive-descent parser.

Formally, Arith grammar can be succinctly defined as
```
program    ::= expression END
expression ::= number | boolean | identifier | binaryOp | notOp | funcLit | ifExpr | apply
binaryOp   ::= ("+" | "-" | "*" | "/" | "<" | "==" | "&" | "|") "(" expression "," expression ")"
notOp      ::= "!" expression
funcLit    ::= "func" identifier "=>" expression
ifExpr     ::= "if" expression "then" expression "else" expression
apply      ::= "apply" "(" expression "," expression ")"
```

The grammar is LL(1): the next token alone selects the production, and because every binary operator is written
prefix with parenthesized operands there is no precedence or associativity to resolve. The parser does no semantic
checking beyond the grammar; everything else is left to the evaluator.
"""

import logging

from arith.lang.error import ParseError
from arith.pure import lexical
from arith.pure.tokens import BOOLEAN, END, IDENTIFIER, KEYWORD, NUMBER, SYMBOL


logger = logging.getLogger(__name__)

APPLY = "apply"  # reserved identifier, never a variable


class Parser:
    """Consumes a token list (as returned by tokenize) left to right. Each parse_* method consumes exactly the tokens
    of its production and leaves the cursor on the token after them.
    """

    def __init__(self, tokens):
        assert tokens and tokens[-1].kind == END, "token list must be terminated by END"
        self.tokens = tokens
        self.current = 0

    @property
    def peek(self):
        return self.tokens[self.current]

    def advance(self):
        token = self.peek
        if token.kind != END:
            self.current += 1
        return token

    def expect_symbol(self, text):
        token = self.peek
        if not token.is_symbol(text):
            raise ParseError(f"'{text}'", token.describe(), token.position)
        return self.advance()

    def expect_keyword(self, text):
        token = self.peek
        if token.kind != KEYWORD or token.text != text:
            raise ParseError(f"'{text}'", token.describe(), token.position)
        return self.advance()

    def parse_program(self):
        """program ::= expression END. Trailing tokens are an error, never silently dropped."""
        try:
            expr = self.parse_expression()
        except RecursionError:
            raise ParseError("an expression", "nesting too deep to parse", self.peek.position) from None

        if self.peek.kind != END:
            raise ParseError(END, self.peek.describe(), self.peek.position)
        return expr

    def parse_expression(self):
        token = self.peek

        if token.kind == NUMBER:
            self.advance()
            return lexical.Number(float(token.text), token.position)

        elif token.kind == BOOLEAN:
            self.advance()
            return lexical.Boolean(token.text == "T", token.position)

        elif token.kind == IDENTIFIER and token.text == APPLY:
            return self.parse_apply()

        elif token.kind == IDENTIFIER:
            self.advance()
            return lexical.Variable(token.text, token.position)

        elif token.kind == SYMBOL and token.text in lexical.BinaryOp.OPERATORS:
            return self.parse_binary_op()

        elif token.is_symbol("!"):
            self.advance()
            return lexical.Not(self.parse_expression(), token.position)

        elif token.kind == KEYWORD and token.text == "func":
            return self.parse_function()

        elif token.kind == KEYWORD and token.text == "if":
            return self.parse_if()

        raise ParseError("an expression", token.describe(), token.position)

    def parse_binary_op(self):
        op = self.advance()
        self.expect_symbol("(")
        left = self.parse_expression()
        self.expect_symbol(",")
        right = self.parse_expression()
        self.expect_symbol(")")
        return lexical.BinaryOp(op.text, left, right, op.position)

    def parse_function(self):
        func = self.expect_keyword("func")

        param = self.peek
        if param.kind != IDENTIFIER or param.text == APPLY:
            raise ParseError("a parameter name", param.describe(), param.position)
        self.advance()

        self.expect_symbol("=>")
        return lexical.Function(param.text, self.parse_expression(), func.position)

    def parse_if(self):
        start = self.expect_keyword("if")
        condition = self.parse_expression()
        self.expect_keyword("then")
        then_branch = self.parse_expression()
        self.expect_keyword("else")
        else_branch = self.parse_expression()
        return lexical.If(condition, then_branch, else_branch, start.position)

    def parse_apply(self):
        start = self.advance()
        self.expect_symbol("(")
        callee = self.parse_expression()
        self.expect_symbol(",")
        argument = self.parse_expression()
        self.expect_symbol(")")
        return lexical.Apply(callee, argument, start.position)


def parse(tokens):
    """Parses a complete program. Raises ParseError."""
    tree = Parser(tokens).parse_program()
    logger.debug("AST: %s", tree)
    return tree
