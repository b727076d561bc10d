import unittest

from arith.grammar.parser import Parser, parse
from arith.lang.error import ParseError
from arith.pure.lexical import Apply, BinaryOp, Boolean, Function, If, Not, Number, Variable
from arith.pure.tokens import tokenize


def parse_source(source):
    return parse(tokenize(source))


class ParserTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "123": Number(123),
            "1.5": Number(1.5),
            "x": Variable("x"),
            "T": Boolean(True),
            "F": Boolean(False),
            "+(1, 1)": BinaryOp(BinaryOp.ADD, Number(1), Number(1)),
            "-(1, 1)": BinaryOp(BinaryOp.SUB, Number(1), Number(1)),
            "*(1, 1)": BinaryOp(BinaryOp.MUL, Number(1), Number(1)),
            "/(1, 1)": BinaryOp(BinaryOp.DIV, Number(1), Number(1)),
            "<(1, 1)": BinaryOp(BinaryOp.LESS_THAN, Number(1), Number(1)),
            "==(1, 1)": BinaryOp(BinaryOp.EQUALS, Number(1), Number(1)),
            "&(T, T)": BinaryOp(BinaryOp.AND, Boolean(True), Boolean(True)),
            "|(T, F)": BinaryOp(BinaryOp.OR, Boolean(True), Boolean(False)),
            "!T": Not(Boolean(True)),
            "+(1, -(2, 3))": BinaryOp(BinaryOp.ADD, Number(1), BinaryOp(BinaryOp.SUB, Number(2), Number(3))),
            "func x => T": Function("x", Boolean(True)),
            "apply(func x => x, 1)": Apply(Function("x", Variable("x")), Number(1)),
            "if <(1, 5) then 8 else 9": If(BinaryOp(BinaryOp.LESS_THAN, Number(1), Number(5)), Number(8), Number(9)),
            "if <(1, 5) then if <(2, 3) then 2 else 3 else 4":
                If(BinaryOp(BinaryOp.LESS_THAN, Number(1), Number(5)),
                   If(BinaryOp(BinaryOp.LESS_THAN, Number(2), Number(3)), Number(2), Number(3)),
                   Number(4)),
            "  apply ( func x=>*(x,x) , 2 ) ":
                Apply(Function("x", BinaryOp(BinaryOp.MUL, Variable("x"), Variable("x"))), Number(2)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse_source(case), case)

    def test_function_body_is_greedy(self):
        tree = parse_source("func x => func y => +(x, y)")
        self.assertEqual(Function("x", Function("y", BinaryOp(BinaryOp.ADD, Variable("x"), Variable("y")))), tree)

    def test_round_trip(self):
        should_pass = [
            "apply(func x => *(x, x), 2)",
            "apply(func x => apply(func y => +(x, y), 10), 5)",
            "if !&(T, F) then func a => a else /(1, 0)",
        ]
        for case in should_pass:
            self.assertEqual(case, str(parse_source(case)), case)

    def test_positions(self):
        tree = parse_source("apply(f, +(1, y))")
        self.assertEqual(0, tree.position)
        self.assertEqual(6, tree.callee.position)
        self.assertEqual(9, tree.argument.position)
        self.assertEqual(14, tree.argument.right.position)

    def test_parse_errors(self):
        should_raise = {
            "": ("an expression", "end of input", 0),
            "3 4": ("end of input", "'4'", 2),
            "+(1, 2) x": ("end of input", "'x'", 8),
            "+(1 2)": ("','", "'2'", 4),
            "+ 1, 2)": ("'('", "'1'", 2),
            "+(1, 2": ("')'", "end of input", 6),
            "+(1, ": ("an expression", "end of input", 5),
            "apply(func x => x 1)": ("','", "'1'", 18),
            "apply 1": ("'('", "'1'", 6),
            "func => x": ("a parameter name", "'=>'", 5),
            "func 1 => x": ("a parameter name", "'1'", 5),
            "func apply => 1": ("a parameter name", "'apply'", 5),
            "func x x": ("'=>'", "'x'", 7),
            "if T 1 else 2": ("'then'", "'1'", 5),
            "if T then 1": ("'else'", "end of input", 11),
            ")": ("an expression", "')'", 0),
            "then": ("an expression", "'then'", 0),
            "=>": ("an expression", "'=>'", 0),
        }
        for case, (expected, found, position) in should_raise.items():
            with self.assertRaises(ParseError, msg=case) as context:
                parse_source(case)
            self.assertEqual(expected, context.exception.expected, case)
            self.assertEqual(found, context.exception.found, case)
            self.assertEqual(position, context.exception.position, case)

    def test_deep_nesting(self):
        source = "!" * 100000 + "T"
        self.assertRaises(ParseError, parse_source, source)

    def test_requires_end_marker(self):
        self.assertRaises(AssertionError, Parser, [])


if __name__ == '__main__':
    unittest.main()
