import sys
import os

sys.path.append(os.path.dirname(os.path.realpath(__file__)) + "/..")

import unittest
import tempfile
import io
from ExprParser import ExprParser, ParseDebug, parse
from Tokenizer import Token, tokenize
from Tree import OP, Node
from Errors import (CalcError, CalcSyntaxError, EndOfInput, NestingTooDeep,
                    UnexpectedToken)


def build(text: str, debug: ParseDebug = None) -> Node:
    return parse(tokenize(text), debug=debug)


class TestParser(unittest.TestCase):
    def test_precedence(self):
        self.assertEqual(str(build("1+2*3")), "(1 + (2 * 3))")
        self.assertEqual(str(build("2*3+4")), "((2 * 3) + 4)")
        self.assertEqual(str(build("1+2*3+4")), "((1 + (2 * 3)) + 4)")
        self.assertEqual(str(build("2*3*4-5/5")),
                         "(((2 * 3) * 4) - (5 / 5))")
        self.assertEqual(str(build("1-2*3*4+5")),
                         "((1 - ((2 * 3) * 4)) + 5)")

    def test_associativity(self):
        self.assertEqual(str(build("10-3-2")), "((10 - 3) - 2)")
        self.assertEqual(str(build("8/4/2")), "((8 / 4) / 2)")
        self.assertEqual(str(build("1-2+3-4")), "(((1 - 2) + 3) - 4)")

    def test_parentheses(self):
        tree = build("1+(2+3)*4")
        self.assertEqual(str(tree), "(1 + ((2 + 3) * 4))")
        self.assertFalse(tree.is_leaf())
        self.assertEqual(tree.right.op, OP.MUL)
        self.assertFalse(tree.right.is_leaf())
        self.assertTrue(tree.right.left.is_leaf())
        self.assertEqual(tree.right.left.op, OP.ADD)

        self.assertEqual(str(build("(1+2)*3")), "((1 + 2) * 3)")
        self.assertEqual(str(build("2*(3-1)-4")), "((2 * (3 - 1)) - 4)")

        tree = build("(((111)))")
        self.assertEqual(tree.op, OP.VAL)
        self.assertEqual(tree.value, 111)

        self.assertTrue(build("(1+2)").is_leaf())
        self.assertFalse(build("1+2").is_leaf())

    def test_function_call(self):
        tree = build("min(1, max(1,2,3)+1)")
        self.assertEqual(str(tree), "min(1, (max(1, 2, 3) + 1))")
        self.assertEqual(tree.op, OP.FUNC)
        self.assertEqual(tree.name, "min")
        self.assertEqual(len(tree.args), 2)
        self.assertTrue(tree.is_leaf())
        self.assertTrue(tree.args[1].left.is_leaf())

        self.assertEqual(str(build("f()")), "f()")
        self.assertEqual(str(build("sum(1,)")), "sum(1)")
        self.assertEqual(str(build("2*max(1,2)+1")), "((2 * max(1, 2)) + 1)")
        self.assertEqual(str(build("1+random()*2")),
                         "(1 + (random() * 2))")

    def test_tree_shape(self):
        # Binary nodes always have both children, leaves have none
        def check(node: Node):
            if node.op in (OP.VAL, OP.FUNC):
                self.assertIsNone(node.left)
                self.assertIsNone(node.right)
            else:
                self.assertIsNotNone(node.left)
                self.assertIsNotNone(node.right)
            for child in node.children():
                check(child)

        check(build("1+2*3-4/(5+6)*sum(7,8*9)-10"))

    def test_errors(self):
        with self.assertRaises(EndOfInput):
            build("")

        with self.assertRaises(CalcSyntaxError) as cm:
            build("1+")
        self.assertEqual(str(cm.exception),
                         "syntax error, unexpected token: +")
        self.assertEqual(cm.exception.token.col, 2)

        with self.assertRaises(CalcSyntaxError) as cm:
            build("1 2")
        self.assertEqual(str(cm.exception),
                         "syntax error, unexpected token: 2")

        with self.assertRaises(CalcSyntaxError) as cm:
            build("(1+2")
        self.assertEqual(str(cm.exception),
                         "syntax error, expected token ')', but no more token")

        with self.assertRaises(CalcSyntaxError) as cm:
            build("1+(2")
        self.assertEqual(str(cm.exception),
                         "syntax error, unexpected token: +")

        with self.assertRaises(UnexpectedToken):
            build(")")

        with self.assertRaises(UnexpectedToken):
            build('"abc"')

        with self.assertRaises(CalcSyntaxError) as cm:
            build("abc")
        self.assertEqual(str(cm.exception),
                         "syntax error, expected token '(', but no more token")

        with self.assertRaises(CalcSyntaxError) as cm:
            build("min(1")
        self.assertEqual(str(cm.exception),
                         "syntax error, expected token ',' or ')'")

        with self.assertRaises(CalcSyntaxError) as cm:
            build("min(1 2)")
        self.assertEqual(str(cm.exception),
                         "syntax error, expected token ')', found 2")

    def test_malformed_suffix(self):
        for suffix in [")", "+", "(", ",", " 1", "min", "*(", '"s"', "()"]:
            with self.assertRaises(CalcError, msg=f"1+2{suffix}"):
                build("1+2" + suffix)

    def test_cursor_consumed(self):
        tokens = tokenize("1*(2+3)")
        ExprParser(tokens).parse()
        self.assertFalse(tokens.hasMoreTokens())

    def test_long_chain(self):
        tree = build("+".join(["1"] * 1500))
        depth = 0
        while tree.op == OP.ADD:
            self.assertEqual(tree.right.op, OP.VAL)
            tree = tree.left
            depth += 1
        self.assertEqual(depth, 1499)

        self.assertEqual(str(build("*".join(["2"] * 1500))).count("*"), 1499)

    def test_deep_nesting(self):
        tree = build("(" * 50 + "1" + ")" * 50)
        self.assertEqual(tree.value, 1)
        self.assertEqual(str(build("min(" * 30 + "1" + ")" * 30)),
                         "min(" * 30 + "1" + ")" * 30)

        with self.assertRaises(NestingTooDeep):
            build("(" * 2000 + "1" + ")" * 2000)

        # The parser is usable again afterwards
        self.assertEqual(str(build("(1+2)*3")), "((1 + 2) * 3)")


class TestDebug(unittest.TestCase):
    def check_NT(self, nt: ParseDebug.NT, name: str):
        self.assertTrue(isinstance(nt, ParseDebug.NT))
        self.assertEqual(nt.name, name)

    def check_token(self, token: Token, _type: int):
        self.assertTrue(isinstance(token, Token))
        self.assertEqual(token.type, _type)

    def test_expression(self):
        debug = ParseDebug()
        build("1+2", debug=debug)

        self.assertEqual(len(debug.root), 1)
        self.check_NT(debug.root[0], "expression")
        expression = debug.root[0].components
        self.assertEqual(len(expression), 3)
        self.check_NT(expression[0], "operand")
        self.check_token(expression[1], Token.OPERATOR)
        self.check_NT(expression[2], "operand")
        self.check_token(expression[2].components[0], Token.NUMBER)
        self.assertFalse(debug.root[0].failed)

    def test_funcCall(self):
        debug = ParseDebug()
        build("min((1))", debug=debug)

        operand = debug.root[0].components[0].components
        self.check_token(operand[0], Token.IDENT)
        self.check_NT(operand[1], "funcCall")

        funcCall = operand[1].components
        self.check_token(funcCall[0], Token.IDENT)
        self.check_token(funcCall[1], Token.OPENPAREN)
        self.check_NT(funcCall[2], "argumentList")
        self.check_token(funcCall[3], Token.CLOSEPAREN)

        argumentList = funcCall[2].components
        self.check_NT(argumentList[0], "expression")
        quoted = argumentList[0].components[0].components[1]
        self.check_NT(quoted, "quotedExpression")

    def test_toStr(self):
        debug = ParseDebug()
        build("1", debug=debug)
        self.assertEqual(debug.toStr(debug.root),
                         'NT:expression\n'
                         '| NT:operand\n'
                         '| | "1" (NUMBER) col 1\n')

    def test_failed(self):
        with tempfile.TemporaryDirectory() as tmp:
            file = os.path.join(tmp, "debug.txt")
            debug = ParseDebug(file=file)
            with self.assertRaises(CalcSyntaxError):
                build("(1", debug=debug)

            self.assertTrue(debug.root[0].failed)
            self.assertTrue(debug.root[0].components[0].failed)
            # Nothing is written until dump()
            self.assertFalse(os.path.exists(file))

            debug.dump()
            with open(file) as f:
                trace = f.read()
        self.assertIn("NT:quotedExpression (failed)", trace)
        self.assertEqual(debug.current, debug.root)

    def test_failed_no_output(self):
        debug = ParseDebug()
        sys.stdout = io.StringIO()
        try:
            with self.assertRaises(CalcSyntaxError):
                build("1+", debug=debug)
            with self.assertRaises(EndOfInput):
                build("", debug=debug)
            self.assertEqual(sys.stdout.getvalue(), "")

            debug.dump()
            self.assertEqual(sys.stdout.getvalue().count("NT:expression"), 2)
        finally:
            sys.stdout = sys.__stdout__


if __name__ == "__main__":
    unittest.main()
