import sys
from Tokenizer import tokenize
from ExprParser import ExprParser, ParseDebug
from Evaluator import Evaluator
from Tree import Node
from Errors import CalcError


def buildTree(text: str, debug: ParseDebug = None) -> Node:
    return ExprParser(tokenize(text), debug=debug).parse()


def evaluate(text: str, seed: int = None) -> int:
    return Evaluator(seed).evaluate(buildTree(text))


class Calculator:
    debug: ParseDebug
    evaluator: Evaluator

    # Result reported by calc() for an expression that fails
    ERROR_RESULT = -1

    def __init__(self, debug: ParseDebug = None, seed: int = None):
        self.debug = debug
        self.evaluator = Evaluator(seed)

    def error(self, text: str, e: CalcError) -> None:
        print(f"Calculator error: {e.kind}: {e}", file=sys.stderr)
        if e.token is not None:
            print(e.token.source_loc(text), file=sys.stderr)

    def tree(self, text: str) -> Node:
        return buildTree(text, debug=self.debug)

    def evaluate(self, text: str) -> int:
        return self.evaluator.evaluate(self.tree(text))

    def calc(self, text: str) -> int:
        try:
            return self.evaluate(text)
        except CalcError as e:
            self.error(text, e)
            return self.ERROR_RESULT
