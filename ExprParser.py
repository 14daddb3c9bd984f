from functools import wraps
from typing import Callable, List
from Tokenizer import Token, TokenCursor
from Tree import OP, Node, compare_priority
from Errors import (CalcError, CalcSyntaxError, EndOfInput, NestingTooDeep,
                    UnexpectedToken)


class ParseDebug:
    class NT:
        def __init__(self, name: str):
            self.name = name
            self.components = []
            self.failed = False

    def __init__(self, file: str = None):
        self.root = []
        self.current = self.root
        self.stack = []
        self.file = file

    def add(self, item):
        self.current.append(item)

    def push(self, func_name: str) -> NT:
        nt = self.NT(func_name)
        self.add(nt)
        self.stack.append(self.current)
        self.current = nt.components
        return nt

    def pop(self):
        self.current = self.stack.pop()

    def toStr(self, node: List, indent: int = 0) -> str:
        string = ""

        for item in node:
            if isinstance(item, self.NT):
                mark = " (failed)" if item.failed else ""
                string += f"{'| ' * indent}NT:{item.name}{mark}\n"
                string += self.toStr(indent=indent+1, node=item.components)
            elif isinstance(item, Token):
                string += f"{'| ' * indent}{item}\n"
            else:
                raise Exception("Internal error: debug node of unexpected "
                                f"type {type(item)}")

        return string

    def dump(self):
        if self.file:
            with open(self.file, "w+") as f:
                f.write(self.toStr(self.root))
        else:
            print(self.toStr(self.root))


class ExprParser:
    tokens: TokenCursor
    debug: ParseDebug

    def __init__(self, tokens: TokenCursor, debug: ParseDebug = None):
        self.tokens = tokens
        self.debug = debug

    def _getToken(self) -> Token:
        token = self.tokens.getToken()
        if self.debug:
            self.debug.add(token)
        return token

    def _getOperator(self) -> OP:
        op = self.tokens.getTokenOfType(Token.OPERATOR)
        if self.debug:
            self.debug.add(self.tokens.getTokenAt(self.tokens.getIndex() - 1))
        return op

    def _expect(self, tokenType: int, msg: str) -> Token:
        try:
            token = self._getToken()
        except EndOfInput as e:
            raise CalcSyntaxError(f"{msg}, but {e}") from e

        if token.type != tokenType:
            raise CalcSyntaxError(f"{msg}, found {token.sym}", token)
        return token

    def _nonterminal(func: Callable):
        @wraps(func)
        def wrapNT(self, *args, **kargs):
            nt = None
            try:
                if self.debug:
                    nt = self.debug.push(func.__name__)
                return func(self, *args, **kargs)

            except CalcError:
                if nt:
                    nt.failed = True
                raise

            finally:
                if self.debug:
                    self.debug.pop()

        return wrapNT

    def parse(self) -> Node:
        try:
            root = self.expression()
        except RecursionError:
            # Every "(" or function call costs a few Python frames
            raise NestingTooDeep() from None

        if self.tokens.hasMoreTokens():
            token = self.tokens.getTokenAt(self.tokens.getIndex())
            raise CalcSyntaxError(
                f"syntax error, unexpected token: {token.sym}", token)

        return root

    @_nonterminal
    def operand(self) -> Node:
        # operand = integer | "(" expression ")" | funcCall

        token = self._getToken()

        if token.type == Token.NUMBER:
            return Node.Value(token.value)

        elif token.type == Token.OPENPAREN:
            self.tokens.returnToken()
            return self.quotedExpression()

        elif token.type == Token.IDENT:
            self.tokens.returnToken()
            return self.funcCall()

        else:
            self.tokens.returnToken()
            raise UnexpectedToken(f"unexpected token: {token.sym}", token)

    @_nonterminal
    def quotedExpression(self) -> Node:
        # quotedExpression = "(" expression ")"

        index = self.tokens.getIndex()
        try:
            self._expect(Token.OPENPAREN, "syntax error, expected token '('")
            root = self.expression()
            self._expect(Token.CLOSEPAREN, "syntax error, expected token ')'")
        except CalcError:
            self.tokens.setIndex(index)
            raise

        # Parenthesized subtrees are never reached by later rotations
        root.leaf = True
        return root

    @_nonterminal
    def expression(self) -> Node:
        # expression = operand { operator operand }

        root = self.operand()

        while True:
            index = self.tokens.getIndex()
            try:
                op = self._getOperator()
            except (EndOfInput, UnexpectedToken):
                break

            try:
                operand = self.operand()
            except CalcError:
                # Leave the operator to whoever called us
                self.tokens.setIndex(index)
                break

            root = self._append(root, op, operand)

        return root

    def _append(self, root: Node, op: OP, operand: Node) -> Node:
        # Fold "op operand" into the tree and return the new root

        if root.is_leaf():
            return Node.Binary(op, root, operand)

        # Walk down the right spine to the rightmost leaf-like node
        path = []
        rightMost = root
        while not rightMost.is_leaf():
            path.append(rightMost)
            rightMost = rightMost.right

        last = path[-1]
        last.right = Node.Binary(op, last.right, operand)
        current = last.right

        # Rotate the new node up while its ancestors bind at least as tight
        for i in range(len(path) - 1, -1, -1):
            parent = path[i]
            if compare_priority(parent.op, current.op) < 0:
                break

            parent.right = current.left
            current.left = parent

            if i == 0:
                root = current
            else:
                path[i - 1].right = current

        return root

    @_nonterminal
    def argumentList(self) -> List[Node]:
        # argumentList = [ expression { "," expression } ]

        args = []

        while True:
            try:
                arg = self.expression()
            except CalcError:
                break

            args.append(arg)

            try:
                token = self._getToken()
            except EndOfInput as e:
                raise CalcSyntaxError(
                    "syntax error, expected token ',' or ')'") from e

            if token.type != Token.COMMA:
                self.tokens.returnToken()
                break

        return args

    @_nonterminal
    def funcCall(self) -> Node:
        # funcCall = ident "(" argumentList ")"

        index = self.tokens.getIndex()
        try:
            token = self._expect(
                Token.IDENT, "syntax error, expected function name")
            name = token.sym
            self._expect(Token.OPENPAREN, "syntax error, expected token '('")
            args = self.argumentList()
            self._expect(Token.CLOSEPAREN, "syntax error, expected token ')'")
        except CalcError:
            self.tokens.setIndex(index)
            raise

        return Node.Function(name, args)


def parse(tokens: TokenCursor, debug: ParseDebug = None) -> Node:
    return ExprParser(tokens, debug=debug).parse()
