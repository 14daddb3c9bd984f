#! /bin/env python3

import re
from typing import List
from Tree import OP
from Errors import EndOfInput, UnexpectedToken, UnterminatedString


class Token:
    OPERATOR = 1  # + - * /
    OPENPAREN = 2  # (
    CLOSEPAREN = 3  # )
    COMMA = 4  # ,
    IDENT = 5  # identifier
    NUMBER = 6  # number
    STRING = 7  # "..."

    TokenName = {
        OPERATOR: "OPERATOR",
        OPENPAREN: "OPENPAREN",
        CLOSEPAREN: "CLOSEPAREN",
        COMMA: "COMMA",
        IDENT: "IDENT",
        NUMBER: "NUMBER",
        STRING: "STRING",
    }

    SYMBOLS = {
        "+": OPERATOR,
        "-": OPERATOR,
        "*": OPERATOR,
        "/": OPERATOR,
        "(": OPENPAREN,
        ")": CLOSEPAREN,
        ",": COMMA,
    }

    OPERATORS = {
        "+": OP.ADD,
        "-": OP.SUB,
        "*": OP.MUL,
        "/": OP.DIV,
    }

    sym: str
    type: int
    line: int
    col: int

    def __init__(self, sym: str, line: int = 1, col: int = 0):
        self.sym = sym
        self.line = line
        self.col = col
        self.type = self._classify(sym)

    @classmethod
    def _classify(cls, sym: str) -> int:
        # Only called on matches of Tokenizer.PATTERN
        if sym in cls.SYMBOLS:
            return cls.SYMBOLS[sym]
        elif sym.startswith('"'):
            return cls.STRING
        elif sym[:1].isdigit():
            return cls.NUMBER
        else:
            return cls.IDENT

    @property
    def value(self):
        # Only operators and numbers have a value
        if self.type == Token.OPERATOR:
            return Token.OPERATORS[self.sym]
        elif self.type == Token.NUMBER:
            return int(self.sym)
        else:
            raise Exception(f"Internal error: this token has no value: {self}")

    def __str__(self) -> str:
        return f'"{self.sym}" ({self.TokenName[self.type]}) col {self.col}'

    def __repr__(self) -> str:
        return self.__str__()

    def source_loc(self, text: str) -> str:
        lines = text.split("\n")
        assert len(lines) >= self.line

        code_line = lines[self.line-1]
        # A string token may run past the end of its first line
        width = max(1, min(len(self.sym), len(code_line) - self.col + 1))

        return f"{code_line}\n{' '*(self.col-1)}{'^'*width}"


class Tokenizer:
    PATTERN = re.compile(r'[a-zA-Z]\w*|,|\d+|\+|\-|\*|\/|\(|\)|"', re.ASCII)

    text: str
    idx: int
    tokens: List[Token]

    def __init__(self, text: str):
        self.text = text
        self.idx = 0
        self.tokens = []

        # For debugging
        self.line = 1
        self.lineStart = 0  # index of the first char of the current line
        self.scanned = 0  # newlines before this index are counted

    def error(self, start: int) -> None:
        line, col = self.locate(start)
        raise UnterminatedString(line, col)

    def end(self) -> bool:
        return self.idx >= len(self.text)

    def locate(self, pos: int):
        # Line and column of pos, which never moves backwards
        newlines = self.text.count("\n", self.scanned, pos)
        if newlines:
            self.line += newlines
            self.lineStart = self.text.rfind("\n", self.scanned, pos) + 1
        self.scanned = pos
        return self.line, pos - self.lineStart + 1

    def create_token(self, start: int, end: int) -> Token:
        line, col = self.locate(start)
        return Token(self.text[start:end], line=line, col=col)

    def string(self, start: int) -> Token:
        # Find the next quote which is not escaped by a backslash
        idx = start
        while True:
            end = self.text.find('"', idx + 1)
            if end == -1:
                self.error(start)
            if self.text[end - 1] != "\\":
                break
            idx = end

        self.idx = end + 1
        return self.create_token(start, self.idx)

    def getNext(self) -> Token:
        # Characters that are not part of any token are skipped silently
        match = self.PATTERN.search(self.text, self.idx)
        if match is None:
            self.idx = len(self.text)
            return None

        if match.group() == '"':
            return self.string(match.start())

        self.idx = match.end()
        return self.create_token(match.start(), match.end())

    def tokenize(self) -> "TokenCursor":
        while not self.end():
            token = self.getNext()
            if token is None:
                break
            self.tokens.append(token)
        return TokenCursor(self.tokens)


def tokenize(text: str) -> "TokenCursor":
    return Tokenizer(text).tokenize()


class TokenCursor:
    tokens: List[Token]
    index: int
    total: int

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0
        self.total = len(tokens)

    def __len__(self) -> int:
        return self.total

    def getIndex(self) -> int:
        return self.index

    def setIndex(self, index: int) -> None:
        assert 0 <= index <= self.total
        self.index = index

    def returnToken(self) -> None:
        assert self.index > 0
        self.index -= 1

    def getToken(self) -> Token:
        if self.index < self.total:
            token = self.tokens[self.index]
            self.index += 1
            return token

        raise EndOfInput()

    def getTokenAt(self, index: int) -> Token:
        if index < 0 or index >= self.total:
            raise IndexError(f"Token index {index} out of range")
        return self.tokens[index]

    def hasMoreTokens(self) -> bool:
        return self.index < self.total

    def getTokenOfType(self, tokenType: int):
        token = self.getToken()
        if token.type != tokenType:
            self.returnToken()
            raise UnexpectedToken(f"unexpected token: {token.sym}", token)
        return token.value
