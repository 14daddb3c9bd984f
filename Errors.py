class CalcError(Exception):
    kind: str = "CalcError"

    def __init__(self, msg: str, token=None):
        super().__init__(msg)
        self.msg = msg
        # The offending token, if the error can be pinned on one
        self.token = token

    def __str__(self) -> str:
        return self.msg


class EndOfInput(CalcError):
    kind = "EndOfInput"

    def __init__(self, msg: str = "no more token"):
        super().__init__(msg)


class UnexpectedToken(CalcError):
    kind = "UnexpectedToken"


class CalcSyntaxError(CalcError):
    kind = "SyntaxError"


class UnterminatedString(CalcError):
    kind = "UnterminatedString"

    def __init__(self, line: int, col: int):
        super().__init__(
            f"unterminated string starting at line {line} column {col}")
        self.line = line
        self.col = col


class NestingTooDeep(CalcError):
    kind = "NestingTooDeep"

    def __init__(self):
        super().__init__("expression is nested too deeply")


class UnknownFunction(CalcError):
    kind = "UnknownFunction"

    def __init__(self, name: str):
        super().__init__(f"unknown function name: {name}")
        self.name = name


class EmptyArgs(CalcError):
    kind = "EmptyArgs"

    def __init__(self, fn: str):
        super().__init__(f"{fn} function requires at least one argument")
        self.fn = fn


class DivisionByZero(CalcError):
    kind = "DivisionByZero"

    def __init__(self):
        super().__init__("integer division by zero")
