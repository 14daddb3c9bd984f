import random
from typing import List
from Tree import OP, Node, postorder, pop_n
from Errors import DivisionByZero, EmptyArgs, UnknownFunction

# Name: minimal number of arguments
PREDEFINED_FUNCTIONS = {
    "sum": 0,
    "min": 1,
    "max": 1,
    "random": 0,
}

# Upper bound (exclusive) of the numbers returned by random()
RANDOM_LIMIT = 2 ** 63


def div(x: int, y: int) -> int:
    # Integer division truncating toward zero, e.g. -7 / 2 == -3
    if y == 0:
        raise DivisionByZero()
    q = abs(x) // abs(y)
    return q if (x < 0) == (y < 0) else -q


class Evaluator:
    rng: random.Random

    def __init__(self, seed: int = None):
        self.rng = random.Random(seed)

    def evaluate(self, root: Node) -> int:
        # Post-order walk with an explicit value stack
        values = []

        for node in postorder(root, skip=self.enter):
            if node.op == OP.VAL:
                values.append(node.value)

            elif node.op == OP.FUNC:
                if node.name == "random":
                    values.append(self.rng.randrange(RANDOM_LIMIT))
                else:
                    args = pop_n(values, len(node.args))
                    values.append(self.call(node.name, args))

            else:
                right = values.pop()
                left = values.pop()
                values.append(self.binary(node.op, left, right))

        assert len(values) == 1
        return values.pop()

    def enter(self, node: Node) -> bool:
        # Checked before any argument is evaluated. True when the arguments
        # are not evaluated at all.
        if node.op != OP.FUNC:
            return False

        if node.name not in PREDEFINED_FUNCTIONS:
            raise UnknownFunction(node.name)

        if len(node.args) < PREDEFINED_FUNCTIONS[node.name]:
            raise EmptyArgs(node.name)

        return node.name == "random"

    def binary(self, op: OP, left: int, right: int) -> int:
        if op == OP.ADD:
            return left + right
        elif op == OP.SUB:
            return left - right
        elif op == OP.MUL:
            return left * right
        elif op == OP.DIV:
            return div(left, right)
        else:
            raise Exception(f"Internal error: unexpected operator {op}")

    def call(self, name: str, values: List[int]) -> int:
        if name == "sum":
            return sum(values)
        elif name == "min":
            return min(values)
        elif name == "max":
            return max(values)
        else:
            raise UnknownFunction(name)
