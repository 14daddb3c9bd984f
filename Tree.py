from __future__ import annotations
from enum import Enum, auto
from typing import List


class OP(Enum):
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    VAL = auto()
    FUNC = auto()

    def is_binary(self) -> bool:
        return self in PRIORITY

    def priority(self) -> int:
        assert self.is_binary(), f"{self} is not an operator"
        return PRIORITY[self]

    def symbol(self) -> str:
        return SYMBOL[self]


# +, - bind looser than *, /
PRIORITY = {
    OP.ADD: 1,
    OP.SUB: 1,
    OP.MUL: 2,
    OP.DIV: 2,
}

SYMBOL = {
    OP.ADD: "+",
    OP.SUB: "-",
    OP.MUL: "*",
    OP.DIV: "/",
}


def compare_priority(op1: OP, op2: OP) -> int:
    return op1.priority() - op2.priority()


class Node:
    op: OP
    left: Node
    right: Node
    value: int
    name: str
    args: List[Node]
    leaf: bool

    def __init__(self, op: OP, left: Node = None, right: Node = None):
        self.op = op
        self.left = left
        self.right = right
        self.value = None
        self.name = None
        self.args = []
        # Leaf-like nodes are atomic operands for the rotations in the
        # parser: values, function calls and parenthesized subexpressions
        self.leaf = False

    @classmethod
    def Value(cls, num: int) -> Node:
        node = cls(OP.VAL)
        node.value = num
        node.leaf = True
        return node

    @classmethod
    def Function(cls, name: str, args: List[Node]) -> Node:
        node = cls(OP.FUNC)
        node.name = name
        node.args = args
        node.leaf = True
        return node

    @classmethod
    def Binary(cls, op: OP, left: Node, right: Node) -> Node:
        assert op.is_binary(), f"Cannot build a binary node from {op}"
        return cls(op, left, right)

    def is_leaf(self) -> bool:
        return self.leaf

    def children(self) -> List[Node]:
        if self.op == OP.FUNC:
            return list(self.args)
        elif self.op == OP.VAL:
            return []
        else:
            return [self.left, self.right]

    def label(self) -> str:
        if self.op == OP.VAL:
            return str(self.value)
        elif self.op == OP.FUNC:
            return f"{self.name}()"
        else:
            return self.op.symbol()

    def __str__(self) -> str:
        # Fully parenthesized, so the shape of the tree can be read back
        strs = []
        for node in postorder(self):
            if node.op == OP.VAL:
                strs.append(str(node.value))
            elif node.op == OP.FUNC:
                args = pop_n(strs, len(node.args))
                strs.append(f"{node.name}({', '.join(args)})")
            else:
                right = strs.pop()
                left = strs.pop()
                strs.append(f"({left} {node.op.symbol()} {right})")
        return strs.pop()

    def __repr__(self) -> str:
        return self.__str__()


def postorder(root: Node, skip=None):
    # Children before parents, without recursion.
    # Nodes for which skip(node) is true are yielded without their children.
    stack = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        children = [] if skip and skip(node) else node.children()
        if expanded or not children:
            yield node
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))


def pop_n(stack: List, n: int) -> List:
    # Remove and return the top n items, oldest first
    items = stack[len(stack) - n:]
    del stack[len(stack) - n:]
    return items
