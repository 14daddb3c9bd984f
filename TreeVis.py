from graphviz import Digraph
from Tree import OP, Node, postorder


class TreeVis:
    _graph: Digraph
    debug: bool

    value_color = "#00BFFF"
    function_color = "#D2691E"
    operator_color = "#40E0D0"
    argument_edge_color = "#FF69B4"

    def __init__(self, filename: str = "graph/out.dot",
                 debug: bool = False) -> None:
        self._graph = Digraph('tree', filename=filename,
                              node_attr={'shape': 'box'})
        self.debug = debug
        self._cnt = 0

    def _name(self) -> str:
        name = f"n{self._cnt}"
        self._cnt += 1
        return name

    def _node(self, node: Node, names: dict) -> str:
        # Children are drawn first, their names are in names
        name = self._name()

        if node.op == OP.VAL:
            self._graph.node(name, node.label(), color=TreeVis.value_color)

        elif node.op == OP.FUNC:
            self._graph.node(name, node.label(), color=TreeVis.function_color,
                             fontcolor=TreeVis.function_color)
            for idx, arg in enumerate(node.args):
                self._graph.edge(name, names[id(arg)],
                                 label=str(idx) if self.debug else None,
                                 color=TreeVis.argument_edge_color)

        else:
            # Parenthesized subexpressions are drawn dashed
            style = "dashed" if node.is_leaf() else "solid"
            self._graph.node(name, node.label(), shape="circle", style=style,
                             color=TreeVis.operator_color)
            self._graph.edge(name, names[id(node.left)])
            self._graph.edge(name, names[id(node.right)])

        return name

    def tree(self, root: Node, title: str = None) -> None:
        if title:
            self._graph.attr(label=title, labelloc="t")

        names = {}
        for node in postorder(root):
            names[id(node)] = self._node(node, names)

    def source(self) -> str:
        return self._graph.source

    def save(self) -> str:
        return self._graph.save()
