"""A NodeVisitor-style base class for tree-sitter syntax trees.

Works like ast.NodeVisitor: ``visit(node)`` calls ``visit_<node.type>`` when the
subclass defines it, otherwise ``generic_visit``, which visits every named child.
Anonymous nodes (punctuation and keywords) are never dispatched.

The walk runs on an explicit work stack, so tree depth is not limited by the
interpreter's recursion limit. Inside a handler, ``visit`` and ``then`` queue
work instead of running it: queued items run in the order they were queued,
after the handler returns and before the next sibling of the handled node.
Statements in the handler body itself run immediately.
"""

from collections.abc import Callable

from tree_sitter import Node

type WorkItem = Node | Callable[[], None]


class TreeVisitor:
    """Walks a tree-sitter tree, dispatching on node type."""

    # Work queued by the running handler; None when no walk is in progress
    _queued: list[WorkItem] | None = None

    def visit(self, node: Node) -> None:
        """Visit a node, or queue it when called from inside a handler."""
        if self._queued is not None:
            self._queued.append(node)
            return
        self._walk(node)

    def then(self, action: Callable[[], None]) -> None:
        """Queue ``action`` to run after the work queued before it."""
        assert self._queued is not None, "then() can only be called from a handler"
        self._queued.append(action)

    def dispatch(self, node: Node) -> None:
        """Call the handler for a node's type."""
        visitor: Callable[[Node], None] = getattr(self, f"visit_{node.type}", self.generic_visit)
        visitor(node)

    def generic_visit(self, node: Node) -> None:
        """Visit every named child of the node in source order."""
        for child in node.named_children:
            self.visit(child)

    def visit_by_field(self, node: Node, field_name: str) -> None:
        """Visit every child attached to ``node`` under the given field name."""
        for child in node.children_by_field_name(field_name):
            if child.is_named:
                self.visit(child)

    def _walk(self, root: Node) -> None:
        stack: list[WorkItem] = [root]
        try:
            while stack:
                item = stack.pop()
                self._queued = []
                if isinstance(item, Node):
                    self.dispatch(item)
                else:
                    item()
                stack.extend(reversed(self._queued))
        finally:
            self._queued = None
