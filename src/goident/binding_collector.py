"""Single-pass collector of identifiers bound to declarations in a Go file.

tree-sitter trees carry no name resolution, so this visitor reproduces the part
of it the resolver depends on: deciding whether an identifier refers to
something declared in the file (a top-level declaration, a parameter, a local
variable, constant or type) rather than being a free name such as a package
qualifier or a predeclared identifier.

The rules follow the Go parser's own resolution:
    - Top-level funcs, types, vars and consts are visible everywhere in the file,
      before and after their declaration. Methods and imports declare nothing.
    - Function parameters, results, receivers and type parameters are declared
      after their types are resolved, so ``func f(io io.Writer)`` still uses the
      io package in its signature.
    - ``:=`` declares its left-hand names after the right-hand side is resolved,
      and only from that point onwards.
    - Local type names are visible inside their own definition.
"""

from collections.abc import Iterator
from typing import override

from tree_sitter import Node

from goident.models import BindingIndex, SourceFile, Span, node_span, node_text
from goident.scope_tracker import (
    ScopeKind,
    ScopeStack,
    add_scope,
    create_initial_stack,
    declare,
    drop_last_scope,
    is_declared,
)
from goident.tree_visitor import TreeVisitor

_SPEC_TYPES = {
    "type_declaration": ("type_spec", "type_alias"),
    "var_declaration": ("var_spec",),
    "const_declaration": ("const_spec",),
}


def _iter_specs(declaration: Node) -> Iterator[Node]:
    """Yield the specs of a type/var/const declaration, grouped or not."""
    spec_types = _SPEC_TYPES[declaration.type]
    for child in declaration.named_children:
        if child.type in spec_types:
            yield child
        elif child.type.endswith("_list"):
            yield from (spec for spec in child.named_children if spec.type in spec_types)


def _declared_names(node: Node, field_name: str = "name") -> list[str]:
    """Return the identifier texts attached to ``node`` under ``field_name``."""
    return [node_text(child) for child in node.children_by_field_name(field_name) if child.is_named]


def _expression_list_names(node: Node | None) -> list[str]:
    """Return the identifier names on the left of a := or in a type switch alias."""
    if node is None:
        return []
    return [node_text(child) for child in node.named_children if child.type == "identifier"]


def _has_define_token(node: Node) -> bool:
    """Return True if the node's own tokens include ``:=``."""
    return any(child.type == ":=" for child in node.children)


def _iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every named descendant of a node, depth first."""
    pending = list(reversed(node.named_children))
    while pending:
        current = pending.pop()
        yield current
        pending.extend(reversed(current.named_children))


def collect_top_level_names(root: Node) -> set[str]:
    """Return the names declared by the file's top-level declarations.

    Args:
        root: The source_file node of a parsed Go file

    Returns:
        Names of top-level functions, types, variables and constants
    """
    names: set[str] = set()
    for node in root.named_children:
        if node.type == "function_declaration":
            names.update(_declared_names(node))
        elif node.type in _SPEC_TYPES:
            for spec in _iter_specs(node):
                names.update(_declared_names(spec))
    names.discard("_")
    return names


class BindingCollector(TreeVisitor):
    """Collects the spans of identifiers that refer to declarations in the file.

    Attributes:
        bound: Spans of identifier, type_identifier and package_identifier nodes
            whose name resolves to a declaration in scope at that point
    """

    def __init__(self, top_level_names: set[str]) -> None:
        """Initialize the collector with the file scope pre-populated."""
        super().__init__()
        self.bound: set[Span] = set()
        self.scope_stack: ScopeStack = create_initial_stack(top_level_names)

    def _push(self, kind: ScopeKind) -> None:
        self.scope_stack = add_scope(self.scope_stack, kind)

    def _pop(self) -> None:
        self.scope_stack = drop_last_scope(self.scope_stack)

    def _visit_in_scope(self, node: Node, kind: ScopeKind) -> None:
        self._push(kind)
        self.generic_visit(node)
        self.then(self._pop)

    def _declare_later(self, names: list[str]) -> None:
        """Declare names once the work queued so far has run."""
        self.then(lambda: declare(self.scope_stack, names))

    def _record_reference(self, node: Node) -> None:
        if is_declared(self.scope_stack, node_text(node)):
            self.bound.add(node_span(node))

    # References

    def visit_identifier(self, node: Node) -> None:
        """Record a value or function reference."""
        self._record_reference(node)

    def visit_type_identifier(self, node: Node) -> None:
        """Record a type reference."""
        self._record_reference(node)

    def visit_package_identifier(self, node: Node) -> None:
        """Record the qualifier of a qualified type such as io.Writer."""
        self._record_reference(node)

    def visit_package_clause(self, node: Node) -> None:
        """The package name is not a reference."""

    def visit_import_declaration(self, node: Node) -> None:
        """Imports are handled by the import table, not by scopes."""

    def visit_labeled_statement(self, node: Node) -> None:
        """Skip the label, which lives in its own namespace."""
        for child in node.named_children:
            if child.type != "label_name":
                self.visit(child)

    # Functions

    def _visit_signature(self, node: Node) -> None:
        """Resolve the types of a signature, then declare its names.

        Handles the receiver, type parameters, parameters and results of a
        function declaration, method declaration or function literal. Must be
        called with the function's scope already pushed.
        """
        type_params = node.child_by_field_name("type_parameters")
        if type_params is not None:
            for param in type_params.named_children:
                declare(self.scope_stack, _declared_names(param))
            for param in type_params.named_children:
                self.visit_by_field(param, "type")

        receiver = node.child_by_field_name("receiver")
        if receiver is not None:
            declare(self.scope_stack, self._receiver_type_parameters(receiver))

        names: list[str] = []
        for field_name in ("receiver", "parameters", "result"):
            signature_part = node.child_by_field_name(field_name)
            if signature_part is None:
                continue
            if signature_part.type != "parameter_list":
                # Unnamed single result type
                self.visit(signature_part)
                continue
            for param in signature_part.named_children:
                if param.type in ("parameter_declaration", "variadic_parameter_declaration"):
                    self.visit_by_field(param, "type")
                    names.extend(_declared_names(param))

        self._declare_later(names)

    def _receiver_type_parameters(self, receiver: Node) -> list[str]:
        """Return the type parameter names introduced by a generic receiver.

        ``func (l *List[T]) Len() int`` declares T for the method body.
        """
        names: list[str] = []
        pending = [receiver]
        while pending:
            current = pending.pop()
            if current.type == "type_arguments":
                names.extend(
                    node_text(descendant)
                    for descendant in _iter_descendants(current)
                    if descendant.type == "type_identifier"
                )
            else:
                pending.extend(current.named_children)
        return names

    def _visit_function(self, node: Node) -> None:
        self._push(ScopeKind.FUNCTION)
        self._visit_signature(node)
        self.visit_by_field(node, "body")
        self.then(self._pop)

    @override
    def dispatch(self, node: Node) -> None:
        """Dispatch on node type, routing all function shapes to one handler."""
        if node.type in ("function_declaration", "method_declaration", "func_literal"):
            self._visit_function(node)
        else:
            super().dispatch(node)

    # Declarations

    def visit_short_var_declaration(self, node: Node) -> None:
        """x, err := f(): resolve the right side, then declare the left side."""
        self.visit_by_field(node, "right")
        self._declare_later(_expression_list_names(node.child_by_field_name("left")))

    def visit_var_spec(self, node: Node) -> None:
        """var x T = v: resolve type and value, then declare the names."""
        self.visit_by_field(node, "type")
        self.visit_by_field(node, "value")
        self._declare_later(_declared_names(node))

    def visit_const_spec(self, node: Node) -> None:
        """const x T = v: resolve type and value, then declare the names."""
        self.visit_by_field(node, "type")
        self.visit_by_field(node, "value")
        self._declare_later(_declared_names(node))

    def visit_type_spec(self, node: Node) -> None:
        """type T[P any] struct{...}: T is visible inside its own definition."""
        declare(self.scope_stack, _declared_names(node))
        self._push(ScopeKind.BLOCK)
        type_params = node.child_by_field_name("type_parameters")
        if type_params is not None:
            for param in type_params.named_children:
                declare(self.scope_stack, _declared_names(param))
            for param in type_params.named_children:
                self.visit_by_field(param, "type")
        self.visit_by_field(node, "type")
        self.then(self._pop)

    def visit_type_alias(self, node: Node) -> None:
        """type A = B: declare A, then resolve B."""
        declare(self.scope_stack, _declared_names(node))
        self.visit_by_field(node, "type")

    # Scopes

    def visit_block(self, node: Node) -> None:
        """Open a scope for a braced block."""
        self._visit_in_scope(node, ScopeKind.BLOCK)

    def visit_if_statement(self, node: Node) -> None:
        """Open the implicit scope holding an if statement's initializer."""
        self._visit_in_scope(node, ScopeKind.STATEMENT)

    def visit_for_statement(self, node: Node) -> None:
        """Open the implicit scope holding a for statement's clause."""
        self._visit_in_scope(node, ScopeKind.STATEMENT)

    def visit_expression_switch_statement(self, node: Node) -> None:
        """Open the implicit scope holding a switch statement's initializer."""
        self._visit_in_scope(node, ScopeKind.STATEMENT)

    def visit_select_statement(self, node: Node) -> None:
        """Open the scope of a select statement."""
        self._visit_in_scope(node, ScopeKind.STATEMENT)

    def visit_expression_case(self, node: Node) -> None:
        """Each case clause is its own scope."""
        self._visit_in_scope(node, ScopeKind.CLAUSE)

    def visit_communication_case(self, node: Node) -> None:
        """Each select case is its own scope, holding any received variables."""
        self._visit_in_scope(node, ScopeKind.CLAUSE)

    def visit_default_case(self, node: Node) -> None:
        """The default clause is its own scope."""
        self._visit_in_scope(node, ScopeKind.CLAUSE)

    def visit_range_clause(self, node: Node) -> None:
        """for k, v := range xs: resolve xs, then declare k and v."""
        self._visit_assignment(node)

    def visit_receive_statement(self, node: Node) -> None:
        """case v, ok := <-ch: resolve the channel, then declare v and ok."""
        self._visit_assignment(node)

    def _visit_assignment(self, node: Node) -> None:
        self.visit_by_field(node, "right")
        left = node.child_by_field_name("left")
        if _has_define_token(node):
            self._declare_later(_expression_list_names(left))
        elif left is not None:
            self.visit(left)

    def visit_type_switch_statement(self, node: Node) -> None:
        """switch x := v.(type): x is declared afresh in every clause."""
        self._push(ScopeKind.STATEMENT)
        self.visit_by_field(node, "initializer")
        self.visit_by_field(node, "value")
        alias_names = _expression_list_names(node.child_by_field_name("alias"))

        for clause in node.named_children:
            if clause.type not in ("type_case", "default_case"):
                continue
            self.then(lambda: self._push(ScopeKind.CLAUSE))
            # Case types are resolved before the alias comes into scope
            self.visit_by_field(clause, "type")
            self._declare_later(alias_names)
            case_types = {node_span(case_type) for case_type in clause.children_by_field_name("type")}
            for child in clause.named_children:
                if node_span(child) not in case_types:
                    self.visit(child)
            self.then(self._pop)

        self.then(self._pop)


def collect_bindings(file: SourceFile) -> BindingIndex:
    """Build the index of identifiers bound to declarations in a file.

    Args:
        file: The parsed source file

    Returns:
        Immutable BindingIndex for the file
    """
    collector = BindingCollector(collect_top_level_names(file.root))
    collector.visit(file.root)
    return BindingIndex(spans=frozenset(collector.bound))
