"""Analysis orchestrator: resolve every qualified reference in a Go file."""

from pathlib import Path

from tree_sitter import Node

from goident.models import AnalysisResult, QualifiedReference, SourceFile, UnresolvedQualifier, node_text
from goident.package_namer import GuessPackageNamer, PackageNamer
from goident.parse_source import parse_file, parse_source
from goident.resolver import IdentResolver
from goident.tree_visitor import TreeVisitor

# Selector node type -> (qualifier field, bare qualifier node type, selected name field)
_SELECTORS = {
    "selector_expression": ("operand", "identifier", "field"),
    "qualified_type": ("package", "package_identifier", "name"),
}


class SelectorFinder(TreeVisitor):
    """Collects selector_expression and qualified_type nodes in source order."""

    def __init__(self) -> None:
        """Initialize with no selectors found."""
        super().__init__()
        self.selectors: list[Node] = []

    def visit_import_declaration(self, node: Node) -> None:
        """Import specs contain no selectors."""

    def visit_selector_expression(self, node: Node) -> None:
        """Record a value selector, then look inside its operand."""
        self.selectors.append(node)
        self.generic_visit(node)

    def visit_qualified_type(self, node: Node) -> None:
        """Record a qualified type name."""
        self.selectors.append(node)


def analyze_tree(file: SourceFile, resolver: IdentResolver) -> AnalysisResult:
    """Resolve every package-qualified selector in a parsed file.

    Args:
        file: The parsed source file
        resolver: Resolver to use; its caches are reused across calls

    Returns:
        AnalysisResult with the file's imports, the selectors that resolved to
        an import and the free qualifiers that matched no import

    Raises:
        ResolverError: If the file's imports cannot be resolved (dot-import,
            duplicate names or a package namer failure)
    """
    imports = resolver.import_table(file)
    bindings = resolver.binding_index(file)

    finder = SelectorFinder()
    finder.visit(file.root)

    references: list[QualifiedReference] = []
    unresolved: list[UnresolvedQualifier] = []
    for selector in finder.selectors:
        qualifier_field, qualifier_type, name_field = _SELECTORS[selector.type]
        qualifier = selector.child_by_field_name(qualifier_field)
        selected = selector.child_by_field_name(name_field)
        if qualifier is None or selected is None or qualifier.type != qualifier_type:
            continue

        alias = node_text(qualifier)
        name = node_text(selected)
        line = qualifier.start_point.row + 1
        column = qualifier.start_point.column + 1

        path = resolver.resolve_ident(file, selector, selected)
        if path:
            references.append(QualifiedReference(alias=alias, name=name, path=path, line=line, column=column))
        elif not bindings.is_bound(qualifier):
            unresolved.append(UnresolvedQualifier(alias=alias, name=name, line=line, column=column))

    return AnalysisResult(imports=imports.imports, references=tuple(references), unresolved=tuple(unresolved))


def analyze_source(
    source: str, filename: str = "main.go", package_namer: PackageNamer | None = None
) -> AnalysisResult | None:
    """Complete analysis pipeline for Go source code.

    Returns None if the source does not parse. Without an explicit namer,
    package names are guessed from import paths.
    """
    file = parse_source(source, filename)
    if file is None:
        return None
    return analyze_tree(file, IdentResolver(package_namer or GuessPackageNamer()))


def analyze_file(file_path: Path, package_namer: PackageNamer | None = None) -> AnalysisResult | None:
    """Complete analysis pipeline for a single Go file.

    Returns None if the file is missing, unreadable or does not parse.
    """
    file = parse_file(file_path)
    if file is None:
        return None
    return analyze_tree(file, IdentResolver(package_namer or GuessPackageNamer()))
