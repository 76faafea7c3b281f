"""Building the per-file table of imported package names.

Go requires import declarations to precede every other top-level declaration,
so the builder only scans the leading import block of a file and stops at the
first declaration of any other kind.
"""

import logging
from types import MappingProxyType

from tree_sitter import Node

from goident.errors import DotImportError, DuplicateAliasError, PackageNameResolutionError
from goident.literals import unquote
from goident.models import ImportedPackage, ImportKind, ImportTable, SourceFile, node_text
from goident.package_namer import PackageNamer

logger = logging.getLogger(__name__)

CGO_IMPORT_PATH = "C"

# Top-level nodes that may appear before or between import declarations
_NON_DECLARATIONS = frozenset({"package_clause", "comment"})


def iter_import_specs(root: Node) -> list[Node]:
    """Return the import_spec nodes of the file's leading import block, in order.

    Args:
        root: The source_file node of a parsed Go file

    Returns:
        Every import_spec that appears before the first non-import declaration
    """
    specs: list[Node] = []
    for node in root.named_children:
        if node.type in _NON_DECLARATIONS:
            continue
        if node.type != "import_declaration":
            break
        for child in node.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(spec for spec in child.named_children if spec.type == "import_spec")
    return specs


def _classify_import(spec: Node, package_namer: PackageNamer) -> ImportedPackage:
    """Work out which local name, if any, an import spec binds.

    Raises:
        DotImportError: If the spec is a dot-import
        PackageNameResolutionError: If the namer fails for an unaliased import
    """
    path_node = spec.child_by_field_name("path")
    assert path_node is not None, "import_spec without a path"
    path = unquote(node_text(path_node))
    line = spec.start_point.row + 1

    if path == CGO_IMPORT_PATH:
        return ImportedPackage(path=path, local_name=None, kind=ImportKind.CGO, line=line)

    name_node = spec.child_by_field_name("name")
    if name_node is None:
        try:
            name = package_namer.resolve_package(path)
        except Exception as e:
            raise PackageNameResolutionError(path, str(e)) from e
        return ImportedPackage(path=path, local_name=name, kind=ImportKind.DEFAULT, line=line)

    match name_node.type:
        case "dot":
            raise DotImportError(path)
        case "blank_identifier":
            return ImportedPackage(path=path, local_name=None, kind=ImportKind.BLANK, line=line)
        case _:
            return ImportedPackage(path=path, local_name=node_text(name_node), kind=ImportKind.NAMED, line=line)


def build_import_table(file: SourceFile, package_namer: PackageNamer) -> ImportTable:
    """Build the table of package names a file can use as qualifiers.

    Args:
        file: The parsed source file
        package_namer: Supplies the name of packages imported without an alias

    Returns:
        Immutable ImportTable for the file

    Raises:
        DotImportError: If any import in the file is a dot-import
        DuplicateAliasError: If two imports bind the same local name, even when
            they import the same path
        PackageNameResolutionError: If the namer fails for an unaliased import
        MalformedImportPathError: If an import path literal cannot be decoded
    """
    imports: list[ImportedPackage] = []
    paths: dict[str, str] = {}

    for spec in iter_import_specs(file.root):
        imported = _classify_import(spec, package_namer)
        imports.append(imported)

        if imported.local_name is None:
            logger.debug("%s:%d: skipping %s import of %s", file.filename, imported.line, imported.kind, imported.path)
            continue

        if imported.local_name in paths:
            raise DuplicateAliasError(imported.local_name, paths[imported.local_name], imported.path)
        paths[imported.local_name] = imported.path

    logger.debug("%s: built import table with %d name(s)", file.filename, len(paths))
    return ImportTable(imports=tuple(imports), paths=MappingProxyType(paths))
