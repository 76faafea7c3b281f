"""Resolution of qualified identifiers to import paths.

IdentResolver answers one question for static-analysis and rewriting tools:
given an identifier written as ``alias.Name``, which import path does ``alias``
refer to? It uses only the file's import block and its own lexical scopes, and
declines (returns an empty path) for anything that is not qualified by a
package name.

Dot-imports make this impossible without the imported package's export data, so
a file containing one cannot be resolved at all.
"""

import logging
import threading

from tree_sitter import Node

from goident.binding_collector import collect_bindings
from goident.errors import MissingPackageNamerError
from goident.import_table import build_import_table
from goident.models import BindingIndex, ImportTable, SourceFile, node_text
from goident.package_namer import PackageNamer

logger = logging.getLogger(__name__)

# Parent node type -> (field holding the qualifier, node type of a bare qualifier)
_SELECTOR_SHAPES = {
    "selector_expression": ("operand", "identifier"),  # fmt.Println(...)
    "qualified_type": ("package", "package_identifier"),  # var w io.Writer
}


class IdentResolver:
    """Resolves package-qualified identifiers using each file's imports.

    Import tables and binding indexes are built lazily, once per SourceFile,
    and cached for the lifetime of the resolver. A single lock guards both
    caches and is held for the whole of a build, so concurrent first lookups on
    the same file wait for one build instead of racing. Failed builds are not
    cached.
    """

    def __init__(self, package_namer: PackageNamer | None = None) -> None:
        """Create a resolver.

        Args:
            package_namer: Names packages imported without an alias. Required;
                every resolution fails until one is supplied.
        """
        self.package_namer = package_namer
        self._lock = threading.Lock()
        self._imports: dict[SourceFile, ImportTable] = {}
        self._bindings: dict[SourceFile, BindingIndex] = {}

    def resolve_ident(self, file: SourceFile, parent: Node, ident: Node) -> str:
        """Return the import path qualifying ``ident``, or "" if it is not qualified.

        Args:
            file: The file containing the identifier
            parent: The identifier's immediate parent node
            ident: The identifier node, normally the Sel part of ``X.Sel``

        Returns:
            The import path bound to the selector's qualifier, or an empty string
            when the parent is not a selector, the qualifier is not a bare
            identifier, the qualifier refers to a declaration in the file, or no
            import uses that name

        Raises:
            MissingPackageNamerError: If no package namer was configured
            DotImportError: If the file contains a dot-import
            DuplicateAliasError: If two imports in the file share a name
            PackageNameResolutionError: If the namer fails for an import
        """
        imports = self.import_table(file)

        shape = _SELECTOR_SHAPES.get(parent.type)
        if shape is None:
            return ""
        qualifier_field, qualifier_type = shape

        qualifier = parent.child_by_field_name(qualifier_field)
        if qualifier is None or qualifier.type != qualifier_type:
            return ""

        if self.binding_index(file).is_bound(qualifier):
            # A local variable, parameter or type shadowing a package name
            return ""

        # The local package path is never needed: only selector qualifiers are resolved
        path = imports.lookup(node_text(qualifier))
        if path is None:
            logger.debug("%s: %s does not name an import", file.filename, node_text(qualifier))
            return ""
        return path

    def import_table(self, file: SourceFile) -> ImportTable:
        """Return the file's import table, building and caching it on first use.

        Raises:
            MissingPackageNamerError: If no package namer was configured
            DotImportError: If the file contains a dot-import
            DuplicateAliasError: If two imports in the file share a name
            PackageNameResolutionError: If the namer fails for an import
        """
        if self.package_namer is None:
            raise MissingPackageNamerError

        with self._lock:
            imports = self._imports.get(file)
            if imports is None:
                logger.debug("%s: building import table", file.filename)
                imports = build_import_table(file, self.package_namer)
                self._imports[file] = imports
            return imports

    def binding_index(self, file: SourceFile) -> BindingIndex:
        """Return the index of identifiers bound to declarations in the file, cached."""
        with self._lock:
            bindings = self._bindings.get(file)
            if bindings is None:
                logger.debug("%s: collecting local bindings", file.filename)
                bindings = collect_bindings(file)
                self._bindings[file] = bindings
            return bindings
