"""Core data models for the qualified identifier resolver."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum, auto

from tree_sitter import Node, Tree

type Span = tuple[int, int]
"""Byte range (start, end) of a node within its source file.

Spans identify identifier nodes independently of the tree_sitter.Node wrapper
objects, which are created afresh on every traversal.
"""


def node_span(node: Node) -> Span:
    """Return the byte span of a syntax node."""
    return (node.start_byte, node.end_byte)


def node_text(node: Node) -> str:
    """Return the source text of a syntax node."""
    text = node.text
    assert text is not None, "tree was parsed without keeping its source"
    return text.decode("utf-8")


@dataclass(frozen=True, eq=False)
class SourceFile:
    """A parsed Go source file.

    Compared and hashed by identity: two parses of the same text are distinct
    files, and resolver caches are keyed on the object itself.
    """

    filename: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        """The source_file node at the top of the tree."""
        return self.tree.root_node


class ImportKind(StrEnum):
    """How an import spec introduces (or declines to introduce) a local name."""

    NAMED = auto()  # import u "mypkg/util"
    DEFAULT = auto()  # import "fmt", name supplied by the package namer
    BLANK = auto()  # import _ "mypkg/initonly"
    DOT = auto()  # import . "mypkg/dotted"
    CGO = auto()  # import "C"


@dataclass(frozen=True)
class ImportedPackage:
    """A single import spec as seen by the import table builder.

    Examples:
        import "fmt"            -> ImportedPackage("fmt", "fmt", DEFAULT, 3)
        import u "mypkg/util"   -> ImportedPackage("mypkg/util", "u", NAMED, 4)
        import _ "net/http/pprof" -> ImportedPackage("net/http/pprof", None, BLANK, 5)
    """

    path: str
    local_name: str | None  # None when the import binds no usable name
    kind: ImportKind
    line: int  # 1-indexed


@dataclass(frozen=True)
class ImportTable:
    """Mapping from local package names to import paths for one file.

    Attributes:
        imports: Every import spec processed, in file order, including blank and
            cgo imports that bind no name
        paths: Local name -> import path for the names the file can reference
    """

    imports: tuple[ImportedPackage, ...]
    paths: Mapping[str, str]

    def lookup(self, name: str) -> str | None:
        """Return the import path bound to ``name``, or None if no import uses it."""
        return self.paths.get(name)

    def __len__(self) -> int:
        """Number of referenceable names in the table."""
        return len(self.paths)


@dataclass(frozen=True)
class BindingIndex:
    """Identifiers in one file that refer to a declaration made in that file.

    An identifier found here is a variable, constant, type, function or parameter
    reference, so it can never be the package qualifier of a selector.
    """

    spans: frozenset[Span]

    def is_bound(self, node: Node) -> bool:
        """Return True if the identifier node refers to a declaration in the file."""
        return node_span(node) in self.spans


@dataclass(frozen=True)
class QualifiedReference:
    """A selector whose qualifier resolved to an imported package.

    Example:
        fmt.Println on line 9 -> QualifiedReference("fmt", "Println", "fmt", 9, 2)
    """

    alias: str
    name: str
    path: str
    line: int  # 1-indexed
    column: int  # 1-indexed


@dataclass(frozen=True)
class UnresolvedQualifier:
    """A selector qualified by a free identifier that matches no import."""

    alias: str
    name: str
    line: int
    column: int


@dataclass(frozen=True)
class AnalysisResult:
    """Result of resolving every qualified reference in one file."""

    imports: tuple[ImportedPackage, ...]
    references: tuple[QualifiedReference, ...]
    unresolved: tuple[UnresolvedQualifier, ...]
