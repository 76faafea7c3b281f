"""Parsing of Go source into tree-sitter syntax trees.

Parsing is kept at this single seam so that everything downstream can assume a
well-formed tree: sources with syntax errors are rejected here by returning
None, the same way missing or unreadable files are.
"""

from pathlib import Path

import tree_sitter_go
from tree_sitter import Language, Parser

from goident.models import SourceFile

GO_LANGUAGE = Language(tree_sitter_go.language())
GO_PARSER = Parser(GO_LANGUAGE)


def parse_source(source: str, filename: str) -> SourceFile | None:
    """Parse Go source code into a SourceFile.

    Args:
        source: Go source code as a string
        filename: Filename recorded on the SourceFile for reporting

    Returns:
        The parsed SourceFile, or None if the source contains syntax errors
    """
    source_bytes = source.encode("utf-8")
    tree = GO_PARSER.parse(source_bytes)
    if tree.root_node.has_error:
        return None
    return SourceFile(filename=filename, source=source_bytes, tree=tree)


def parse_file(file_path: Path) -> SourceFile | None:
    """Parse a Go file from disk.

    Args:
        file_path: Path to the Go source file

    Returns:
        The parsed SourceFile, or None on failure (file not found, encoding
        error or syntax error)
    """
    if not file_path.exists():
        return None

    try:
        source_code = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None

    return parse_source(source_code, str(file_path))
