"""Test helper utilities."""

from .console import assert_console_contains, capture_console_output
from .go_source import deeply_nested_source, find_nodes, find_selector, parse_go
from .temp_files import temp_go_file

__all__ = [
    "assert_console_contains",
    "capture_console_output",
    "deeply_nested_source",
    "find_nodes",
    "find_selector",
    "parse_go",
    "temp_go_file",
]
