"""Temporary file utilities for testing."""

import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def temp_go_file(content: str, suffix: str = ".go") -> Iterator[Path]:
    """Create a temporary Go source file with the given content.

    Args:
        content: Go source code to write to the file
        suffix: File suffix, overridable to exercise extension checks

    Yields:
        Path: Path to the temporary file

    Example:
        with temp_go_file('package main') as path:
            result = analyze_file(path)
            assert result is not None

    """
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False, encoding="utf-8") as f:
        f.write(content)
        temp_path = Path(f.name)

    try:
        yield temp_path
    finally:
        temp_path.unlink()
