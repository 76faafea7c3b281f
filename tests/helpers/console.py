"""Console testing utilities."""

from collections.abc import Iterator
from contextlib import contextmanager
from io import StringIO

from rich.console import Console


@contextmanager
def capture_console_output(width: int = 120) -> Iterator[tuple[Console, StringIO]]:
    """Create a plain-text Console writing into a buffer.

    Yields:
        tuple[Console, StringIO]: Console instance and output buffer

    Example:
        with capture_console_output() as (console, output):
            display_results(console, result)
            assert "fmt.Println" in output.getvalue()

    """
    output = StringIO()
    yield Console(file=output, force_terminal=False, width=width), output


def assert_console_contains(output: StringIO, *expected_texts: str) -> None:
    """Assert that every expected fragment appears in the captured output."""
    output_str = output.getvalue()
    missing = [text for text in expected_texts if text not in output_str]
    assert not missing, f"Expected {missing!r} in output: {output_str!r}"
