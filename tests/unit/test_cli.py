"""Unit tests for CLI module (no I/O operations)."""

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from goident.cli import build_package_namer, parse_args, parse_package_name
from goident.errors import PackageNotFoundError
from goident.package_namer import GuessPackageNamer, MappingPackageNamer


def test_parse_args_basic() -> None:
    """Test basic argument parsing."""
    with patch("sys.argv", ["goident", "main.go"]):
        args = parse_args()
        assert args.target == Path("main.go")
        assert args.package_name == []
        assert args.strict is False
        assert args.show_imports is False
        assert args.debug is False


def test_parse_args_with_package_names() -> None:
    """Test repeated --package-name overrides."""
    argv = [
        "goident",
        "main.go",
        "--package-name",
        "gopkg.in/yaml.v3=yaml",
        "--package-name",
        "example.com/x=y",
    ]
    with patch("sys.argv", argv):
        args = parse_args()
        assert args.package_name == [("gopkg.in/yaml.v3", "yaml"), ("example.com/x", "y")]


def test_parse_args_flags() -> None:
    """Test boolean flags."""
    with patch("sys.argv", ["goident", "main.go", "--strict", "--show-imports", "--debug"]):
        args = parse_args()
        assert args.strict is True
        assert args.show_imports is True
        assert args.debug is True


def test_parse_package_name_splits_on_last_equals() -> None:
    """Test that paths containing '=' keep everything before the last one."""
    assert parse_package_name("example.com/a=b=c") == ("example.com/a=b", "c")


@pytest.mark.parametrize("value", ["fmt", "=fmt", "fmt="])
def test_parse_package_name_invalid(value: str) -> None:
    """Test rejection of malformed overrides."""
    with pytest.raises(argparse.ArgumentTypeError):
        parse_package_name(value)


def test_build_package_namer_guessing() -> None:
    """Test that the default namer guesses but honours overrides."""
    args = argparse.Namespace(package_name=[("example.com/x", "y")], strict=False)
    namer = build_package_namer(args)

    assert isinstance(namer, GuessPackageNamer)
    assert namer.resolve_package("example.com/x") == "y"
    assert namer.resolve_package("net/http") == "http"


def test_build_package_namer_strict() -> None:
    """Test that --strict only knows declared names."""
    args = argparse.Namespace(package_name=[("fmt", "fmt")], strict=True)
    namer = build_package_namer(args)

    assert isinstance(namer, MappingPackageNamer)
    assert namer.resolve_package("fmt") == "fmt"
    with pytest.raises(PackageNotFoundError):
        namer.resolve_package("net/http")
