"""Package namers: the default local name of an imported Go package.

An unaliased import such as ``import "gopkg.in/yaml.v3"`` is referenced in code
by the package's declared name, which cannot be known without reading the
package itself. The resolver delegates that question to a PackageNamer.

Namers are pure functions of the import path. None of them cache; callers that
need caching wrap them.
"""

import re
from collections.abc import Mapping
from typing import Protocol

from goident.errors import PackageNotFoundError

_MAJOR_VERSION = re.compile(r"^v[0-9]+$")
_GOPKG_VERSION = re.compile(r"\.v[0-9]+$")
_NON_IDENTIFIER = re.compile(r"\W")


class PackageNamer(Protocol):
    """Returns the name code would use by default to refer to an import path."""

    def resolve_package(self, path: str) -> str:
        """Return the package name for ``path``.

        Raises:
            Exception: Any failure; the resolver wraps it with the import path.
        """
        ...


class MappingPackageNamer:
    """Looks package names up in a fixed mapping and fails for anything else."""

    def __init__(self, names: Mapping[str, str]) -> None:
        """Store a copy of the path -> name mapping."""
        self._names = dict(names)

    def resolve_package(self, path: str) -> str:
        """Return the mapped name for ``path``.

        Raises:
            PackageNotFoundError: If ``path`` is not in the mapping
        """
        try:
            return self._names[path]
        except KeyError:
            raise PackageNotFoundError(path) from None


class GuessPackageNamer:
    """Guesses package names from import paths using common Go conventions.

    Explicit overrides win. Otherwise the last path element is used, after
    skipping major-version suffixes and stripping the ``go-`` / ``-go`` / ``.go``
    decorations that repositories often carry but package names never do.

    Examples:
        fmt                          -> fmt
        net/http                     -> http
        github.com/dave/dst/v2       -> dst
        gopkg.in/yaml.v3             -> yaml
        github.com/mattn/go-sqlite3  -> sqlite3
        github.com/foo/bar-go        -> bar
    """

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        """Store optional explicit path -> name overrides."""
        self._overrides = dict(overrides or {})

    def resolve_package(self, path: str) -> str:
        """Return the override or guessed name for ``path``.

        Raises:
            PackageNotFoundError: If no identifier can be derived from ``path``
        """
        if path in self._overrides:
            return self._overrides[path]

        elements = [element for element in path.split("/") if element]
        if len(elements) > 1 and _MAJOR_VERSION.match(elements[-1]):
            elements.pop()
        if not elements:
            raise PackageNotFoundError(path)

        name = _GOPKG_VERSION.sub("", elements[-1])
        name = name.removeprefix("go-")
        for suffix in ("-go", ".go"):
            name = name.removesuffix(suffix)
        name = _NON_IDENTIFIER.sub("", name)

        if not name or name[0].isdigit():
            raise PackageNotFoundError(path)
        return name
