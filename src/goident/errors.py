"""Exceptions raised while resolving qualified identifiers.

Every recoverable failure derives from ResolverError. All of them describe
structural properties of a source file, so retrying the same file fails the
same way.

MalformedImportPathError is an AssertionError outside that hierarchy. An import
path literal that cannot be decoded means the caller passed a broken syntax tree.
"""


class ResolverError(Exception):
    """Base class for failures reported by the identifier resolver."""


class MissingPackageNamerError(ResolverError):
    """The resolver was constructed without a package namer."""

    def __init__(self) -> None:
        """Build the configuration error message."""
        super().__init__("IdentResolver requires a package namer to resolve unaliased imports")


class DotImportError(ResolverError):
    """A file contains a dot-import, whose names cannot be resolved syntactically."""

    def __init__(self, path: str) -> None:
        """Record the import path of the offending dot-import."""
        super().__init__(f"unsupported dot-import found for {path}")
        self.path = path


class DuplicateAliasError(ResolverError):
    """Two import declarations in one file bind the same local name."""

    def __init__(self, name: str, first_path: str, second_path: str) -> None:
        """Record the clashing name and both import paths."""
        super().__init__(f"multiple packages using name {name}: {first_path} and {second_path}")
        self.name = name
        self.first_path = first_path
        self.second_path = second_path


class PackageNameResolutionError(ResolverError):
    """The package namer failed for an unaliased import.

    The namer's own exception is available as ``__cause__``.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Record the import path and the namer's failure message."""
        super().__init__(f"could not resolve package name for {path}: {reason}")
        self.path = path


class PackageNotFoundError(LookupError):
    """Raised by the stock package namers when a path has no known name."""

    def __init__(self, path: str) -> None:
        """Record the unknown import path."""
        super().__init__(f"package {path} not found")
        self.path = path


class MalformedImportPathError(AssertionError):
    """An import path literal could not be decoded."""

    def __init__(self, literal: str, reason: str) -> None:
        """Record the raw literal text and why decoding failed."""
        super().__init__(f"malformed import path literal {literal!r}: {reason}")
        self.literal = literal
