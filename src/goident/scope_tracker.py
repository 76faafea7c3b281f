"""Lexical scope tracking for Go syntax tree traversal.

A scope stack is an immutable tuple of scopes, innermost last, always rooted at
the file scope. Pushing and popping return new stacks; the scopes themselves
accumulate names as declarations are encountered, because in Go a local name is
only visible from its declaration onwards.

Key Components:
    - Pure scope stack functions: create_initial_stack, add_scope, drop_last_scope
    - Declaration and lookup: declare, is_declared
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto


class ScopeKind(StrEnum):
    """The syntactic construct that opened a scope."""

    FILE = auto()
    FUNCTION = auto()  # func declarations, methods and func literals
    BLOCK = auto()  # { ... } bodies
    STATEMENT = auto()  # implicit scopes of if/for/switch/select statements
    CLAUSE = auto()  # case and default clauses


@dataclass
class Scope:
    """A single lexical scope and the names declared in it so far."""

    kind: ScopeKind
    names: set[str] = field(default_factory=set)


type ScopeStack = tuple[Scope, ...]


def create_initial_stack(file_names: Iterable[str] = ()) -> ScopeStack:
    """Create a stack holding only the file scope.

    Args:
        file_names: Names of the file's top-level declarations, which are
            visible everywhere in the file regardless of declaration order

    Returns:
        Initial stack containing only the file scope
    """
    return (Scope(kind=ScopeKind.FILE, names={name for name in file_names if name != "_"}),)


def add_scope(stack: ScopeStack, kind: ScopeKind) -> ScopeStack:
    """Return a new stack with an empty scope of the given kind pushed on top."""
    return (*stack, Scope(kind=kind))


def drop_last_scope(stack: ScopeStack) -> ScopeStack:
    """Return a new stack without the innermost scope.

    Raises:
        AssertionError: If attempting to remove the file scope
    """
    assert len(stack) > 1, "Cannot pop file scope"
    return stack[:-1]


def declare(stack: ScopeStack, names: Iterable[str]) -> None:
    """Declare names in the innermost scope of the stack.

    The blank identifier declares nothing and is ignored.
    """
    stack[-1].names.update(name for name in names if name != "_")


def is_declared(stack: ScopeStack, name: str) -> bool:
    """Return True if ``name`` is visible from the innermost scope of the stack."""
    return any(name in scope.names for scope in reversed(stack))
