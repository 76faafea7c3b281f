"""Integration tests for resolving qualifiers in the presence of shadowing.

A package name can be shadowed by any declaration in the file. The resolver
must decline such selectors instead of attributing them to the import.
"""

from goident.package_namer import GuessPackageNamer
from goident.resolver import IdentResolver
from tests.helpers import find_selector, parse_go

SOURCE = """\
package main

import (
	"fmt"
	"io"
	"os"
	str "strings"
)

func main() {
	fmt.Println("package")

	fmt := newPrinter()
	fmt.Println("local")

	for _, str := range items {
		str.Trim()
	}
	str.TrimSpace(" x ")

	copyTo(os.Stdout)
}

func copyTo(w io.Writer) {
	io := wrap(w)
	io.Flush()
}

func close(os io.Closer) {
	os.Close()
}
"""

FILE = parse_go(SOURCE)


def resolve(resolver: IdentResolver, selector: str, occurrence: int = 0) -> str:
    """Resolve the selected name of a selector in SOURCE."""
    parent, ident = find_selector(FILE, selector, occurrence)
    return resolver.resolve_ident(FILE, parent, ident)


def test_shadowing_throughout_a_file() -> None:
    """Test one resolver answering for many selectors in a single file."""
    resolver = IdentResolver(GuessPackageNamer())

    assert resolve(resolver, "fmt.Println", 0) == "fmt"
    assert resolve(resolver, "fmt.Println", 1) == ""
    assert resolve(resolver, "str.Trim") == ""
    assert resolve(resolver, "str.TrimSpace") == "strings"
    assert resolve(resolver, "os.Stdout") == "os"
    assert resolve(resolver, "io.Writer") == "io"
    assert resolve(resolver, "io.Flush") == ""
    assert resolve(resolver, "io.Closer") == "io"
    assert resolve(resolver, "os.Close") == ""


def test_import_name_is_not_a_local_binding_in_other_functions() -> None:
    """Test that a shadowing declaration in one function does not affect another."""
    resolver = IdentResolver(GuessPackageNamer())

    # io is shadowed inside copyTo only; close's signature still uses the package
    assert resolve(resolver, "io.Closer") == "io"
    assert resolve(resolver, "io.Writer") == "io"
