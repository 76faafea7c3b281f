"""Rich formatting and display for analysis results."""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import AnalysisResult, ImportedPackage, ImportKind, QualifiedReference, UnresolvedQualifier


def format_references_table(references: tuple[QualifiedReference, ...]) -> Table:
    """Create Rich table listing qualified references and their import paths."""
    table = Table(title="Qualified References")

    table.add_column("Line", justify="right", style="magenta")
    table.add_column("Reference", style="cyan", no_wrap=True)
    table.add_column("Import Path", style="green")

    for reference in references:
        table.add_row(
            f"{reference.line}:{reference.column}",
            f"{reference.alias}.{reference.name}",
            reference.path,
        )

    return table


def format_imports_table(imports: tuple[ImportedPackage, ...]) -> Table:
    """Create Rich table describing the file's import block."""
    table = Table(title="Imports")

    table.add_column("Line", justify="right", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Import Path", style="green")
    table.add_column("Kind")

    for imported in imports:
        kind_text = Text(str(imported.kind))
        if imported.kind in (ImportKind.BLANK, ImportKind.CGO):
            kind_text.style = "dim"
        table.add_row(str(imported.line), imported.local_name or "-", imported.path, kind_text)

    return table


def display_unresolved_summary(console: Console, unresolved: tuple[UnresolvedQualifier, ...]) -> None:
    """Display summary of qualifiers that matched no import."""
    if not unresolved:
        return

    console.print(f"\n[yellow]Warning: {len(unresolved)} qualifier(s) matched no import[/yellow]")

    # Show first 5 examples
    console.print("\n[yellow]Examples:[/yellow]")
    for qualifier in unresolved[:5]:
        console.print(f"  Line {qualifier.line}: {qualifier.alias}.{qualifier.name}")

    if len(unresolved) > 5:
        console.print(f"  ... and {len(unresolved) - 5} more")


def display_results(console: Console, result: AnalysisResult, *, show_imports: bool = False) -> None:
    """Display complete analysis results."""
    if show_imports:
        console.print(format_imports_table(result.imports))

    if not result.references:
        console.print("[yellow]No qualified references found.[/yellow]")
    else:
        console.print(format_references_table(result.references))
        packages = {reference.path for reference in result.references}
        console.print(f"\n{len(result.references)} reference(s) to {len(packages)} package(s)")

    display_unresolved_summary(console, result.unresolved)
