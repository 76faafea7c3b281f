"""Resolve package-qualified identifiers in Go source files to their import paths."""
