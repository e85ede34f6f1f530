"""Command-line interface for sarif-review."""
