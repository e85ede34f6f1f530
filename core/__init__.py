"""Reactive filtering, aggregation and invalidation engine for SARIF review."""

__version__ = "1.0.0"
