"""Versioned wire contracts for the sarif-review API."""
