"""Local web API for the sarif-review viewer."""

__version__ = "1.0.0"
