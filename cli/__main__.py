"""
Entry point for running sarif-review as a module.

Usage:
    python -m cli runs path/to/results.sarif [--keywords "RULE01"]
    python -m cli results path/to/results.sarif --run 0
"""

from .commands import main

if __name__ == "__main__":
    main()
