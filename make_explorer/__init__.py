"""make-explorer: parse GNU-make-style build files and query their dependency graph."""

__version__ = "0.1.0"
