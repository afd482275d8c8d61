"""Pagecraft - block-based page composition engine."""

__version__ = "0.1.0"
