"""Structural assertions for tests: match values against nested patterns."""

__version__ = "0.1.0"