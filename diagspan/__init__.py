"""Diagnostic exceptions, source spans and snippet extraction for error reports."""

__version__ = "0.1.0"
__all__ = ["protocol", "source", "named_source"]