"""Helpers for rendering Markdown books: HTML, table of contents, navigation, includes and backends."""

__version__ = "0.1.0"