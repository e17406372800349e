"""Poetique — poem image -> CIE literature analysis report."""

__version__ = "0.1.0"
