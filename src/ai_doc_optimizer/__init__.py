"""Lint documentation for passages that confuse retrieval and other AI readers."""

__version__ = "0.1.0"
