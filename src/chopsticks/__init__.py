"""A terminal based manager for command snippets."""

__version__ = '0.1.0'
