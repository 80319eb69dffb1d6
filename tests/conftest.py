"""Test configuration."""
from __future__ import annotations

from fixtures import (
    make_app, snippet_infile, snippet_path, std_infile, std_state)

__all__ = (
    'make_app',
    'snippet_infile',
    'snippet_path',
    'std_infile',
    'std_state',
)
