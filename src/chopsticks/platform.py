"""Code that handles platform specific behaviour."""
from __future__ import annotations

import contextlib
import sys

__all__ = [
    'put_to_clipboard',
    'terminal_title',
]

if sys.platform == 'linux':
    from .linux import put_to_clipboard, terminal_title
else:                                                        # pragma: no cover
    def put_to_clipboard(text: str) -> bool:  # pylint: disable=unused-argument
        """Report that no native clipboard support is available."""
        return False

    @contextlib.contextmanager
    def terminal_title(title: str):           # pylint: disable=unused-argument
        """Leave the terminal title alone."""
        yield None
