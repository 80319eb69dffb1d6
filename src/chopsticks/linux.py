"""Linux specific code."""

from __future__ import annotations

import contextlib
import os
import shutil
import subprocess
import sys

clipboard_commands = (
    ('wl-copy', ()),
    ('xclip', ('-selection', 'clipboard')),
)


def put_to_clipboard(text: str) -> bool:
    """Put a text string into the clipboard.

    Wayland's wl-copy is used if running under Wayland, otherwise xclip.

    :return: False if no clipboard program is available.
    """
    for name, args in clipboard_commands:
        if name == 'wl-copy' and not os.environ.get('WAYLAND_DISPLAY'):
            continue
        path = shutil.which(name)
        if path:
            subprocess.run([path, *args], input=text.encode(), check=False)
            return True
    return False


@contextlib.contextmanager
def terminal_title(title: str):
    """Temporarily set the text terminal's title."""
    print('\x1b[22;0t', end='')
    print(f'\x1b]0;{title}\x07', end='')
    sys.stdout.flush()
    yield None
    print('\x1b[23;0t', end='')
    sys.stdout.flush()
