"""Simple text buffers.

These back the filter input and the snippet editor. The Textual widgets own
what is on screen; a buffer owns the text that the application state acts
upon.
"""
from __future__ import annotations


class TextBuffer:
    """A string plus a cursor.

    The cursor is a character offset into the text and is always in the range
    ``0..len(text)``.

    :multiline:
        If not set then newline characters are dropped from any inserted
        text.
    """

    def __init__(self, text: str = '', *, multiline: bool = False):
        self.multiline = multiline
        self._text = ''
        self._cursor = 0
        self.set_text(text)

    @property
    def text(self) -> str:
        """The current text."""
        return self._text

    @property
    def cursor(self) -> int:
        """The cursor offset."""
        return self._cursor

    @property
    def lines(self) -> list[str]:
        """The text split into lines."""
        return self._text.split('\n')

    def set_text(self, text: str) -> None:
        """Replace the entire text, placing the cursor at the end."""
        self._text = self._clean(text)
        self._cursor = len(self._text)

    def clear(self) -> None:
        """Remove all text."""
        self.set_text('')

    def insert(self, text: str) -> None:
        """Insert text at the cursor, leaving the cursor after it."""
        text = self._clean(text)
        c = self._cursor
        self._text = self._text[:c] + text + self._text[c:]
        self._cursor = c + len(text)

    def delete_back(self, count: int = 1) -> None:
        """Delete characters before the cursor."""
        start = max(0, self._cursor - count)
        self._text = self._text[:start] + self._text[self._cursor:]
        self._cursor = start

    def delete_forward(self, count: int = 1) -> None:
        """Delete characters after the cursor."""
        c = self._cursor
        self._text = self._text[:c] + self._text[c + count:]

    def move(self, inc: int) -> None:
        """Move the cursor by a number of characters."""
        self._cursor = min(max(0, self._cursor + inc), len(self._text))

    def home(self) -> None:
        """Move the cursor to the start of the text."""
        self._cursor = 0

    def end(self) -> None:
        """Move the cursor to the end of the text."""
        self._cursor = len(self._text)

    def _clean(self, text: str) -> str:
        if self.multiline:
            return text
        return text.replace('\r', '').replace('\n', '')

    def __repr__(self):
        return f'{self.__class__.__name__}({self._text!r}, {self._cursor})'
