"""The application state, independent of any user interface."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .snippets import Snippet, SnippetFile, SnippetFormatError
from .text import TextBuffer


class Browsing:                        # pylint: disable=too-few-public-methods
    """The mode used to navigate and filter the snippet list."""

    def __repr__(self):
        return 'BROWSING'


BROWSING = Browsing()


@dataclass
class Editing:
    """The mode used while a snippet is being composed.

    @buffer: The text being edited.
    @index:  The position of the edited snippet within the full snippet
             list or ``None`` if a new snippet is being added.
    """

    buffer: TextBuffer
    index: int | None = None


Mode = Union[Browsing, Editing]


class Matcher:                         # pylint: disable=too-few-public-methods
    """Simple plain-text replacement for a compiled regular expression."""

    def __init__(self, pat: str):
        self.pat = pat.casefold()

    def search(self, text: str) -> bool:
        """Search for plain text."""
        return not self.pat or self.pat in text.casefold()


def make_matcher(pat: str) -> re.Pattern | Matcher:
    """Create a matcher for filter text.

    The text is used as a case insensitive regular expression, if it is valid
    as one. Otherwise it is matched as plain text.
    """
    if not pat.strip():
        return Matcher('')
    try:
        return re.compile(pat, re.IGNORECASE)
    except re.error:
        return Matcher(pat)


class AppState:
    """All the state of a running application.

    This enforces the following invariants.

    1. ``editor`` is only available while editing; this follows from the
       ``mode`` being either `BROWSING` or an `Editing` instance.
    2. ``selected``, when set, is a valid index into `visible`. It is
       ``None`` if and only if `visible` is empty.

    @store:
        The `SnippetFile` used by `init` and `quit`.
    @has_quit:
        Set once `quit` has saved the snippets.
    @terminal_restored:
        Set by the user interface once the terminal is back to normal.
    @error_msg:
        A message for the user, or ``None``.
    @search_bar:
        The filter text.
    @snippets:
        All snippets, in file order.
    @selected:
        The selection's index into `visible`.
    """

    # pylint: disable=too-many-instance-attributes
    def __init__(self, store: SnippetFile):
        self.store = store
        self.has_quit = False
        self.terminal_restored = False
        self.mode: Mode = BROWSING
        self.error_msg: str | None = None
        self.search_bar = TextBuffer()
        self.snippets: list[Snippet] = []
        self.selected: int | None = None
        self._matcher: re.Pattern | Matcher = Matcher('')

    def init(self) -> None:
        """Load the snippets and select the first one.

        This may raise SnippetFileError.
        """
        self.snippets = self.store.load()
        self.search_bar.clear()
        self._matcher = Matcher('')
        self.selected = 0 if self.snippets else None

    def quit(self) -> None:                                        # noqa: A003
        """Save all snippets and mark the application as finished.

        Nothing is written if this has already completed. This may raise
        SnippetFileError, in which case ``has_quit`` remains unset.
        """
        if not self.has_quit:
            self.store.save(self.snippets)
            self.has_quit = True

    @property
    def is_editing(self) -> bool:
        """True when in editing mode."""
        return isinstance(self.mode, Editing)

    @property
    def editor(self) -> TextBuffer | None:
        """The editor buffer, only available when editing."""
        mode = self.mode
        return mode.buffer if isinstance(mode, Editing) else None

    ## The filtered view of the snippets.
    def matches(self, snippet: Snippet) -> bool:
        """Test whether a snippet matches the current filter."""
        m = self._matcher
        return bool(m.search(snippet.cmd) or m.search(snippet.description))

    @property
    def visible(self) -> list[int]:
        """Indices, into ``snippets``, of the snippets that match the filter."""
        return [i for i, s in enumerate(self.snippets) if self.matches(s)]

    def visible_snippets(self) -> list[Snippet]:
        """The snippets that match the filter."""
        return [self.snippets[i] for i in self.visible]

    @property
    def selected_index(self) -> int | None:
        """The index, into ``snippets``, of the selected snippet."""
        if self.selected is None:
            return None
        return self.visible[self.selected]

    @property
    def selected_snippet(self) -> Snippet | None:
        """The currently selected snippet or ``None``."""
        idx = self.selected_index
        return None if idx is None else self.snippets[idx]

    def _select_snippet_at(self, index: int | None) -> None:
        """Select the snippet at an index into ``snippets``, if visible.

        If it is not visible the current view position is kept, clamped to
        the view.
        """
        visible = self.visible
        if index is not None and index in visible:
            self.selected = visible.index(index)
        else:
            self._clamp_selection(len(visible))

    def _clamp_selection(self, count: int) -> None:
        if count == 0:
            self.selected = None
        elif self.selected is None:
            self.selected = 0
        else:
            self.selected = min(max(0, self.selected), count - 1)

    ## Browsing operations.
    def set_filter(self, text: str) -> None:
        """Set the filter text.

        The current selection is retained if it remains visible. Otherwise
        the first visible snippet is selected.
        """
        prev = self.selected_index
        self.search_bar.set_text(text)
        self._matcher = make_matcher(self.search_bar.text)
        visible = self.visible
        if prev in visible:
            self.selected = visible.index(prev)
        else:
            self.selected = 0 if visible else None

    def select_move(self, inc: int) -> bool:
        """Move the selection up (-1) or down (1) the filtered view.

        :return: True if the selection changed.
        """
        count = len(self.visible)
        if self.selected is None or count == 0:
            return False
        new = min(max(0, self.selected + inc), count - 1)
        changed = new != self.selected
        self.selected = new
        return changed

    def select_first(self) -> bool:
        """Select the first snippet in the filtered view."""
        if self.selected is None:
            return False
        return self.select_move(-self.selected)

    def select_last(self) -> bool:
        """Select the last snippet in the filtered view."""
        if self.selected is None:
            return False
        return self.select_move(len(self.visible) - 1 - self.selected)

    def delete_selected(self) -> Snippet | None:
        """Remove the selected snippet.

        :return: The removed snippet or ``None`` if nothing was selected.
        """
        idx = self.selected_index
        if self.is_editing or idx is None:
            return None
        snippet = self.snippets.pop(idx)
        self._clamp_selection(len(self.visible))
        return snippet

    def dismiss_error(self) -> None:
        """Forget any error message."""
        self.error_msg = None

    ## Editing.
    def start_edit(self) -> bool:
        """Start editing the selected snippet.

        :return: True if editing mode was entered.
        """
        idx = self.selected_index
        if self.is_editing or idx is None:
            return False
        text = str(self.snippets[idx])
        self.mode = Editing(TextBuffer(text, multiline=True), idx)
        return True

    def start_add(self) -> bool:
        """Start composing a new snippet.

        :return: True if editing mode was entered.
        """
        if self.is_editing:
            return False
        self.mode = Editing(TextBuffer(multiline=True))
        return True

    def commit_edit(self) -> bool:
        """Store the edited snippet and return to browsing mode.

        If the editor text cannot be parsed, ``error_msg`` is set and editing
        mode is retained with the text unchanged.

        :return: True if the snippet was stored.
        """
        mode = self.mode
        if not isinstance(mode, Editing):
            return False
        try:
            snippet = Snippet.from_text(mode.buffer.text)
        except SnippetFormatError as exc:
            self.error_msg = str(exc)
            return False

        if mode.index is None:
            self.snippets.append(snippet)
            index = len(self.snippets) - 1
        else:
            index = mode.index
            self.snippets[index] = snippet
        self.mode = BROWSING
        self.error_msg = None
        self._select_snippet_at(index)
        return True

    def cancel_edit(self) -> None:
        """Abandon editing, leaving the snippets unchanged."""
        self.mode = BROWSING
        self.error_msg = None
