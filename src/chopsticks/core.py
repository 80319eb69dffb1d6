"""Program to manage a personal collection of command snippets."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import ClassVar, TYPE_CHECKING, cast

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, VerticalScroll
from textual.geometry import Region
from textual.screen import Screen
from textual.widgets import Footer, Header, Input, Static, TextArea

from . import __version__
from .platform import put_to_clipboard, terminal_title
from .snippets import SnippetFile, SnippetFileError, default_snippet_path
from .state import AppState
from .widgets import ConfirmDeleteMenu, MyInput, SnippetList

if TYPE_CHECKING:
    from textual.binding import BindingType
    from textual.widget import Widget


class StartupError(Exception):
    """Error raised when Chopsticks cannot start."""


class MainScreen(Screen):
    """Main Chopsticks screen."""

    AUTO_FOCUS = None
    BINDINGS: ClassVar[list[BindingType]] = [
        Binding('up,k', 'app.select_move(-1)', 'Up', show=False),
        Binding('down,j', 'app.select_move(1)', 'Down', show=False),
        Binding('home,g', 'app.select_first', 'First', show=False),
        Binding('end,G', 'app.select_last', 'Last', show=False),
        Binding('slash,ctrl+f', 'app.enter_search', 'Filter'),
        Binding('a', 'app.add_snippet', 'Add'),
        Binding('e', 'app.edit_snippet', 'Edit'),
        Binding('d', 'app.delete_snippet', 'Delete'),
        Binding('y', 'app.copy_snippet', 'Copy'),
        Binding('enter', 'app.accept', 'Accept'),
        Binding('escape', 'app.escape', 'Back', show=False),
        Binding('ctrl+q', 'app.quit', 'Quit'),
    ]
    app: Chopsticks

    def compose(self) -> ComposeResult:
        """Build the widget hierarchy."""
        yield Header(id='header')
        with Horizontal(id='input', classes='input oneline') as h:
            yield Static('Filter: ', classes='label')
            inp = MyInput(placeholder='Enter text to filter.', id='filter')
            inp.can_focus = False
            yield inp
        h.can_focus = False
        with VerticalScroll(id='view'):
            yield SnippetList(id='snippet-list')
        yield Static(id='error')
        yield Footer()

    def on_mount(self) -> None:
        """Show the initial snippet list."""
        self.show(self.app.state)

    def show(self, state: AppState) -> None:
        """Update the widgets to reflect the application state."""
        self.query_one(SnippetList).show(state)
        error = self.query_one('#error', Static)
        error.update(Text(state.error_msg or ''))
        error.display = bool(state.error_msg)
        if state.selected is not None:
            self.call_after_refresh(self.scroll_to_selection, state.selected)

    def scroll_to_selection(self, line: int) -> None:
        """Make sure the selected line is visible."""
        view = self.query_one('#view', VerticalScroll)
        view.scroll_to_region(Region(0, line, 1, 1), animate=False)


class EditorScreen(Screen):
    """The screen used to edit a single snippet."""

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding('ctrl+s', 'app.edit_commit', 'Save', priority=True),
        Binding('escape', 'app.edit_cancel', 'Cancel', priority=True),
    ]
    AUTO_FOCUS = '#editor'
    app: Chopsticks

    def __init__(self, text: str, heading: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.text = text
        self.heading = heading

    def compose(self) -> ComposeResult:
        """Build the widget tree for the editor screen."""
        yield Header(id='header')
        ta = TextArea(self.text, id='editor')
        ta.border_title = self.heading
        yield ta
        err = Static(id='editor-error')
        err.display = False
        yield err
        yield Footer()

    def on_text_area_changed(self, _event: TextArea.Changed) -> None:
        """Copy changes into the application's edit buffer."""
        self.sync_buffer()

    def sync_buffer(self) -> None:
        """Make the application's edit buffer match the edit area."""
        editor = self.app.state.editor
        if editor is not None:
            editor.set_text(self.query_one('#editor', TextArea).text)

    def show_error(self, message: str) -> None:
        """Show an error message below the edit area."""
        w = self.query_one('#editor-error', Static)
        w.update(Text(message))
        w.display = True


class Chopsticks(App):
    """The textual application object."""

    ENABLE_COMMAND_PALETTE = False
    AUTO_FOCUS = None
    CSS_PATH = 'chopsticks.tcss'
    TITLE = 'Chopsticks'
    SUB_TITLE = 'command snippets'

    def __init__(self, args: argparse.Namespace):
        super().__init__()
        self.args = args
        path = args.snippet_file or default_snippet_path()
        self.state = AppState(SnippetFile(path))
        try:
            self.state.init()
        except SnippetFileError as exc:
            raise StartupError(str(exc)) from exc
        self.save_error: SnippetFileError | None = None
        self.main_screen = MainScreen(id='main')

    def run(self, *args, **kwargs):                          # pragma: no cover
        """Wrap the standard run method, setting the terminal title."""
        with terminal_title('Chopsticks'):
            result = super().run(*args, **kwargs)
        self.state.terminal_restored = True
        return result

    def on_mount(self) -> None:
        """Perform app start-up actions."""
        self.log.info(
            f'Loaded {len(self.state.snippets)} snippets'
            f' from {self.state.store.path}')
        self.push_screen(self.main_screen)

    def refresh_view(self) -> None:
        """Update the main screen to reflect the current state."""
        if self.main_screen.is_mounted:
            self.main_screen.show(self.state)

    def handle_blur(self, w: Widget) -> None:
        """Handle loss of focus for the filter input."""
        if w.id == 'filter':
            w.can_focus = False
            w.remove_class('kb_focussed')

    def on_input_changed(self, message: Input.Changed) -> None:
        """Handle a change to the filter text input."""
        if message.input.id == 'filter':
            self.state.set_filter(message.value)
            self.refresh_view()

    def on_input_submitted(self, message: Input.Submitted) -> None:
        """Leave the filter input when Enter is pressed."""
        if message.input.id == 'filter':
            self.action_leave_search()

    ## Binding handlers.
    def action_select_move(self, inc: int) -> None:
        """Move the selection up or down."""
        if self.state.select_move(inc):
            self.refresh_view()

    def action_select_first(self) -> None:
        """Select the first snippet."""
        if self.state.select_first():
            self.refresh_view()

    def action_select_last(self) -> None:
        """Select the last snippet."""
        if self.state.select_last():
            self.refresh_view()

    def action_enter_search(self) -> None:
        """Move focus to the filter input field."""
        w = self.main_screen.query_one('#filter')
        w.can_focus = True
        w.add_class('kb_focussed')
        self.main_screen.set_focus(w)

    def action_leave_search(self) -> None:
        """Move focus away from the filter input field."""
        self.main_screen.set_focus(None)
        self.handle_blur(self.main_screen.query_one('#filter'))

    def action_escape(self) -> None:
        """Leave the filter input or dismiss any error message."""
        focused = self.main_screen.focused
        if focused is not None and focused.id == 'filter':
            self.action_leave_search()
        else:
            self.state.dismiss_error()
            self.refresh_view()

    def action_add_snippet(self) -> None:
        """Start composing a new snippet."""
        if self.state.start_add():
            self.push_editor('New snippet')

    def action_edit_snippet(self) -> None:
        """Edit the currently selected snippet."""
        if self.state.start_edit():
            self.push_editor('Edit snippet')
        else:
            self.bell()

    def push_editor(self, heading: str) -> None:
        """Show the editor screen for the current edit buffer."""
        editor = self.state.editor
        if editor is None:
            return
        self.push_screen(EditorScreen(editor.text, heading, id='editor-screen'))

    def action_edit_commit(self) -> None:
        """Store the edited snippet and close the editor, if possible."""
        screen = cast(EditorScreen, self.screen)
        screen.sync_buffer()
        if self.state.commit_edit():
            self.log.info(f'Snippet stored, {len(self.state.snippets)} total')
            self.pop_screen()
            self.refresh_view()
        else:
            self.log.warning(f'Edit rejected: {self.state.error_msg}')
            screen.show_error(self.state.error_msg or '')

    def action_edit_cancel(self) -> None:
        """Close the editor, discarding changes."""
        self.state.cancel_edit()
        self.pop_screen()
        self.refresh_view()

    def action_delete_snippet(self) -> None:
        """Delete the selected snippet, after confirmation."""
        def on_close(v):
            if v == 'delete':
                removed = self.state.delete_selected()
                self.log.info(f'Deleted {removed!r}')
                self.refresh_view()

        snippet = self.state.selected_snippet
        if snippet is None:
            self.bell()
            return
        self.push_screen(
            ConfirmDeleteMenu(snippet.summary, id='delete-menu'), on_close)

    def action_copy_snippet(self) -> None:
        """Copy the selected snippet's command to the clipboard."""
        snippet = self.state.selected_snippet
        if snippet is None:
            self.bell()
            return
        if not put_to_clipboard(snippet.cmd):
            self.copy_to_clipboard(snippet.cmd)
        self.notify(escape(f'Copied {snippet.summary!r}'))

    def action_accept(self) -> None:
        """Save, then exit providing the selected command."""
        snippet = self.state.selected_snippet
        if snippet is None:
            self.bell()
            return
        self.save_and_exit(snippet.cmd)

    async def action_quit(self) -> None:
        """Save and exit."""
        self.save_and_exit()

    def save_and_exit(self, result: str | None = None) -> None:
        """Save the snippets and then exit the application.

        A save failure is recorded in ``save_error`` and the application
        exits with a non-zero return code.
        """
        try:
            self.state.quit()
        except SnippetFileError as exc:
            self.log.error(str(exc))
            self.save_error = exc
            self.exit(return_code=1)
        else:
            self.log.info(f'Saved {len(self.state.snippets)} snippets')
            self.exit(result)


def parse_args(sys_args: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line arguments."""
    parser = argparse.ArgumentParser(
        prog='chopsticks', description='Manage command snippets.')
    parser.add_argument(
        '--snippet-file', type=Path, default=None,
        help=f'The snippet file to use, default={default_snippet_path()}.')
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {__version__}')
    return parser.parse_args(sys_args)


def main():                                                  # pragma: no cover
    """Run the application."""
    args = parse_args()
    try:
        app = Chopsticks(args)
    except StartupError as exc:
        sys.exit(str(exc))
    result = app.run()
    if app.save_error:
        sys.exit(str(app.save_error))
    if result:
        print(result)
