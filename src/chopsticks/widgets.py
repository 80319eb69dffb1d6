"""Application specific widgets."""
from __future__ import annotations

from typing import TYPE_CHECKING, cast

from rich.text import Text
from textual.color import Color
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widget import Widget
from textual.widgets import Button, Input, Label, Static

if TYPE_CHECKING:
    from .core import Chopsticks
    from .state import AppState


class AppChild(Widget):
    """Mixin for children of the Chopsticks application class."""

    @property
    def app(self) -> Chopsticks:                       # type: ignore[override]
        """The owning application."""
        return cast('Chopsticks', super().app)


class MyInput(Input, AppChild):
    """Application specific Input widget."""

    def on_blur(self, _event):
        """Let the application know that focus has been lost."""
        self.app.handle_blur(self)


class SnippetList(Static):
    """The list of snippets that match the current filter."""

    def show(self, state: AppState) -> None:
        """Update to reflect the application state."""
        self.update(render_snippets(state))


def render_snippets(state: AppState) -> Text:
    """Render the filtered snippets, highlighting the selection."""
    snippets = state.visible_snippets()
    if not snippets:
        if state.snippets:
            return Text('No snippets match the filter.', style='dim')
        return Text('No snippets yet, press "a" to add one.', style='dim')

    width = max(len(str(s.priority)) for s in snippets)
    text = Text(no_wrap=True, overflow='ellipsis')
    for i, snippet in enumerate(snippets):
        line = Text.assemble(
            (f'{snippet.priority:>{width}} ', 'cyan'),
            (snippet.summary, 'bold'),
        )
        description = snippet.description.partition('\n')[0]
        if description:
            line.append(f'  {description}', style='dim')
        if i == state.selected:
            line.stylize('reverse')
        if i:
            text.append('\n')
        text.append_text(line)
    return text


class PopupDialog(ModalScreen):
    """Base for 'popup' dialogues."""

    DEFAULT_CSS = '''
    #dialog {
        grid-rows: 1 3;
        grid-gutter: 1 2;
        padding: 0 1;
        height: auto;
        border: solid $primary-lighten-3;
        margin: 0 8 0 8;
        background: $surface;
        align: center middle;
    }
    #question {
        height: 1;
        width: 1fr;
        content-align: center middle;
    }
    '''

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_class('popup')

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Process a mouse click on a button."""
        self.dismiss(event.button.id)


class ConfirmDeleteMenu(PopupDialog):
    """Popup asking the user to confirm deletion of a snippet."""

    AUTO_FOCUS = '#cancel'
    BINDINGS = [('escape', 'dismiss("cancel")', 'Cancel')]
    DEFAULT_CSS = PopupDialog.DEFAULT_CSS + '''
    .popup {
        grid-size: 2;
    }
    .question {
        column-span: 2;
    }
    '''

    def __init__(self, summary: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.summary = summary

    def compose(self):
        """Build the widget hierarchy."""
        styles = self.styles
        bg = styles.background
        styles.background = Color(bg.r, bg.g, bg.b, a=0.6)

        yield Grid(
            Label(
                Text(f'Delete {self.summary!r}?'), id='question',
                classes='question'),
            Button('Delete', variant='error', id='delete'),
            Button('Cancel', variant='primary', id='cancel'),
            id='dialog', classes='popup')
