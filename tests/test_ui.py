"""The Textual user interface.

These tests run the application headless, using Textual's pilot to press
keys.
"""
from __future__ import annotations
# pylint: disable=redefined-outer-name

import pytest
from textual.widgets import Static, TextArea

from support import populate, std_snippets

from chopsticks import core
from chopsticks.snippets import Snippet, SnippetFile
from chopsticks.widgets import ConfirmDeleteMenu, render_snippets


def test_rendered_list_highlights_selection(std_state):
    """Each snippet is one line; the selected line is reversed."""
    std_state.select_move(1)
    text = render_snippets(std_state)
    assert text.plain.splitlines() == [
        '5 ls -la  list all',
        '0 git status  Show the working tree status',
        '2 grep -rn TODO .  Find TODO markers',
        '1 du -sh *  Size of each directory entry',
    ]
    reversed_spans = [
        span for span in text.spans if 'reverse' in str(span.style)]
    assert len(reversed_spans) == 1
    start = len(text.plain.splitlines()[0]) + 1
    assert reversed_spans[0].start == start


def test_rendered_empty_list(std_state):
    """A message is shown when there is nothing to list."""
    std_state.set_filter('no such thing')
    assert render_snippets(std_state).plain == 'No snippets match the filter.'
    std_state.snippets = []
    std_state.set_filter('')
    assert 'press "a"' in render_snippets(std_state).plain


def test_bad_snippet_file_prevents_startup(snippet_infile, make_app):
    """A snippet file that cannot be loaded stops the application."""
    populate(snippet_infile, """
        [[snippets]]
        cmd = 'ls'
    """)
    with pytest.raises(core.StartupError, match='Could not load'):
        make_app(snippet_infile)


def test_command_line_arguments(tmp_path):
    """The snippet file can be chosen on the command line."""
    args = core.parse_args(['--snippet-file', str(tmp_path / 'my.toml')])
    assert args.snippet_file == tmp_path / 'my.toml'
    assert core.parse_args([]).snippet_file is None


class TestBrowsing:
    """Moving around and filtering."""

    @pytest.mark.asyncio
    async def test_keys_move_selection(self, std_infile, make_app):
        """The arrow and vi style keys move the selection."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('down', 'j')
            assert app.state.selected == 2
            await pilot.press('k')
            assert app.state.selected == 1
            await pilot.press('end')
            assert app.state.selected == 3
            await pilot.press('home')
            assert app.state.selected == 0

    @pytest.mark.asyncio
    async def test_typing_into_the_filter(self, std_infile, make_app):
        """Text typed after '/' filters the list."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('slash', 'g', 'i', 't')
            await pilot.pause()
            assert app.state.search_bar.text == 'git'
            assert app.state.visible_snippets() == [std_snippets[1]]
            await pilot.press('enter')
            await pilot.pause()
            assert app.screen.focused is None

    @pytest.mark.asyncio
    async def test_accept_returns_command(self, std_infile, make_app):
        """Enter saves and exits, providing the selected command."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('down', 'enter')
        assert app.return_value == 'git status'
        assert app.state.has_quit

    @pytest.mark.asyncio
    async def test_copy_uses_clipboard(
            self, std_infile, make_app, monkeypatch):
        """The selected command can be copied to the clipboard."""
        copied = []

        def put_to_clipboard(text):
            copied.append(text)
            return True

        monkeypatch.setattr(core, 'put_to_clipboard', put_to_clipboard)
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('y')
            await pilot.pause()
        assert copied == ['ls -la']


class TestEditing:
    """Adding, editing and deleting through the user interface."""

    @pytest.mark.asyncio
    async def test_add_and_quit_saves(self, snippet_path, make_app):
        """An added snippet is saved when the application quits."""
        app = make_app(snippet_path)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('a')
            await pilot.pause()
            area = app.screen.query_one(TextArea)
            area.text = str(Snippet(5, 'ls -la', 'list all'))
            await pilot.press('ctrl+s')
            await pilot.pause()
            assert app.screen is app.main_screen
            assert app.state.snippets == [Snippet(5, 'ls -la', 'list all')]
            await pilot.press('ctrl+q')
        assert app.save_error is None
        assert SnippetFile(snippet_path).load() == [
            Snippet(5, 'ls -la', 'list all')]

    @pytest.mark.asyncio
    async def test_edit_selected_snippet(self, std_infile, make_app):
        """The editor is seeded with the selected snippet."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('e')
            await pilot.pause()
            area = app.screen.query_one(TextArea)
            assert area.text == str(std_snippets[0])
            area.text = str(Snippet(6, 'ls -l', 'list long'))
            await pilot.press('ctrl+s')
            await pilot.pause()
        assert app.state.snippets[0] == Snippet(6, 'ls -l', 'list long')

    @pytest.mark.asyncio
    async def test_parse_error_keeps_editor_open(self, std_infile, make_app):
        """Unparseable text is reported and the editor stays open."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('a')
            await pilot.pause()
            app.screen.query_one(TextArea).text = "cmd = 'ls'"
            await pilot.press('ctrl+s')
            await pilot.pause()
            assert isinstance(app.screen, core.EditorScreen)
            assert app.screen.query_one('#editor-error', Static).display
            assert app.state.error_msg == "missing 'description' value"
            await pilot.press('escape')
            await pilot.pause()
            assert app.screen is app.main_screen
            assert not app.state.is_editing
        assert app.state.snippets == std_snippets

    @pytest.mark.asyncio
    async def test_delete_after_confirmation(self, std_infile, make_app):
        """A snippet is deleted when the user confirms."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('down', 'd')
            await pilot.pause()
            assert isinstance(app.screen, ConfirmDeleteMenu)
            await pilot.click('#delete')
            await pilot.pause()
            assert app.screen is app.main_screen
        assert std_snippets[1] not in app.state.snippets
        assert len(app.state.snippets) == 3

    @pytest.mark.asyncio
    async def test_delete_can_be_cancelled(self, std_infile, make_app):
        """Escape dismisses the confirmation without deleting."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press('d')
            await pilot.pause()
            await pilot.press('escape')
            await pilot.pause()
            assert app.screen is app.main_screen
        assert app.state.snippets == std_snippets

    @pytest.mark.asyncio
    async def test_no_editor_without_edit_buffer(self, std_infile, make_app):
        """The editor screen is only shown while editing."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            app.push_editor('Edit snippet')
            await pilot.pause()
            assert app.screen is app.main_screen
            assert not app.state.is_editing


class TestQuitting:
    """Saving when the application exits."""

    @pytest.mark.asyncio
    async def test_save_error_is_reported(self, std_infile, make_app):
        """A failed save is recorded and gives a non-zero return code."""
        app = make_app(std_infile)
        async with app.run_test() as pilot:
            await pilot.pause()
            std_infile.unlink()
            std_infile.mkdir()
            await pilot.press('ctrl+q')
        assert app.save_error is not None
        assert app.save_error.action == 'save'
        assert app.return_code == 1
        assert not app.state.has_quit
