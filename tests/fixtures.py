"""Common test fixtures."""
from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from support import std_snippets

from chopsticks import core
from chopsticks.snippets import SnippetFile
from chopsticks.state import AppState


@pytest.fixture
def snippet_path(tmp_path) -> Path:
    """Provide the path of a snippet file that does not yet exist.

    The parent directory does not exist either.
    """
    return tmp_path / 'data' / 'chopsticks' / 'snippets.toml'


@pytest.fixture
def snippet_infile(tmp_path) -> Path:
    """Provide the path of an existing, empty snippet file."""
    path = tmp_path / 'snippets.toml'
    path.write_text('', encoding='utf-8')
    return path


@pytest.fixture
def std_infile(snippet_infile) -> Path:
    """Provide a snippet file holding the standard snippets."""
    SnippetFile(snippet_infile).save(std_snippets)
    return snippet_infile


@pytest.fixture
def std_state(std_infile) -> AppState:
    """Provide an initialised AppState using the standard snippets."""
    state = AppState(SnippetFile(std_infile))
    state.init()
    return state


@pytest.fixture
def make_app() -> Callable[[Path], core.Chopsticks]:
    """Provide a way to create the Chopsticks app for a given file."""
    def make(path: Path) -> core.Chopsticks:
        args = core.parse_args(['--snippet-file', str(path)])
        return core.Chopsticks(args)

    return make
