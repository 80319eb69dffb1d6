"""Common test support code."""
from __future__ import annotations

import textwrap
from pathlib import Path

from chopsticks.snippets import Snippet

std_snippets = [
    Snippet(5, 'ls -la', 'list all'),
    Snippet(0, 'git status', 'Show the working tree status'),
    Snippet(2, 'grep -rn TODO .', 'Find TODO markers'),
    Snippet(1, 'du -sh *', 'Size of each directory entry'),
]


def clean_text_lines(text: str) -> list[str]:
    """Dedent and remove unwanted blank lines from text.

    A line consisting of a single '|' character is treated as a blank line and
    may be used to add leading or tailing blank lines.
    """
    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    lines = ['' if line.strip() == '|' else line for line in lines]
    return textwrap.dedent('\n'.join(lines)).splitlines()


def clean_text(text):
    """Dedent and remove unwanted blank lines from text."""
    return '\n'.join(clean_text_lines(text)) + '\n'


def populate(path: Path, text: str) -> str:
    """Populate a snippet file using given text."""
    cleaned_text = clean_text(text)
    path.write_text(cleaned_text, encoding='utf-8')
    return cleaned_text
