"""Data structure used to store the snippets and the snippet file."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, TYPE_CHECKING

import tomlkit
from platformdirs import user_data_dir
from tomlkit.exceptions import TOMLKitError

if TYPE_CHECKING:
    from tomlkit.items import String, Table

APP_NAME = 'chopsticks'
SNIPPETS_KEY = 'snippets'


class SnippetFormatError(Exception):
    """A snippet record or snippet text is malformed."""


class SnippetFileError(Exception):
    """The snippet file could not be loaded or saved.

    :action: Either 'load' or 'save'.
    :path:   The snippet file's path.
    :cause:  A description of the underlying failure.
    """

    def __init__(self, action: str, path: Path, cause: object):
        super().__init__(f'Could not {action} {path}: {cause}')
        self.action = action
        self.path = path


@dataclass(order=True)
class Snippet:
    """A command plus some descriptive information.

    Equality and ordering use all fields, in declaration order.
    """

    priority: int = 0
    cmd: str = ''
    description: str = ''

    def __str__(self):
        cmd = toml_string(self.cmd).as_string()
        description = toml_string(self.description).as_string()
        return (
            f'priority = {self.priority}\n'
            f'cmd = {cmd}\n'
            f'description = {description}')

    @property
    def summary(self) -> str:
        """The first line of the command."""
        return self.cmd.partition('\n')[0]

    @classmethod
    def from_record(cls, record: Mapping[str, Any], where: str = '') -> Snippet:
        """Create a Snippet from a decoded TOML table.

        :record: The decoded table.
        :where:  Prefix for error messages, identifying the record.
        """
        prefix = f'{where}: ' if where else ''
        if not isinstance(record, Mapping):
            raise SnippetFormatError(f'{prefix}not a table')

        priority = record.get('priority', 0)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise SnippetFormatError(
                f'{prefix}priority must be an integer, not {priority!r}')
        fields = {}
        for name in ('cmd', 'description'):
            if name not in record:
                raise SnippetFormatError(f'{prefix}missing {name!r} value')
            value = record[name]
            if not isinstance(value, str):
                raise SnippetFormatError(
                    f'{prefix}{name} must be a string, not {value!r}')
            fields[name] = value
        return cls(priority, **fields)

    @classmethod
    def from_text(cls, text: str) -> Snippet:
        """Parse a snippet from its textual form, as produced by ``str()``."""
        try:
            doc = tomlkit.parse(text)
        except TOMLKitError as exc:
            raise SnippetFormatError(f'Invalid snippet text: {exc}') from exc
        return cls.from_record(doc.unwrap())

    def to_table(self) -> Table:
        """Create a TOML table for this snippet."""
        table = tomlkit.table()
        table.add('priority', self.priority)
        table.add('cmd', toml_string(self.cmd))
        table.add('description', toml_string(self.description))
        return table


def toml_string(text: str) -> String:
    """Create the most readable TOML string item that preserves text.

    Multi-line literal strings are used where possible. TOML drops a newline
    that immediately follows the opening delimiter, so text that is empty or
    starts with a newline is tried with an extra leading newline first. Not
    all tomlkit releases treat such text alike, so each candidate is only
    used if it reads back as the original text.
    """
    if "'''" in text or "'" in (text[:1], text[-1:]) or '\r' in text:
        return tomlkit.string(text)
    candidates = [text]
    if not text or text.startswith('\n'):
        candidates.insert(0, f'\n{text}')
    for raw in candidates:
        try:
            item = tomlkit.string(raw, literal=True, multiline=True)
        except ValueError:
            # Control characters are not allowed in literal strings.
            break
        if reads_back_as(item, text):
            return item
    return tomlkit.string(text)


def reads_back_as(item: String, text: str) -> bool:
    """Test whether a TOML string item decodes to the given text."""
    try:
        doc = tomlkit.parse(f'value = {item.as_string()}')
    except TOMLKitError:
        return False
    return doc.unwrap().get('value') == text


class SnippetFile:
    """Encapsulation of snippet loading and saving machinery."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> list[Snippet]:
        """Load the list of snippets from the file.

        A missing file, and any missing parent directories, are created and
        an empty list is returned.
        """
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
                return []
            text = self.path.read_text(encoding='utf8')
        except OSError as exc:
            raise SnippetFileError(
                'load', self.path, exc.strerror or exc) from exc
        except UnicodeDecodeError as exc:
            raise SnippetFileError(
                'load', self.path, f'not UTF-8 text, {exc.reason}') from exc

        try:
            data = tomlkit.parse(text).unwrap()
        except TOMLKitError as exc:
            raise SnippetFileError('load', self.path, exc) from exc

        records = data.pop(SNIPPETS_KEY, [])
        if not isinstance(records, list):
            raise SnippetFileError(
                'load', self.path, f'{SNIPPETS_KEY!r} is not an array')
        try:
            return [
                Snippet.from_record(rec, where=f'snippet {i + 1}')
                for i, rec in enumerate(records)]
        except SnippetFormatError as exc:
            raise SnippetFileError('load', self.path, exc) from exc

    def save(self, snippets: Iterable[Snippet]) -> None:
        """Save snippets to the file, replacing its contents."""
        records = tomlkit.aot()
        for snippet in snippets:
            records.append(snippet.to_table())
        doc = tomlkit.document()
        doc.add(SNIPPETS_KEY, records)
        try:
            self.path.write_text(tomlkit.dumps(doc), encoding='utf8')
        except OSError as exc:
            raise SnippetFileError(
                'save', self.path, exc.strerror or exc) from exc


def default_snippet_path() -> Path:
    """The snippet file in the user's local data directory."""
    data_dir = user_data_dir(APP_NAME, appauthor=False, roaming=False)
    return Path(data_dir) / 'snippets.toml'
