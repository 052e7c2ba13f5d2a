"""Screen output helpers: redirectable streams, JSON/YAML and tables."""

from __future__ import annotations

import contextlib
import dataclasses
import json
import sys
from collections.abc import Iterable, Iterator, Mapping
from typing import Any, TextIO

import yaml


class _Streams:
    def __init__(self) -> None:
        self.stdout: TextIO | None = None
        self.stderr: TextIO | None = None

    def out(self) -> TextIO:
        return self.stdout if self.stdout is not None else sys.stdout

    def err(self) -> TextIO:
        return self.stderr if self.stderr is not None else sys.stderr


_streams = _Streams()


def printf(text: str) -> None:
    """Write text to the current output stream."""
    _streams.out().write(text)


def eprintf(text: str) -> None:
    """Write text to the current error stream."""
    _streams.err().write(text)


@contextlib.contextmanager
def redirect_output(
    stdout: TextIO | None = None, stderr: TextIO | None = None
) -> Iterator[None]:
    """Send output and errors to the given streams for the duration of the block."""
    saved = (_streams.stdout, _streams.stderr)
    if stdout is not None:
        _streams.stdout = stdout
    if stderr is not None:
        _streams.stderr = stderr
    try:
        yield
    finally:
        _streams.stdout, _streams.stderr = saved


def _plain(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


def to_yaml(obj: Any) -> str:
    """Return the YAML representation of obj."""
    return yaml.safe_dump(
        _plain(obj), default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def print_yaml(obj: Any) -> None:
    """Print obj as YAML, or report on the error stream that it cannot be."""
    try:
        text = to_yaml(obj)
    except yaml.YAMLError:
        eprintf("Unable to create yaml output")
        return
    printf(text)


def to_json(obj: Any) -> str:
    """Return the indented JSON representation of obj."""
    return json.dumps(_plain(obj), indent=2, ensure_ascii=False)


def print_json(obj: Any) -> None:
    """Print obj as JSON, or report on the error stream that it cannot be."""
    try:
        text = to_json(obj)
    except (TypeError, ValueError):
        eprintf("Unable to create json output")
        return
    printf(text)


class Table:
    """Rows of cells laid out in columns separated by at least ``padding`` spaces."""

    def __init__(self, padding: int = 2) -> None:
        self.padding = padding
        self._rows: list[list[str]] = []

    def add_line(self, *args: Any) -> None:
        """Add one row; each argument is a cell."""
        self._rows.append([str(arg) for arg in args])

    def add_map(self, name: str, mapping: Mapping[str, str]) -> None:
        """Add one ``key=value`` row per entry, labelled with name on the first."""
        label = name
        for key, value in mapping.items():
            self.add_line(label, f"{key}={value}")
            label = ""

    def add_array(self, name: str, items: Iterable[str]) -> None:
        """Add one row per item, labelled with name on the first."""
        label = name
        for item in items:
            self.add_line(label, item)
            label = ""

    def render(self) -> str:
        """Return the table as text, one line per row."""
        widths: dict[int, int] = {}
        for row in self._rows:
            for col, cell in enumerate(row[:-1]):
                widths[col] = max(widths.get(col, 0), len(cell) + self.padding)
        lines = []
        for row in self._rows:
            if not row:
                lines.append("\n")
                continue
            aligned = "".join(
                cell.ljust(widths[col]) for col, cell in enumerate(row[:-1])
            )
            lines.append(aligned + row[-1] + "\n")
        return "".join(lines)

    def print(self) -> None:
        """Write the table to the current output stream."""
        printf(self.render())