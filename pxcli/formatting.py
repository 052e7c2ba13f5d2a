"""Objects that can render themselves in several output formats."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pxcli.output import printf, to_json, to_yaml


class OutputFormat(StrEnum):
    """Recognised output formats; any other value selects the default."""

    WIDE = "wide"
    JSON = "json"
    YAML = "yaml"


@dataclass
class FormatOutput:
    """Base for formattable output; every format renders as an empty string."""

    format_type: str = ""

    def default_format(self) -> str:
        return ""

    def wide_format(self) -> str:
        return ""

    def json_format(self) -> str:
        return ""

    def yaml_format(self) -> str:
        return ""


@dataclass
class DefaultFormatOutput(FormatOutput):
    """A command result described by its command, description and ids."""

    cmd: str = ""
    desc: str = ""
    ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the non-empty fields under their serialised names."""
        data: dict[str, Any] = {}
        if self.cmd:
            data["cmd"] = self.cmd
        if self.desc:
            data["desc"] = self.desc
        if self.ids:
            data["id"] = list(self.ids)
        return data

    def default_format(self) -> str:
        return self.desc

    def wide_format(self) -> str:
        return self.default_format()

    def json_format(self) -> str:
        return to_json(self)

    def yaml_format(self) -> str:
        return to_yaml(self)


def get_formatted_output(obj: FormatOutput) -> str:
    """Render obj in the format named by its ``format_type``."""
    match obj.format_type:
        case OutputFormat.YAML:
            return obj.yaml_format()
        case OutputFormat.JSON:
            return obj.json_format()
        case OutputFormat.WIDE:
            return obj.wide_format()
        case _:
            return obj.default_format()


def print_formatted(obj: FormatOutput) -> None:
    """Print obj in its selected format followed by a newline."""
    printf(get_formatted_output(obj) + "\n")