"""Reader for the INI-style configuration files."""

from __future__ import annotations

import os
from typing import Iterable, Optional, Union

from capicore.utils import trim


class Section:
    """Key/value mappings of one configuration section."""

    def __init__(self) -> None:
        self._mappings: dict[str, str] = {}

    @property
    def mappings(self) -> dict[str, str]:
        """All mappings of the section, ordered by key."""
        return dict(sorted(self._mappings.items()))

    def get_value(self, key: str) -> str:
        """Return the value for ``key``, or an empty string if it is absent."""
        return self._mappings.get(key, "")

    def __repr__(self) -> str:
        return f"Section({self.mappings!r})"


class IniFileReader:
    """Loads ``[section]`` headers followed by ``key = value`` lines.

    Blank lines and lines starting with ``#`` or ``;`` are ignored, as are
    entries before the first section and lines without ``=``. Keys and
    values are stripped of surrounding whitespace; a section that appears
    twice collects the entries of both.
    """

    Section = Section

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}

    def load(self, path: Union[str, os.PathLike]) -> bool:
        """Read the file at ``path``; return False if it cannot be read."""
        try:
            with open(path, encoding="utf-8") as handle:
                self._parse(handle)
        except (OSError, UnicodeDecodeError):
            return False
        return True

    def _parse(self, lines: Iterable[str]) -> None:
        current: Optional[Section] = None
        for raw in lines:
            line = trim(raw)
            if not line or line[0] in "#;":
                continue
            if line.startswith("[") and line.endswith("]"):
                current = self._sections.setdefault(trim(line[1:-1]), Section())
                continue
            if current is None:
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            current._mappings[trim(key)] = trim(value)

    @property
    def sections(self) -> dict[str, Section]:
        """All sections, ordered by name."""
        return dict(sorted(self._sections.items()))

    def get_section(self, name: str) -> Optional[Section]:
        """Return the named section, or None if the file has none of that name."""
        return self._sections.get(name)