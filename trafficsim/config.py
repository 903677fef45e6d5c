"""Persistent user settings stored in an INI file."""

from __future__ import annotations

import configparser
import os
from pathlib import Path

_SECTION = "/Script/CiThruS.CithrusConfig"
_SHOW_INTRODUCTION = "ShowIntroduction"


class CithrusConfig:
    """Settings backed by an INI file; changes are written immediately."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        self._parser = configparser.ConfigParser(interpolation=None)
        self._parser.optionxform = str  # keep key case as written
        if self.path.exists():
            self._parser.read(self.path, encoding="utf-8")

    @property
    def show_introduction(self) -> bool:
        """Whether the introduction is shown; defaults to True."""
        return self._parser.getboolean(_SECTION, _SHOW_INTRODUCTION, fallback=True)

    @show_introduction.setter
    def show_introduction(self, value: bool) -> None:
        if not self._parser.has_section(_SECTION):
            self._parser.add_section(_SECTION)
        self._parser.set(_SECTION, _SHOW_INTRODUCTION, "True" if value else "False")
        self.save()

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            self._parser.write(handle, space_around_delimiters=False)