"""Typed theme models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class InlineSource:
    css: str


@dataclass(frozen=True)
class PathSource:
    path: Path


@dataclass(frozen=True)
class UrlSource:
    url: str


ThemeSource = InlineSource | PathSource | UrlSource


@dataclass(frozen=True)
class Theme:
    """A named stylesheet with at most one source."""

    name: str
    source: ThemeSource | None = None
    builtin: bool = False

    @property
    def kind(self) -> str | None:
        if isinstance(self.source, InlineSource):
            return "inline"
        if isinstance(self.source, PathSource):
            return "path"
        if isinstance(self.source, UrlSource):
            return "url"
        return None
