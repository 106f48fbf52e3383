"""Built-in page themes and the user themes file."""

from __future__ import annotations

import tomllib
import urllib.parse
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

from markpage_core.errors import ConfigParseError, ThemeIOError
from markpage_core.logging_setup import get_logger
from markpage_core.paths import themes_path

from .models import InlineSource, PathSource, Theme, ThemeSource, UrlSource


DEFAULT_THEME_NAME = "air"

BUILTIN_THEME_FILES = (
    "air.css",
    "modest.css",
    "retro.css",
    "splendor.css",
)

logger = get_logger("themes")


@lru_cache(maxsize=None)
def builtin_themes() -> tuple[Theme, ...]:
    css_dir = resources.files(__package__) / "css"
    return tuple(
        Theme(
            name=Path(filename).stem,
            source=InlineSource((css_dir / filename).read_text(encoding="utf-8")),
            builtin=True,
        )
        for filename in BUILTIN_THEME_FILES
    )


@dataclass(frozen=True)
class Themes:
    """Ordered theme sequence; lookups return the first name match."""

    themes: tuple[Theme, ...] = ()

    @classmethod
    def default(cls) -> Themes:
        return cls(builtin_themes())

    def __iter__(self) -> Iterator[Theme]:
        return iter(self.themes)

    def __len__(self) -> int:
        return len(self.themes)

    def by_name(self, name: str) -> Theme | None:
        for theme in self.themes:
            if theme.name == name:
                return theme
        return None

    def names(self) -> list[str]:
        return list(dict.fromkeys(theme.name for theme in self.themes))

    def extend(self, themes: Iterable[Theme]) -> Themes:
        return Themes(self.themes + tuple(themes))

    def is_shadowed(self, theme: Theme) -> bool:
        return self.by_name(theme.name) is not theme


def _entry_string(entry: dict[str, Any], key: str, where: str) -> str | None:
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigParseError(f"{where}: '{key}' must be a string")
    return value


def _check_url(url: str, where: str) -> str:
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigParseError(f"{where}: invalid theme url '{url}'")
    return url


def _theme_from_entry(entry: Any, where: str) -> Theme:
    if not isinstance(entry, dict):
        raise ConfigParseError(f"{where}: expected a table")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigParseError(f"{where}: missing field 'name'")

    inline = _entry_string(entry, "inline", where)
    path = _entry_string(entry, "path", where)
    url = _entry_string(entry, "url", where)
    if url is not None:
        url = _check_url(url, where)

    given = [key for key, value in (("inline", inline), ("path", path), ("url", url)) if value is not None]
    if len(given) > 1:
        logger.warning(
            "theme %s sets %s; using %s",
            name,
            ", ".join(given),
            given[0],
            extra={"event": "theme_multiple_sources"},
        )

    source: ThemeSource | None = None
    if inline is not None:
        source = InlineSource(inline)
    elif path is not None:
        source = PathSource(Path(path))
    elif url is not None:
        source = UrlSource(url)
    return Theme(name=name, source=source)


def parse_themes(text: str, origin: str = "<themes>") -> list[Theme]:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(f"{origin}: {exc}") from exc

    if "themes" not in data:
        raise ConfigParseError(f"{origin}: missing field 'themes'")
    entries = data["themes"]
    if not isinstance(entries, list):
        raise ConfigParseError(f"{origin}: 'themes' must be an array of tables")

    return [_theme_from_entry(entry, f"{origin}: themes[{idx}]") for idx, entry in enumerate(entries)]


def load_user_themes(path: Path | None = None) -> list[Theme]:
    path = path or themes_path()
    if not path.exists():
        return []

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeIOError(f"cannot read themes file {path}: {exc}") from exc

    themes = parse_themes(text, origin=str(path))
    logger.info("loaded %d user themes from %s", len(themes), path, extra={"event": "user_themes_loaded"})
    return themes


def available_themes(path: Path | None = None) -> Themes:
    return Themes.default().extend(load_user_themes(path))
