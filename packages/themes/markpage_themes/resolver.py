"""Turn a theme's source into minified CSS text."""

from __future__ import annotations

from pathlib import Path

import rcssmin
import tinycss2

from markpage_core.errors import (
    ThemeIOError,
    ThemeMinifyError,
    ThemeSourceMissingError,
    ThemeUnimplementedError,
)
from markpage_core.logging_setup import get_logger
from markpage_core.paths import config_dir as default_config_dir

from .fetch import UrlFetcher
from .models import InlineSource, PathSource, Theme, UrlSource


logger = get_logger("themes")


def minify_css(css: str) -> str:
    """Reject stylesheets with top-level syntax errors, then minify."""
    for node in tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True):
        if node.type == "error":
            raise ThemeMinifyError(
                f"malformed CSS at line {node.source_line}, column {node.source_column}: {node.message}"
            )
    return rcssmin.cssmin(css)


class ThemeResolver:
    """Resolves themes against a config directory and an optional URL fetcher.

    Without a fetcher, URL sources fail with ``ThemeUnimplementedError``.
    """

    def __init__(self, config_dir: Path | None = None, fetcher: UrlFetcher | None = None) -> None:
        self._config_dir = config_dir
        self.fetcher = fetcher

    @property
    def config_dir(self) -> Path:
        if self._config_dir is None:
            self._config_dir = default_config_dir()
        return self._config_dir

    def resolve(self, theme: Theme) -> str:
        css = self.raw_css(theme)
        try:
            return minify_css(css)
        except ThemeMinifyError as exc:
            raise ThemeMinifyError(f"theme '{theme.name}': {exc.message}") from exc

    def raw_css(self, theme: Theme) -> str:
        source = theme.source
        if isinstance(source, InlineSource):
            return source.css
        if isinstance(source, PathSource):
            return self._read_path(theme.name, source.path)
        if isinstance(source, UrlSource):
            return self._fetch(theme.name, source.url)
        raise ThemeSourceMissingError(f"theme '{theme.name}': theme source is not specified")

    def _read_path(self, name: str, path: Path) -> str:
        path = path.expanduser()
        if not path.is_absolute():
            path = self.config_dir / path

        logger.debug("reading theme %s from %s", name, path, extra={"event": "theme_read"})
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ThemeIOError(f"theme '{name}': cannot read {path}: {exc}") from exc

    def _fetch(self, name: str, url: str) -> str:
        if self.fetcher is None:
            raise ThemeUnimplementedError(
                f"theme '{name}': fetching themes from URLs is not supported ({url})"
            )
        return self.fetcher.fetch(url)
