"""Theme registry and resolution to minified CSS."""

from .fetch import UrlFetcher
from .models import InlineSource, PathSource, Theme, ThemeSource, UrlSource
from .resolver import ThemeResolver, minify_css
from .themes import (
    DEFAULT_THEME_NAME,
    Themes,
    available_themes,
    builtin_themes,
    load_user_themes,
    parse_themes,
)

__all__ = [
    "DEFAULT_THEME_NAME",
    "InlineSource",
    "PathSource",
    "Theme",
    "ThemeResolver",
    "ThemeSource",
    "Themes",
    "UrlFetcher",
    "UrlSource",
    "available_themes",
    "builtin_themes",
    "load_user_themes",
    "minify_css",
    "parse_themes",
]
