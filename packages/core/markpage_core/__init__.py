"""Core services: errors, config directory, settings, and logging."""

from .config import AppConfig, load_config, save_config
from .errors import (
    ConfigParseError,
    MarkdownCompileError,
    MarkpageError,
    ThemeIOError,
    ThemeMinifyError,
    ThemeSourceMissingError,
    ThemeUnimplementedError,
    UnknownThemeError,
)
from .paths import config_dir, config_path, log_dir, themes_path

__all__ = [
    "AppConfig",
    "ConfigParseError",
    "MarkdownCompileError",
    "MarkpageError",
    "ThemeIOError",
    "ThemeMinifyError",
    "ThemeSourceMissingError",
    "ThemeUnimplementedError",
    "UnknownThemeError",
    "config_dir",
    "config_path",
    "load_config",
    "log_dir",
    "save_config",
    "themes_path",
]
