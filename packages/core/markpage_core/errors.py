"""Error types shared by theme resolution, rendering, and the CLI."""

from __future__ import annotations


class MarkpageError(Exception):
    """Base failure carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ThemeSourceMissingError(MarkpageError):
    pass


class ThemeIOError(MarkpageError):
    pass


class ThemeUnimplementedError(MarkpageError):
    pass


class ThemeMinifyError(MarkpageError):
    pass


class MarkdownCompileError(MarkpageError):
    pass


class ConfigParseError(MarkpageError):
    pass


class UnknownThemeError(MarkpageError):
    def __init__(self, name: str) -> None:
        super().__init__(f"no such theme: {name}")
        self.name = name
