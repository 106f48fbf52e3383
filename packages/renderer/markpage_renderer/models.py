"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass

from markpage_themes.models import Theme


@dataclass(frozen=True)
class RenderOptions:
    theme: Theme
    highlight: bool = False
    math: bool = False
