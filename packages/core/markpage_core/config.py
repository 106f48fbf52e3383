"""Persistent app settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .paths import config_path


CONFIG_VERSION = 1

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger("markpage.config")


@dataclass
class RenderConfig:
    theme: str = "air"
    highlight: bool = False
    math: bool = False


@dataclass
class ThemesConfig:
    allow_remote: bool = False
    fetch_timeout_s: int = 10
    max_fetch_kb: int = 512


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    level: str = "INFO"
    console: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    themes: ThemesConfig = field(default_factory=ThemesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(cfg: AppConfig) -> None:
    if not isinstance(cfg.render.theme, str) or not cfg.render.theme.strip():
        cfg.render.theme = RenderConfig.theme
    cfg.render.highlight = bool(cfg.render.highlight)
    cfg.render.math = bool(cfg.render.math)


def _normalize_themes(cfg: AppConfig) -> None:
    cfg.themes.allow_remote = bool(cfg.themes.allow_remote)
    cfg.themes.fetch_timeout_s = max(1, min(120, int(cfg.themes.fetch_timeout_s)))
    cfg.themes.max_fetch_kb = max(16, min(8192, int(cfg.themes.max_fetch_kb)))


def _normalize_logging(cfg: AppConfig) -> None:
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in _LOG_LEVELS else "INFO"
    cfg.logging.console = bool(cfg.logging.console)


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        logger.warning("unreadable config, using defaults: %s", path, extra={"event": "config_fallback"})
        return AppConfig()

    if not isinstance(raw, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(raw.get("config_version", CONFIG_VERSION)),
        render=_merge(RenderConfig, raw.get("render", {})),
        themes=_merge(ThemesConfig, raw.get("themes", {})),
        logging=_merge(LoggingConfig, raw.get("logging", {})),
    )

    _normalize_render(cfg)
    _normalize_themes(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
