"""CLI entrypoints for rendering documents and inspecting themes."""

from __future__ import annotations

import argparse
import json
import sys
from importlib import metadata
from pathlib import Path

from markpage_core import (
    MarkpageError,
    UnknownThemeError,
    config_dir,
    config_path,
    load_config,
    themes_path,
)
from markpage_core.config import AppConfig
from markpage_core.logging_setup import configure_logging, get_logger
from markpage_core.paths import log_dir
from markpage_renderer import Document, RenderOptions
from markpage_themes import Theme, ThemeResolver, Themes, UrlFetcher, available_themes


logger = get_logger("app")


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _installed_version() -> str:
    try:
        return metadata.version("markpage")
    except Exception:
        return "0.1.0"


def _build_resolver(cfg: AppConfig, allow_remote: bool = False) -> ThemeResolver:
    fetcher = None
    if allow_remote or cfg.themes.allow_remote:
        fetcher = UrlFetcher(
            timeout_s=cfg.themes.fetch_timeout_s,
            max_bytes=cfg.themes.max_fetch_kb * 1024,
        )
    return ThemeResolver(fetcher=fetcher)


def _select_theme(themes: Themes, name: str) -> Theme:
    theme = themes.by_name(name)
    if theme is None:
        raise UnknownThemeError(name)
    return theme


def _load_document(source: str) -> Document:
    if source == "-":
        return Document(sys.stdin.read())
    return Document.from_path(Path(source).expanduser())


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    themes = available_themes()
    theme = _select_theme(themes, args.theme or cfg.render.theme)

    options = RenderOptions(
        theme=theme,
        highlight=cfg.render.highlight if args.highlight is None else args.highlight,
        math=cfg.render.math if args.math is None else args.math,
    )
    document = _load_document(args.input)
    logger.debug("loaded %d characters from %s", len(document.text), args.input, extra={"event": "document_loaded"})
    page = document.render(options, resolver=_build_resolver(cfg, args.allow_remote_themes))

    if args.output:
        out_path = Path(args.output).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(page, encoding="utf-8")
        logger.info("wrote %s", out_path, extra={"event": "page_written"})
    else:
        sys.stdout.write(page)
    return 0


def cmd_themes_list(_args: argparse.Namespace) -> int:
    themes = available_themes()
    _print_json(
        [
            {
                "name": t.name,
                "kind": t.kind,
                "builtin": t.builtin,
                "shadowed": themes.is_shadowed(t),
            }
            for t in themes
        ]
    )
    return 0


def cmd_themes_css(args: argparse.Namespace) -> int:
    cfg = load_config()
    theme = _select_theme(available_themes(), args.name)
    print(_build_resolver(cfg, args.allow_remote_themes).resolve(theme))
    return 0


def cmd_paths(_args: argparse.Namespace) -> int:
    _print_json(
        {
            "config_dir": config_dir(),
            "config_file": config_path(),
            "themes_file": themes_path(),
            "log_dir": log_dir(),
            "version": _installed_version(),
        }
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="markpage", description="Render markdown into self-contained HTML pages")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render a markdown file to HTML")
    render_cmd.add_argument("input", help="Markdown file, or - for stdin")
    render_cmd.add_argument("-o", "--output", default=None, help="Output HTML file (default: stdout)")
    render_cmd.add_argument("--theme", default=None, help="Theme name (default: from config)")
    render_cmd.add_argument("--highlight", action=argparse.BooleanOptionalAction, default=None)
    render_cmd.add_argument("--math", action=argparse.BooleanOptionalAction, default=None)
    render_cmd.add_argument("--allow-remote-themes", action="store_true", help="Fetch URL themes over the network")
    render_cmd.set_defaults(func=cmd_render)

    themes_cmd = sub.add_parser("themes", help="Inspect available themes")
    themes_sub = themes_cmd.add_subparsers(dest="themes_cmd", required=True)
    list_cmd = themes_sub.add_parser("list", help="List built-in and user themes")
    list_cmd.set_defaults(func=cmd_themes_list)
    css_cmd = themes_sub.add_parser("css", help="Print a theme's minified CSS")
    css_cmd.add_argument("name")
    css_cmd.add_argument("--allow-remote-themes", action="store_true")
    css_cmd.set_defaults(func=cmd_themes_css)

    paths_cmd = sub.add_parser("paths", help="Show config and log locations")
    paths_cmd.set_defaults(func=cmd_paths)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.logging.keep_log_files, console=cfg.logging.console, level=cfg.logging.level)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (MarkpageError, OSError) as exc:
        logger.error("command failed: %s", exc, extra={"event": "command_failed"})
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
