from __future__ import annotations

import sys

try:
    # Normal package import path.
    from .cli import build_parser
    from .cli import main as _cli_main
except ImportError:
    # Script entrypoint path.
    from markpage_app.cli import build_parser
    from markpage_app.cli import main as _cli_main


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        build_parser().print_help()
        return 2
    return int(_cli_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
