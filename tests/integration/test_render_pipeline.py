import contextlib
import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "cli"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "themes"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from markpage_app import cli
from markpage_core.config import AppConfig, save_config
from markpage_renderer import Document, RenderOptions
from markpage_themes import ThemeResolver, available_themes

THEMES_TOML = """
[[themes]]
name = "paper"
path = "styles/paper.css"

[[themes]]
name = "cdn"
url = "https://example.com/cdn.css"
"""


class RenderPipelineTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = Path(self._tmp.name)
        (self.config_dir / "styles").mkdir()
        (self.config_dir / "styles" / "paper.css").write_text(
            "body {\n  background: ivory;\n}\n", encoding="utf-8"
        )
        (self.config_dir / "themes.toml").write_text(THEMES_TOML, encoding="utf-8")
        self._env = patch.dict(os.environ, {"MARKPAGE_CONFIG_DIR": str(self.config_dir)})
        self._env.start()
        self._logging = patch.object(cli, "configure_logging")
        self._logging.start()

    def tearDown(self):
        self._logging.stop()
        self._env.stop()
        self._tmp.cleanup()

    def test_user_path_theme_end_to_end(self):
        themes = available_themes()
        theme = themes.by_name("paper")
        page = Document("# Notes\n\ntext").render(RenderOptions(theme=theme), resolver=ThemeResolver())
        self.assertIn("<title>Notes</title>", page)
        self.assertIn("background:ivory", page)

    def test_cli_render_writes_file(self):
        source = self.config_dir / "doc.md"
        source.write_text("# Report\n\n```sh\necho hi\n```\n", encoding="utf-8")
        out = self.config_dir / "out" / "doc.html"
        rc = cli.main(["render", str(source), "-o", str(out), "--theme", "paper", "--highlight"])
        self.assertEqual(rc, 0)
        page = out.read_text(encoding="utf-8")
        self.assertIn("<title>Report</title>", page)
        self.assertIn("hljs.initHighlightingOnLoad();", page)
        self.assertIn("background:ivory", page)

    def test_cli_uses_config_defaults(self):
        cfg = AppConfig()
        cfg.render.theme = "retro"
        cfg.render.math = True
        save_config(cfg, self.config_dir / "config.json")
        source = self.config_dir / "doc.md"
        source.write_text("$x$\n", encoding="utf-8")
        out = self.config_dir / "doc.html"
        self.assertEqual(cli.main(["render", str(source), "-o", str(out)]), 0)
        page = out.read_text(encoding="utf-8")
        self.assertIn("katex.min.js", page)
        self.assertIn("background-color:#222", page)

    def test_cli_unknown_theme_fails(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = cli.main(["render", "-", "--theme", "nope"])
        self.assertEqual(rc, 1)
        self.assertIn("no such theme: nope", stderr.getvalue())

    def test_cli_url_theme_without_remote_fails(self):
        source = self.config_dir / "doc.md"
        source.write_text("# x\n", encoding="utf-8")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = cli.main(["render", str(source), "--theme", "cdn"])
        self.assertEqual(rc, 1)
        self.assertIn("not supported", stderr.getvalue())

    def test_cli_themes_list(self):
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            rc = cli.main(["themes", "list"])
        self.assertEqual(rc, 0)
        listed = json.loads(stdout.getvalue())
        self.assertEqual([t["name"] for t in listed][:4], ["air", "modest", "retro", "splendor"])
        self.assertEqual(listed[4], {"name": "paper", "kind": "path", "builtin": False, "shadowed": False})

    def test_cli_broken_themes_file_fails(self):
        (self.config_dir / "themes.toml").write_text("[[themes]\n", encoding="utf-8")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = cli.main(["themes", "list"])
        self.assertEqual(rc, 1)
        self.assertIn("themes.toml", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
