import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "themes"))

from markpage_core.errors import ConfigParseError
from markpage_themes import (
    DEFAULT_THEME_NAME,
    InlineSource,
    PathSource,
    Theme,
    Themes,
    UrlSource,
    available_themes,
    load_user_themes,
    parse_themes,
)

USER_THEMES = """
[[themes]]
name = "paper"
path = "styles/paper.css"

[[themes]]
name = "snippet"
inline = "body { margin: 0 }"

[[themes]]
name = "cdn"
url = "https://example.com/cdn.css"

[[themes]]
name = "air"
inline = "body { color: hotpink }"
"""


class ThemesRegistryTests(unittest.TestCase):
    def test_builtin_order(self):
        themes = Themes.default()
        self.assertEqual(themes.names(), ["air", "modest", "retro", "splendor"])
        self.assertEqual(DEFAULT_THEME_NAME, "air")
        self.assertTrue(all(t.builtin and t.kind == "inline" for t in themes))

    def test_by_name_returns_first_match(self):
        a = Theme(name="A", source=InlineSource("a{}"))
        b = Theme(name="B", source=InlineSource("b{}"))
        override = Theme(name="A", source=InlineSource("a{color:red}"))
        themes = Themes((a, b)).extend([override])
        self.assertIs(themes.by_name("A"), a)
        self.assertTrue(themes.is_shadowed(override))
        self.assertFalse(themes.is_shadowed(a))
        self.assertEqual(themes.names(), ["A", "B"])
        self.assertIsNone(themes.by_name("C"))

    def test_parse_user_themes(self):
        themes = parse_themes(USER_THEMES)
        self.assertEqual([t.name for t in themes], ["paper", "snippet", "cdn", "air"])
        self.assertEqual(themes[0].source, PathSource(Path("styles/paper.css")))
        self.assertEqual(themes[1].source, InlineSource("body { margin: 0 }"))
        self.assertEqual(themes[2].source, UrlSource("https://example.com/cdn.css"))
        self.assertFalse(any(t.builtin for t in themes))

    def test_user_theme_does_not_replace_builtin(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "themes.toml"
            path.write_text(USER_THEMES, encoding="utf-8")
            themes = available_themes(path)
            self.assertEqual(len(themes), 8)
            self.assertTrue(themes.by_name("air").builtin)
            self.assertEqual(themes.by_name("paper").kind, "path")

    def test_missing_file_returns_builtins(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "themes.toml"
            self.assertEqual(load_user_themes(path), [])
            self.assertEqual(available_themes(path).names(), Themes.default().names())

    def test_entry_without_source_is_kept(self):
        themes = parse_themes('[[themes]]\nname = "bare"\n')
        self.assertIsNone(themes[0].source)
        self.assertIsNone(themes[0].kind)

    def test_multiple_sources_prefer_inline_then_path(self):
        themes = parse_themes(
            '[[themes]]\nname = "both"\npath = "x.css"\ninline = "p{}"\n'
            '[[themes]]\nname = "pu"\nurl = "https://example.com/x.css"\npath = "x.css"\n'
        )
        self.assertEqual(themes[0].source, InlineSource("p{}"))
        self.assertEqual(themes[1].source, PathSource(Path("x.css")))

    def test_malformed_files_raise_config_parse_error(self):
        bad_inputs = [
            "[[themes]\nname = 'x'",
            "name = 'x'",
            "themes = 'x'",
            "[[themes]]\npath = 'x.css'",
            "[[themes]]\nname = 'x'\npath = 3",
            "[[themes]]\nname = 'x'\nurl = 'not a url'",
        ]
        for text in bad_inputs:
            with self.subTest(text=text):
                with self.assertRaises(ConfigParseError):
                    parse_themes(text, origin="themes.toml")

    def test_parse_error_names_origin_and_entry(self):
        with self.assertRaises(ConfigParseError) as ctx:
            parse_themes("[[themes]]\nname = 'ok'\ninline = 'a{}'\n[[themes]]\ninline = 'b{}'\n", origin="user.toml")
        self.assertIn("user.toml", str(ctx.exception))
        self.assertIn("themes[1]", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
