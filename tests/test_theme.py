"""
Default theme tests

Tests the line/trailing formatter pair built from a palette, the output
wrapper splicing continuation styles, and palette loading.
"""

import io

import pytest
from loguru import logger

from colorgful.lib.sink import level_loguruName
from colorgful.lib.style import compile_and_execute
from colorgful.lib.theme import (
    DefaultOutput,
    ThemeError,
    apply_default_theme,
    lineFormat_make,
    must_apply_default_theme,
    palette_get,
    palette_load,
    palette_validate,
    palettes_listAvailable,
)
from colorgful.models.level import Level
from colorgful.models.style import StyleConfig
from colorgful.models.theme import DARK, DEFAULT, LIGHT, ThemeLevel, ThemePalette


COLORS = StyleConfig(colors=True)
PLAIN = "{nofg}{nobg}{nobold}{noreverse}"


def expected_style(style: str) -> str:
    return compile_and_execute(style, config=COLORS)


def themed(palette: ThemePalette, formatting: str = "${level} %s"):
    """Theme compiled with colors, writing into its own buffer"""
    return apply_default_theme(formatting, palette, writer=io.StringIO(), config=COLORS)


class TestLineFormat:
    """Test line format construction"""

    def test_prelude_and_label_wrapping(self):
        """Six first-line conditionals, a store, and a wrapped label"""
        palette = ThemePalette(error=ThemeLevel(first="{fg 1}", level="{bold}"))

        source = lineFormat_make("${level} %s", palette)

        assert source == (
            '{ontrace ""}{ondebug ""}{oninfo ""}{onwarning ""}'
            '{onerror "{fg 1}"}{onfatal ""}{store}'
            '{onerror "{bold}"}{onfatal ""}${level} {reset}{restore}%s'
        )

    def test_label_with_arguments(self):
        """Labels with formatting arguments are wrapped too"""
        source = lineFormat_make("${time} ${level:[%s]:right} %s", ThemePalette())
        assert "${level:[%s]:right} {reset}{restore}%s" in source

    def test_fragments_quoted(self):
        """Quotes in fragments survive substitution"""
        palette = ThemePalette(info=ThemeLevel(first='{to 1 ">"}'))
        assert '{oninfo "{to 1 \\">\\"}"}' in lineFormat_make("%s", palette)


class TestDarkTheme:
    """Test rendering with the dark palette"""

    def test_error_line(self, logged):
        """Error gets line style, label style, then the line style back"""
        buffer = logged(themed(DARK))

        logger.error("hello")

        assert buffer.getvalue() == expected_style(
            "{fg 202}{bold}{bg 52}ERROR {reset}" + PLAIN + "{fg 202}hello{reset}\n"
        )

    def test_info_line(self, logged):
        """Info has no label style"""
        buffer = logged(themed(DARK))

        logger.info("hello")

        assert buffer.getvalue() == expected_style(
            "{fg 110}INFO {reset}" + PLAIN + "{fg 110}hello{reset}\n"
        )

    @pytest.mark.parametrize("palette", [DARK, LIGHT, DEFAULT], ids=["dark", "light", "default"])
    def test_every_level_renders(self, logged, palette):
        """Every level compiles and renders its label"""
        buffer = logged(themed(palette))

        for level in Level:
            logger.log(level_loguruName(level), "x")

        output = buffer.getvalue()
        for level in Level:
            assert level.label in output


class TestTrailingOutput:
    """Test continuation line styling"""

    def test_trailer_after_first_newline_only(self, logged):
        """The trail style is spliced in once, right after the first newline"""
        theme = themed(DEFAULT)
        buffer = logged(theme)
        trailer = expected_style("{reset}{fg 9}")

        logger.error("a\nb\nc")

        lines = buffer.getvalue().split("\n")
        assert len(lines) == 4
        assert lines[1] == trailer + "b"
        assert lines[2].startswith("c")
        assert buffer.getvalue().count(trailer) == 1

    def test_single_line_unchanged(self, logged):
        """A record whose only newline terminates it is written as rendered"""
        theme = themed(DEFAULT)
        buffer = logged(theme)

        logger.error("hello")

        head, tail = theme.formatter.render_parts(Level.ERROR)
        expected = head + "hello" + tail + "\n"
        assert buffer.getvalue() == expected

    def test_empty_trail_style(self, logged):
        """Levels without trail style leave continuation lines alone"""
        buffer = logged(themed(DARK))

        logger.info("a\nb")

        assert buffer.getvalue().split("\n")[1].startswith("b")

    def test_output_write_passthrough(self):
        """Plain write goes to the writer unchanged"""
        buffer = io.StringIO()
        theme = themed(DARK)
        output = DefaultOutput(theme.output.trailer, buffer)

        output.write("a\nb\n")

        assert buffer.getvalue() == "a\nb\n"


class TestThemeErrors:
    """Test compile failure handling"""

    def test_bad_format_raises(self):
        """A broken host format fails theme compilation"""
        with pytest.raises(ThemeError, match="line format"):
            apply_default_theme("{bogus} %s", DARK, config=COLORS)

    def test_must_variant_exits(self):
        """The aborting variant exits with status 1"""
        with pytest.raises(SystemExit) as excinfo:
            must_apply_default_theme("{bogus} %s", DARK, config=COLORS)
        assert excinfo.value.code == 1

    def test_must_variant_returns_theme(self):
        """The aborting variant returns the theme on success"""
        theme = must_apply_default_theme("${level} %s", LIGHT, config=COLORS)
        assert theme.formatter.render(Level.INFO).endswith(expected_style("{reset}"))

    def test_bad_fragment_degrades(self):
        """A broken palette fragment does not fail the theme"""
        palette = ThemePalette(error=ThemeLevel(first="{fg 1"))
        theme = apply_default_theme("${level} %s", palette, config=COLORS)
        assert "#{COMPILE ERROR:" in theme.formatter.template


class TestPalettes:
    """Test palette lookup, loading and validation"""

    def test_builtin_lookup(self):
        """Built-in names resolve case-insensitively"""
        assert palette_get("dark") is DARK
        assert palette_get("Light") is LIGHT

    def test_unknown_palette(self):
        """Unknown names raise ThemeError listing what exists"""
        with pytest.raises(ThemeError, match="default"):
            palette_get("solarized")

    def test_list_available(self, tmp_path):
        """Palette files in a directory are listed with the built-ins"""
        (tmp_path / "solarized.yaml").write_text("info:\n  first: '{fg 33}'\n")
        assert palettes_listAvailable(tmp_path) == ["dark", "default", "light", "solarized"]

    def test_load_from_directory(self, tmp_path):
        """palette_get falls back to <dir>/<name>.yaml"""
        (tmp_path / "solarized.yaml").write_text("info:\n  first: '{fg 33}'\n")
        palette = palette_get("solarized", tmp_path)
        assert palette.info.first == "{fg 33}"

    def test_load_yaml(self, tmp_path):
        """YAML palettes map levels to first/trail/level fragments"""
        path = tmp_path / "palette.yaml"
        path.write_text(
            "error:\n"
            "  first: '{fg 202}'\n"
            "  level: '{bold}{bg 52}'\n"
            "Warning:\n"
            "  trail: '{nobold}'\n"
        )

        palette = palette_load(path)

        assert palette.error == ThemeLevel(first="{fg 202}", level="{bold}{bg 52}")
        assert palette.warning.trail == "{nobold}"
        assert palette.trace == ThemeLevel()

    def test_load_empty_file(self, tmp_path):
        """An empty file is an empty palette"""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert palette_load(path) == ThemePalette()

    def test_load_missing_file(self, tmp_path):
        """Missing files raise ThemeError"""
        with pytest.raises(ThemeError, match="not found"):
            palette_load(tmp_path / "nope.yaml")

    def test_load_unknown_level(self, tmp_path):
        """Unknown levels are rejected"""
        path = tmp_path / "bad.yaml"
        path.write_text("verbose:\n  first: '{fg 1}'\n")
        with pytest.raises(ThemeError, match="unknown level"):
            palette_load(path)

    def test_load_unknown_field(self, tmp_path):
        """Unknown fields are rejected"""
        path = tmp_path / "bad.yaml"
        path.write_text("info:\n  color: '{fg 1}'\n")
        with pytest.raises(ThemeError, match="unknown fields"):
            palette_load(path)

    def test_load_invalid_yaml(self, tmp_path):
        """Unparsable YAML raises ThemeError"""
        path = tmp_path / "bad.yaml"
        path.write_text("info: [unclosed\n")
        with pytest.raises(ThemeError, match="Failed to parse"):
            palette_load(path)

    def test_validate_builtins(self):
        """Built-in palettes are valid"""
        for palette in (DARK, LIGHT, DEFAULT):
            assert palette_validate(palette) == (True, "Palette is valid")

    def test_validate_reports_first_failure(self):
        """Validation names the broken level and field"""
        palette = ThemePalette(debug=ThemeLevel(trail="{fg 999}"))
        valid, message = palette_validate(palette)
        assert valid is False
        assert message.startswith("debug.trail:")
