"""
Loguru integration tests

Tests that a compiled theme installed as a loguru handler renders headers
per level and styles continuation lines.
"""

import io

import pytest
from loguru import logger

from colorgful.lib.log import application_only
from colorgful.lib.sink import markup_escape, theme_install
from colorgful.lib.style import compile_and_execute
from colorgful.lib.theme import apply_default_theme
from colorgful.models.style import StyleConfig
from colorgful.models.theme import DARK, DEFAULT


COLORS = StyleConfig(colors=True)


@pytest.fixture
def themed_logger():
    """Loguru logger writing into a buffer through a compiled theme"""
    handlers = []

    def install(palette, formatting="${level} %s", config=COLORS):
        buffer = io.StringIO()
        theme = apply_default_theme(formatting, palette, writer=buffer, config=config)
        handlers.append(theme_install(theme, logger, filter=application_only))
        return buffer

    yield install

    for handler_id in handlers:
        logger.remove(handler_id)


class TestMarkupEscape:
    """Test header escaping for loguru format strings"""

    def test_braces_doubled(self):
        assert markup_escape("{a}") == "{{a}}"

    def test_tags_escaped(self):
        assert markup_escape("<red>") == "\\<red>"

    def test_escape_sequences_untouched(self):
        assert markup_escape("\x1b[38;5;1m") == "\x1b[38;5;1m"


class TestThemeInstall:
    """Test records rendered through a loguru handler"""

    def test_error_record(self, themed_logger):
        """Header styling and message end up in the output"""
        buffer = themed_logger(DARK)

        logger.error("hello")

        output = buffer.getvalue()
        assert "ERROR" in output
        assert "hello" in output
        assert compile_and_execute("{fg 202}", config=COLORS) in output
        assert output.endswith("\n")

    def test_level_mapped_by_severity(self, themed_logger):
        """loguru's SUCCESS (25) renders as INFO, CRITICAL as FATAL"""
        buffer = themed_logger(DARK, config=StyleConfig(colors=False))

        logger.success("done")
        logger.critical("gone")

        assert buffer.getvalue() == "INFO done\nFATAL gone\n"

    def test_message_not_formatted_twice(self, themed_logger):
        """Braces and angle brackets in messages are written as-is"""
        buffer = themed_logger(DARK, config=StyleConfig(colors=False))

        logger.info("a {b} <c>")

        assert buffer.getvalue() == "INFO a {b} <c>\n"

    def test_prefix_from_extra(self, themed_logger):
        """A bound prefix value fills ${prefix}"""
        buffer = themed_logger(DARK, "${prefix}: %s", config=StyleConfig(colors=False))

        logger.bind(prefix="worker-1").info("ready")

        assert buffer.getvalue() == "worker-1: ready\n"

    def test_prefix_with_slot_text(self, themed_logger):
        """A %s inside the prefix stays put, the message goes to the format's slot"""
        buffer = themed_logger(DARK, "${prefix} ${level} %s", config=StyleConfig(colors=False))

        logger.bind(prefix="50%s").info("msg")

        assert buffer.getvalue() == "50%s INFO msg\n"

    def test_theme_install_method(self, logged):
        """Theme.install adds the same handler"""
        theme = apply_default_theme(
            "${level} %s", DARK, writer=io.StringIO(), config=StyleConfig(colors=False)
        )
        buffer = logged(theme)

        logger.warning("careful")

        assert buffer.getvalue() == "WARNING careful\n"

    def test_multiline_trailer(self, themed_logger):
        """Continuation lines get the trailing style once"""
        buffer = themed_logger(DEFAULT)
        trailer = compile_and_execute("{reset}{fg 9}", config=COLORS)

        logger.error("first\nsecond")

        lines = buffer.getvalue().split("\n")
        assert lines[1].startswith(trailer + "second")
        assert buffer.getvalue().count(trailer) == 1

    def test_exception_appended(self, themed_logger):
        """Tracebacks follow the message"""
        buffer = themed_logger(DARK, config=StyleConfig(colors=False))

        try:
            raise ValueError("boom")
        except ValueError:
            logger.exception("failed")

        output = buffer.getvalue()
        assert output.startswith("ERROR failed\n")
        assert "ValueError: boom" in output
