"""
Host logging façade tests

Tests placeholder rendering in Format and lines written through loguru.
"""

import io
from datetime import datetime

import pytest
from loguru import logger

from colorgful.lib.host import Format, level_render
from colorgful.lib.log import LOG
from colorgful.lib.sink import level_loguruName
from colorgful.models.level import Level


class TestLevel:
    """Test level lookups"""

    def test_from_name_case_insensitive(self):
        """Names match regardless of case"""
        assert Level.from_name("Warning") is Level.WARNING
        assert Level.from_name("FATAL") is Level.FATAL

    def test_from_name_unknown(self):
        """Unknown names raise ValueError"""
        with pytest.raises(ValueError):
            Level.from_name("verbose")

    @pytest.mark.parametrize("severity,level", [
        (0, Level.TRACE),
        (5, Level.TRACE),
        (10, Level.DEBUG),
        (25, Level.INFO),
        (30, Level.WARNING),
        (40, Level.ERROR),
        (50, Level.FATAL),
        (99, Level.FATAL),
    ])
    def test_from_severity(self, severity, level):
        """Numeric severities round down onto the six levels"""
        assert Level.from_severity(severity) is level


class TestFormat:
    """Test placeholder rendering"""

    def test_literal_template(self):
        """Templates without placeholders render unchanged"""
        assert Format("plain %s").render(Level.INFO) == "plain %s"

    def test_level(self):
        """${level} renders the upper-case label"""
        assert Format("${level} %s").render(Level.WARNING) == "WARNING %s"

    def test_level_pattern_and_alignment(self):
        """${level:pattern:align} pads and wraps the label"""
        assert level_render(Level.INFO, "[%s]") == "[INFO]"
        assert level_render(Level.INFO, "%s:right") == "   INFO"
        assert level_render(Level.INFO, "[%s]:left") == "[INFO   ]"

    def test_prefix(self):
        """${prefix} renders the prefix argument"""
        assert Format("${prefix}|%s").render(Level.INFO, "worker-1") == "worker-1|%s"

    def test_time(self):
        """${time:fmt} renders the current time"""
        year = str(datetime.now().year)
        assert Format("${time:%Y}").render(Level.INFO) in (year, str(int(year) + 1))

    def test_unknown_placeholder_verbatim(self):
        """Placeholders without handler are kept as written"""
        assert Format("${host} %s").render(Level.INFO) == "${host} %s"

    def test_custom_placeholder(self):
        """Registered handlers receive level and value"""
        format_ = Format("${tag:x} %s")
        format_.placeholder_set("tag", lambda level, value: f"{value}-{level.lower}")

        assert format_.render(Level.DEBUG) == "x-debug %s"

    def test_segments_split_once(self):
        """The template is pre-split into literals and placeholders"""
        assert Format.segments_split("a ${level:[%s]} b") == [
            "a ",
            ("level", "[%s]", "${level:[%s]}"),
            " b",
        ]


class LevelRecorder(io.StringIO):
    """Output recording the level passed to write_with_level"""

    def __init__(self):
        super().__init__()
        self.levels = []

    def write_with_level(self, data, level):
        self.levels.append(level)
        return self.write(data)


class TestMessageSlot:
    """Test splitting at the template's own %s"""

    def test_split_at_slot(self):
        """Text before and after the slot is returned separately"""
        assert Format("[${level}] %s!").render_parts(Level.INFO) == ("[INFO] ", "!")

    def test_no_slot(self):
        """Without a slot everything is head"""
        assert Format("${level} ").render_parts(Level.INFO) == ("INFO ", "")

    def test_slot_from_prefix_ignored(self):
        """A %s inside the rendered prefix is not the slot"""
        head, tail = Format("${prefix} ${level} %s").render_parts(Level.INFO, "50%s")
        assert (head, tail) == ("50%s INFO ", "")

    def test_slot_from_level_pattern_ignored(self):
        """The %s of a ${level:pattern} argument is not the slot"""
        head, tail = Format("${level:[%s]} %s.").render_parts(Level.WARNING)
        assert (head, tail) == ("[WARNING] ", ".")

    def test_only_first_slot(self):
        """Later %s in the template stay literal"""
        assert Format("%s %s").render_parts(Level.INFO) == ("", " %s")


class TestLoguruHost:
    """Test lines written through a loguru handler"""

    def test_message_in_slot(self, logged):
        """Message goes where the template's %s is"""
        buffer = logged(Format("[${level}] %s!"))
        logger.info("hi")
        assert buffer.getvalue() == "[INFO] hi!\n"

    def test_message_appended_without_slot(self, logged):
        """Without a slot the message is appended"""
        buffer = logged(Format("${level} "))
        logger.info("hi")
        assert buffer.getvalue() == "INFO hi\n"

    def test_prefix_containing_slot(self, logged):
        """A bound prefix with %s in it does not capture the message"""
        buffer = logged(Format("${prefix} ${level} %s"))
        logger.bind(prefix="50%s").info("msg")
        assert buffer.getvalue() == "50%s INFO msg\n"

    def test_arguments_formatted(self, logged):
        """loguru's own argument formatting applies to the message"""
        buffer = logged(Format("%s"))
        logger.warning("disk {} at {}%", "/var", 91)
        assert buffer.getvalue() == "disk /var at 91%\n"

    def test_levels_mapped(self, logged):
        """loguru levels map onto the six levels by severity"""
        buffer = logged(Format("${level} %s"))

        logger.trace("a")
        logger.success("b")
        logger.critical("c")

        assert buffer.getvalue() == "TRACE a\nINFO b\nFATAL c\n"

    def test_loguru_level_names(self):
        """FATAL is logged as loguru's CRITICAL"""
        assert level_loguruName(Level.FATAL) == "CRITICAL"
        assert level_loguruName(Level.WARNING) == "WARNING"

    def test_write_with_level_preferred(self, logged):
        """Outputs with write_with_level receive the level"""
        output = LevelRecorder()
        logged(Format("%s"), output)

        logger.debug("x")

        assert output.levels == [Level.DEBUG]
        assert output.getvalue() == "x\n"

    def test_diagnostics_not_rendered(self, logged):
        """Records emitted through LOG() bypass application handlers"""
        buffer = logged(Format("%s"))

        LOG("internal", level=0)
        logger.info("app")

        assert buffer.getvalue() == "app\n"
