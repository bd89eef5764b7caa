"""
Loguru integration

Loguru is the host logger: a compiled formatter renders the header of
every record through a dynamic loguru format, and a theme's output
re-applies the trailing style on multi-line messages.

Usage:
    from loguru import logger
    from colorgful import apply_default_theme, DARK
    from colorgful.lib.sink import theme_install

    theme = apply_default_theme("${time} ${level:[%s]:right} %s", DARK)
    theme_install(theme, logger)
    logger.error("disk full")
"""

from typing import TYPE_CHECKING, Any, Dict

from loguru import logger

from ..models.level import Level
from .host import Formatter
from .log import LOG

if TYPE_CHECKING:
    from .theme import Theme


def markup_escape(text: str) -> str:
    """
    Escape rendered header text for use as a loguru format string

    Braces are doubled for str.format(); opening angle brackets are
    backslash-escaped so loguru does not read them as color markup.
    """
    return (
        text.replace("{", "{{")
        .replace("}", "}}")
        .replace("<", "\\<")
    )


def record_level(record: Dict[str, Any]) -> Level:
    """Map a loguru record's level onto the six levels by severity"""
    return Level.from_severity(record["level"].no)


def level_loguruName(level: Level) -> str:
    """
    Name of the loguru level a record of given level is logged at

    Example:
        logger.log(level_loguruName(Level.FATAL), "gone")  # CRITICAL
    """
    return "CRITICAL" if level is Level.FATAL else level.label


def formatter_install(
    formatter: Formatter,
    output: Any,
    sink_logger: Any = logger,
    level: Any = "TRACE",
    **kwargs: Any,
) -> int:
    """
    Add a loguru handler rendering records with given formatter

    The header is split at the template's own %s slot and loguru's
    {message} goes there, so rendered fields never move the message. The
    record's extra "prefix" value, if bound, is substituted for ${prefix}.

    Args:
        formatter: Compiled formatter (or host Format)
        output: Stream to write to; write_with_level(data, level) is
                used when available, write(data) otherwise
        sink_logger: Loguru logger to add the handler to
        level: Minimum loguru level for the handler
        **kwargs: Passed through to logger.add(), e.g. filter=

    Returns:
        Loguru handler id, for logger.remove()
    """

    def format_make(record: Dict[str, Any]) -> str:
        head, tail = formatter.render_parts(record_level(record), record["extra"].get("prefix", ""))
        return markup_escape(head) + "{message}" + markup_escape(tail) + "\n{exception}"

    write_with_level = getattr(output, 'write_with_level', None)

    def sink(message: Any) -> None:
        if write_with_level is not None:
            write_with_level(str(message), record_level(message.record))
        else:
            output.write(str(message))

    handler_id = sink_logger.add(sink, format=format_make, colorize=False, level=level, **kwargs)
    LOG(f"Installed formatter as loguru handler {handler_id}", level=2)
    return handler_id


def theme_install(theme: "Theme", sink_logger: Any = logger, level: Any = "TRACE", **kwargs: Any) -> int:
    """
    Add a loguru handler rendering records with given theme

    Same as formatter_install() with the theme's line formatter and its
    output wrapper, which styles continuation lines.
    """
    return formatter_install(theme.formatter, theme.output, sink_logger, level, **kwargs)
