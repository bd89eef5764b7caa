"""
Centralized diagnostics using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the verbosity of the
current context (or COLORGFUL_VERBOSITY) without requiring explicit
state passing.

Features:
- Context-aware logging tied to a verbosity level
- Rich formatting with timestamps, colors, and metadata
- Thread-safe using contextvars
- Does not touch loguru handlers unless logger_configure() is called,
  so importing the library leaves the host application's setup alone

Usage:
    from colorgful.lib.log import LOG, verbosity_connectToLogger

    # At start of a pipeline:
    verbosity_connectToLogger(2)

    # Anywhere in that context:
    LOG("Appears if verbosity >= 1", level=1)
    LOG("Debug details appear if verbosity >= 2", level=2)
    LOG("Verbose trace appears if verbosity >= 3", level=3)
"""

from loguru import logger
from typing import Any, Dict, Optional
from contextvars import ContextVar
import sys

from ..config import appsettings

# Context variable to hold the verbosity of the current context
_verbosity: ContextVar[Optional[int]] = ContextVar('verbosity', default=None)

# Loguru format used by the command line tool
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <7}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def diagnostic_only(record: Dict[str, Any]) -> bool:
    """Loguru filter passing only records emitted through LOG()"""
    return record["extra"].get("diagnostic", False)


def application_only(record: Dict[str, Any]) -> bool:
    """Loguru filter passing every record except LOG() diagnostics"""
    return not diagnostic_only(record)


def logger_configure(sink: Any = sys.stderr) -> int:
    """
    Replace loguru's handlers with the colorgful diagnostic handler.

    Meant for applications (the command line tool), not for library use.
    Only LOG() diagnostics reach this handler; records logged by the
    application go to whatever themed handlers it installs.

    Args:
        sink: Destination for diagnostics (default: stderr)

    Returns:
        Loguru handler id
    """
    logger.remove()  # Remove default handler
    return logger.add(sink, format=logger_format, level="DEBUG", filter=diagnostic_only)


def verbosity_connectToLogger(verbosity: int) -> None:
    """
    Set the diagnostic verbosity for the current context.

    Call this at the start of a pipeline to make the verbosity available
    to LOG() calls throughout that context. Without it, LOG() falls back
    to COLORGFUL_VERBOSITY.

    Args:
        verbosity: 0=silent, 1=warnings, 2=verbose, 3=debug

    Example:
        def theme_compile(inputstate: ProgramState) -> ProgramState:
            state = inputstate.copy()
            verbosity_connectToLogger(state.verbosity)
            LOG("Compiling theme...", level=1)
    """
    _verbosity.set(verbosity)


def LOG(message: str, level: int = 1, severity: str = "DEBUG", **kwargs: Any) -> None:
    """
    Log message if current verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        severity: Loguru level name used for the record
        **kwargs: Additional loguru metadata (e.g., exception=True)

    Example:
        LOG("Fragment failed to compile", level=1, severity="WARNING")
        LOG("Registered 6 level tokens", level=2)
        LOG("Token 3: error", level=3)
    """
    verbosity = _verbosity.get()

    if verbosity is None:
        if not appsettings.level_matches(level):
            return
    elif verbosity < level:
        return

    logger.bind(diagnostic=True).opt(depth=1).log(severity, message, **kwargs)
