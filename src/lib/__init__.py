"""
colorgful library: style compiler, level-conditional formatters, themes
"""

from ..models import DARK, DEFAULT, LIGHT, Level, StyleConfig, ThemeLevel, ThemePalette
from .style import StyleError, StyleCompileError, StyleExecuteError, compile, compile_and_execute
from .formatter import Formatter, format, format_with_reset
from .host import Format
from .sink import formatter_install, theme_install
from .theme import Theme, ThemeError, apply_default_theme, must_apply_default_theme
from .log import LOG, application_only, verbosity_connectToLogger, logger_configure

__all__ = [
    "DARK",
    "DEFAULT",
    "LIGHT",
    "Level",
    "StyleConfig",
    "ThemeLevel",
    "ThemePalette",
    "StyleError",
    "StyleCompileError",
    "StyleExecuteError",
    "compile",
    "compile_and_execute",
    "Formatter",
    "format",
    "format_with_reset",
    "Format",
    "formatter_install",
    "theme_install",
    "Theme",
    "ThemeError",
    "apply_default_theme",
    "must_apply_default_theme",
    "LOG",
    "application_only",
    "verbosity_connectToLogger",
    "logger_configure",
]
