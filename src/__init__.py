"""
colorgful - Level-aware styling for log lines

Compiles format strings with color directives and level-conditional
markup into formatters that emit the right escape sequences for each
log level.
"""

__version__ = "1.0.0"

from .lib import (
    DARK,
    DEFAULT,
    LIGHT,
    Format,
    Formatter,
    Level,
    formatter_install,
    StyleConfig,
    StyleCompileError,
    StyleError,
    StyleExecuteError,
    Theme,
    ThemeError,
    ThemeLevel,
    ThemePalette,
    apply_default_theme,
    format,
    format_with_reset,
    must_apply_default_theme,
    theme_install,
)

__all__ = [
    "DARK",
    "DEFAULT",
    "LIGHT",
    "Format",
    "Formatter",
    "Level",
    "formatter_install",
    "StyleConfig",
    "StyleCompileError",
    "StyleError",
    "StyleExecuteError",
    "Theme",
    "ThemeError",
    "ThemeLevel",
    "ThemePalette",
    "apply_default_theme",
    "format",
    "format_with_reset",
    "must_apply_default_theme",
    "theme_install",
    "__version__",
]
