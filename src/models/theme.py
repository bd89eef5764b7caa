"""
Theme palette models and built-in palettes

A palette maps each of the six levels to three style fragments: one for
the first line of a record, one re-applied after embedded newlines, and
one layered on the level label itself.
"""

from dataclasses import dataclass, field
from typing import Dict

from .level import Level


@dataclass(frozen=True)
class ThemeLevel:
    """
    How to highlight one level

    Attributes:
        first: Style for the first line of a record
        trail: Style for continuation lines (after an embedded newline)
        level: Extra style for the level label (used for error and fatal)

    An empty fragment is valid: the directive still fires but adds no
    styling, leaving whatever style was already active.
    """
    first: str = ""
    trail: str = ""
    level: str = ""


@dataclass(frozen=True)
class ThemePalette:
    """Per-level styles for the default theme"""
    trace: ThemeLevel = field(default_factory=ThemeLevel)
    debug: ThemeLevel = field(default_factory=ThemeLevel)
    info: ThemeLevel = field(default_factory=ThemeLevel)
    warning: ThemeLevel = field(default_factory=ThemeLevel)
    error: ThemeLevel = field(default_factory=ThemeLevel)
    fatal: ThemeLevel = field(default_factory=ThemeLevel)

    def level_get(self, level: Level) -> ThemeLevel:
        """Return the styles configured for given level"""
        return getattr(self, level.lower)


# Suitable for dark terminal backgrounds
DARK = ThemePalette(
    trace=ThemeLevel(first="{fg 243}"),
    debug=ThemeLevel(first="{fg 250}"),
    info=ThemeLevel(first="{fg 110}"),
    warning=ThemeLevel(first="{fg 178}"),
    error=ThemeLevel(first="{fg 202}", level="{bold}{bg 52}"),
    fatal=ThemeLevel(first="{bold}{fg 197}{bg 17}"),
)

# Suitable for light terminal backgrounds
LIGHT = ThemePalette(
    trace=ThemeLevel(first="{fg 250}"),
    debug=ThemeLevel(first="{fg 243}"),
    info=ThemeLevel(first="{fg 26}"),
    warning=ThemeLevel(first="{fg 167}{bg 230}"),
    error=ThemeLevel(first="{bold}{fg 161}", level="{reverse}{bold}{bg 231}"),
    fatal=ThemeLevel(first="{bold}{fg 231}{bg 124}"),
)

# Suitable for both light and dark backgrounds
DEFAULT = ThemePalette(
    trace=ThemeLevel(first="{nofg}"),
    debug=ThemeLevel(first="{fg 31}"),
    info=ThemeLevel(first="{fg 33}"),
    warning=ThemeLevel(first="{bold}{fg 172}", trail="{nobold}"),
    error=ThemeLevel(
        first="{bold}{fg 9}",
        trail="{reset}{fg 9}",
        level="{bold}{fg 231}{bg 196}",
    ),
    fatal=ThemeLevel(
        first="{bold}{fg 231}{bg 124}",
        trail="{reset}{bold}{fg 231}",
        level="{bold}{fg 231}{bg 196}",
    ),
)

BUILTIN_PALETTES: Dict[str, ThemePalette] = {
    "dark": DARK,
    "light": LIGHT,
    "default": DEFAULT,
}
