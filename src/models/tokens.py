"""
Level-conditional token and restore state models

OnLevelToken is produced once per onlevel directive at compile time;
RestorerState is the per-formatter triple consulted at render time.
"""

from dataclasses import dataclass

from .level import Level


@dataclass(frozen=True)
class OnLevelToken:
    """
    Pre-computed escape sequences for one onlevel directive

    Attributes:
        target_level: Lower-case level name the directive applies to
        sequence: Escape sequence applied when the render level matches
        previous: Escape sequence of the style active just before the
                  directive, captured at compile time (empty when colors
                  are disabled)

    Example:
        "{fg 1}{onerror \"{bg 199}\"}" compiles to
        OnLevelToken(target_level="error",
                     sequence="\\x1b[48;5;199m",
                     previous="\\x1b[38;5;1m\\x1b[49m\\x1b[22m\\x1b[27m")
    """
    target_level: str
    sequence: str
    previous: str

    def matches(self, level: Level) -> bool:
        return self.target_level.lower() == level.lower


@dataclass
class RestorerState:
    """
    Mutable restore state shared by all renders of one formatter

    Attributes:
        previous: Sequence to restore to (from the last matching token)
        current: Sequence applied by the last matching token
        stored: Snapshot of previous + current taken by {store}; cleared
                at the start of every render
    """
    previous: str = ""
    current: str = ""
    stored: str = ""
