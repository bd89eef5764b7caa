"""
Log level model

Defines the fixed six-value severity scale that level-conditional
directives match against and that the host logging façade renders.
"""

from enum import IntEnum
from typing import Union


class Level(IntEnum):
    """
    Severity of a log line, ordered from least to most severe.

    Values follow the numeric scale used by the standard logging module
    and loguru, so foreign records can be mapped with from_severity().
    """
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    FATAL = 50

    @property
    def label(self) -> str:
        """Upper-case name rendered by ${level}, e.g. 'ERROR'"""
        return self.name

    @property
    def lower(self) -> str:
        """Lower-case name used by onlevel directives, e.g. 'error'"""
        return self.name.lower()

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """
        Look up a level by name, case-insensitively.

        Args:
            name: Level name such as "error", "Warning" or "FATAL"

        Returns:
            Matching Level

        Raises:
            ValueError: If name is not one of the six levels
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown level: {name!r}") from None

    @classmethod
    def from_severity(cls, severity: int) -> "Level":
        """
        Map a numeric severity onto the six levels.

        Anything below DEBUG is TRACE, anything at or above FATAL is FATAL,
        values in between round down to the nearest level.

        Example:
            >>> Level.from_severity(25)   # loguru SUCCESS
            <Level.INFO: 20>
        """
        for level in reversed(cls):
            if severity >= level.value:
                return level
        return cls.TRACE

    @classmethod
    def coerce(cls, level: Union["Level", str, int]) -> "Level":
        """Accept a Level, a level name or a numeric severity"""
        if isinstance(level, cls):
            return level
        if isinstance(level, str):
            return cls.from_name(level)
        return cls.from_severity(int(level))
