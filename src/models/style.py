"""
Style compiler data models

Running style state, per-compilation configuration and the parsed node
types produced from a directive program.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Union


@dataclass
class StyleState:
    """
    Accumulated terminal style at some point of a directive program

    Attributes:
        foreground: 256-color foreground index, None when unset
        background: 256-color background index, None when unset
        bold: Bold attribute active
        reversed: Reverse-video attribute active

    Example:
        After "{fg 1}{bold}" the state is
        StyleState(foreground=1, background=None, bold=True, reversed=False)
    """
    foreground: Optional[int] = None
    background: Optional[int] = None
    bold: bool = False
    reversed: bool = False

    def directives_render(self) -> str:
        """
        Render this state back into directive text.

        Every attribute is spelled out (including the "off" ones), in the
        fixed order fg, bg, bold, reverse, so that executing the result
        from any other state lands exactly on this one.

        Returns:
            Directive string, e.g. "{fg 1}{nobg}{nobold}{noreverse}"
        """
        parts = [
            "{nofg}" if self.foreground is None else f"{{fg {self.foreground}}}",
            "{nobg}" if self.background is None else f"{{bg {self.background}}}",
            "{bold}" if self.bold else "{nobold}",
            "{reverse}" if self.reversed else "{noreverse}",
        ]
        return "".join(parts)

    def copy(self) -> "StyleState":
        return replace(self)


@dataclass(frozen=True)
class StyleConfig:
    """
    Configuration passed into each compile call

    Attributes:
        colors: Emit escape sequences. When False, directives still track
                state but produce empty output.
    """
    colors: bool = True

    @classmethod
    def from_settings(cls) -> "StyleConfig":
        """Build configuration from application settings (COLORGFUL_NO_COLORS)"""
        from ..config import appsettings

        return cls(colors=not appsettings.no_colors)


@dataclass
class TextNode:
    """Literal text between directives"""
    text: str


@dataclass
class CallNode:
    """
    A single {name arg ...} directive

    Attributes:
        name: Function name
        args: Parsed arguments (str for quoted/bare words, int for numbers)
        position: Character offset of the opening brace in the source
    """
    name: str
    args: List[Union[str, int]] = field(default_factory=list)
    position: int = 0


Node = Union[TextNode, CallNode]
