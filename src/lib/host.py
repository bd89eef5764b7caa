"""
Host field substitution: level-aware format templates

Format renders templates containing ${name} / ${name:value} placeholders
for a given level. Placeholders are resolved by handlers registered per
name; level, time and prefix are built in. Writing the rendered lines is
left to loguru (see sink.py).

Example:
    >>> Format("${level:[%s]} %s").render(Level.ERROR)
    '[ERROR] %s'
"""

import re
from datetime import datetime
from typing import Callable, Dict, List, Protocol, Tuple, Union

from ..config import appsettings
from ..models.level import Level


# ${name} or ${name:value}
FIELD_PATTERN = re.compile(r'\$\{([^}]*)\}')

# Width of the longest level label (WARNING)
LEVEL_WIDTH = max(len(level.label) for level in Level)

# Slot the message is written into
MESSAGE_SLOT = "%s"

PlaceholderHandler = Callable[[Level, str], str]


class Formatter(Protocol):
    """Anything that can render a header for a level"""

    def render(self, level: Level, prefix: str = "") -> str:
        ...

    def render_parts(self, level: Level, prefix: str = "") -> Tuple[str, str]:
        ...


def level_render(level: Level, value: str) -> str:
    """
    Render the level label

    The value holds optional colon-separated arguments: a printf-style
    pattern with one %s, then "left" or "right" to pad the label to the
    width of the longest one.

    Example:
        ${level}               → 'ERROR'
        ${level:[%s]}          → '[ERROR]'
        ${level:%s:right}      → '  ERROR'
    """
    pattern, _, align = value.partition(':')
    label = level.label

    if align == 'left':
        label = label.ljust(LEVEL_WIDTH)
    elif align == 'right':
        label = label.rjust(LEVEL_WIDTH)

    if not pattern:
        return label
    return pattern.replace('%s', label, 1)


def time_render(level: Level, value: str) -> str:
    """Render the current local time with a strftime() format"""
    return datetime.now().strftime(value or appsettings.time_format)


class Format:
    """
    A pre-split template with named placeholders

    The template is split once at construction; rendering only walks the
    segments. Unknown placeholders are rendered verbatim.
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self.segments: List[Union[str, Tuple[str, str, str]]] = self.segments_split(template)
        self.placeholders: Dict[str, PlaceholderHandler] = {
            'level': level_render,
            'time': time_render,
        }

    @staticmethod
    def segments_split(template: str) -> List[Union[str, Tuple[str, str, str]]]:
        """
        Split template into literal strings and (name, value, raw) triples

        Example:
            'a ${level:[%s]} b' → ['a ', ('level', '[%s]', '${level:[%s]}'), ' b']
        """
        segments: List[Union[str, Tuple[str, str, str]]] = []
        pos = 0

        for match in FIELD_PATTERN.finditer(template):
            if match.start() > pos:
                segments.append(template[pos:match.start()])
            name, _, value = match.group(1).partition(':')
            segments.append((name, value, match.group(0)))
            pos = match.end()

        if pos < len(template):
            segments.append(template[pos:])

        return segments

    def placeholder_set(self, name: str, handler: PlaceholderHandler) -> None:
        """Register handler resolving ${name} / ${name:value}"""
        self.placeholders[name] = handler

    def segment_render(self, segment: Tuple[str, str, str], level: Level, prefix: str) -> str:
        name, value, raw = segment
        if name == 'prefix':
            return prefix

        handler = self.placeholders.get(name)
        return raw if handler is None else handler(level, value)

    def render_parts(self, level: Level, prefix: str = "") -> Tuple[str, str]:
        """
        Render the template split around its message slot

        Only a %s written in the template itself is the slot; a %s coming
        out of a rendered field (a prefix of "50%s", a ${level:[%s]}
        pattern) is plain text.

        Args:
            level: Level of the line
            prefix: Text substituted for ${prefix}

        Returns:
            (head, tail): text before and after the slot; tail is empty
            when the template has no slot, the message then goes last
        """
        head: List[str] = []
        tail: List[str] = []
        parts = head

        for segment in self.segments:
            if not isinstance(segment, str):
                parts.append(self.segment_render(segment, level, prefix))
            elif parts is head and MESSAGE_SLOT in segment:
                before, _, after = segment.partition(MESSAGE_SLOT)
                head.append(before)
                tail.append(after)
                parts = tail
            else:
                parts.append(segment)

        return "".join(head), "".join(tail)

    def render(self, level: Level, prefix: str = "") -> str:
        """
        Render the template for given level

        Returns:
            Rendered header, still containing the %s message slot
        """
        return "".join(
            segment if isinstance(segment, str) else self.segment_render(segment, level, prefix)
            for segment in self.segments
        )
