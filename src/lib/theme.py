"""
Default theme builder and palette loader.

A theme turns a plain host format string plus a six-level palette into
two cooperating formatters:
  - the line formatter, styling the first line of each record and
    layering an extra label style for error/fatal on ${level}
  - the trailing formatter, re-applying a continuation style after the
    first embedded newline of a multi-line record

Palettes are either built in (dark, light, default) or loaded from YAML:

    error:
      first: "{fg 202}"
      level: "{bold}{bg 52}"
    fatal:
      first: "{bold}{fg 197}{bg 17}"
"""

import re
import sys
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from loguru import logger

from ..models.level import Level
from ..models.style import StyleConfig
from ..models.theme import BUILTIN_PALETTES, ThemeLevel, ThemePalette
from .formatter import Formatter, format, format_with_reset
from .log import LOG
from .preprocessor import argument_quote
from .sink import theme_install
from .style import StyleError, compile


# Level label with optional arguments, plus surrounding whitespace
LEVEL_PLACEHOLDER_PATTERN = re.compile(r'\s*\$\{level[^}]*\}\s*')

PALETTE_FIELDS = ('first', 'trail', 'level')


class ThemeError(Exception):
    """Raised when palette loading or theme compilation fails"""
    pass


class DefaultOutput:
    """
    Writer that re-applies the trailing style on continuation lines

    Attributes:
        trailer: Formatter rendering the continuation style per level
        writer: Underlying text stream (default: stderr)
    """

    def __init__(self, trailer: Formatter, writer: Any = None) -> None:
        self.trailer = trailer
        self.writer = writer if writer is not None else sys.stderr

    def write(self, data: str) -> int:
        return self.writer.write(data)

    def write_with_level(self, data: str, level: Level) -> int:
        """
        Write a rendered record, splicing the trailing style after its
        first embedded newline

        Only the first newline is touched. A newline that merely
        terminates the record is not embedded, so single-line records are
        written unchanged.

        Args:
            data: Fully rendered record
            level: Level the record was rendered for

        Returns:
            Result of the underlying write
        """
        index = data.find("\n")
        if 0 <= index < len(data) - 1:
            data = data[:index + 1] + self.trailer.render(level, "") + data[index + 1:]
        return self.writer.write(data)


@dataclass
class Theme:
    """
    Compiled default theme

    Attributes:
        formatter: Line formatter
        output: Output wrapper holding the trailing formatter
    """
    formatter: Formatter
    output: DefaultOutput

    def install(self, sink_logger: Any = logger, level: Any = "TRACE", **kwargs: Any) -> int:
        """
        Add a loguru handler rendering records with this theme

        Returns:
            Loguru handler id, for logger.remove()
        """
        return theme_install(self, sink_logger, level, **kwargs)


def levels_apply(palette: ThemePalette, field: str) -> str:
    """
    Build the six on<level> directives for one palette field

    Example:
        levels_apply(DARK, 'first') →
        '{ontrace "{fg 243}"}{ondebug "{fg 250}"}...{onfatal "{bold}{fg 197}{bg 17}"}'
    """
    return "".join(
        f'{{on{level.lower} {argument_quote(getattr(palette.level_get(level), field))}}}'
        for level in Level
    )


def lineFormat_make(formatting: str, palette: ThemePalette) -> str:
    """
    Build the line formatter's source from a host format string

    Every ${level...} placeholder (with its surrounding whitespace) is
    wrapped so that error and fatal get their label style, after which
    the line style chosen by the prelude is restored.
    """
    level_styles = (
        f'{{onerror {argument_quote(palette.error.level)}}}'
        f'{{onfatal {argument_quote(palette.fatal.level)}}}'
    )

    body = LEVEL_PLACEHOLDER_PATTERN.sub(
        lambda match: level_styles + match.group(0) + '{reset}{restore}',
        formatting,
    )

    return levels_apply(palette, 'first') + '{store}' + body


def apply_default_theme(
    formatting: str,
    palette: ThemePalette,
    writer: Any = None,
    config: Optional[StyleConfig] = None,
    thread_safe: Optional[bool] = None,
) -> Theme:
    """
    Apply the default theme to a host format string

    Args:
        formatting: Host format string, e.g. "${time} ${level:[%s]} %s"
        palette: Per-level styles (DARK, LIGHT, DEFAULT or custom)
        writer: Stream the theme output writes to (default: stderr)
        config: Style configuration; defaults to application settings
        thread_safe: Lock restore state; defaults to COLORGFUL_THREAD_SAFE

    Returns:
        Theme ready to install as a loguru handler

    Raises:
        ThemeError: If either formatter fails to compile
    """
    LOG("Compiling theme line formatter...", level=2)
    try:
        formatter = format_with_reset(
            lineFormat_make(formatting, palette), config=config, thread_safe=thread_safe
        )
    except StyleError as e:
        raise ThemeError(f"Failed to compile line format: {e}") from e

    LOG("Compiling theme trailing formatter...", level=2)
    try:
        trailer = format(
            levels_apply(palette, 'trail'), config=config, thread_safe=thread_safe
        )
    except StyleError as e:
        raise ThemeError(f"Failed to compile trailing format: {e}") from e

    return Theme(formatter=formatter, output=DefaultOutput(trailer, writer))


def must_apply_default_theme(
    formatting: str,
    palette: ThemePalette,
    writer: Any = None,
    config: Optional[StyleConfig] = None,
    thread_safe: Optional[bool] = None,
) -> Theme:
    """
    Same as apply_default_theme(), but aborts the process on failure

    Raises:
        SystemExit: With status 1 if the theme cannot be compiled
    """
    try:
        return apply_default_theme(formatting, palette, writer, config, thread_safe)
    except ThemeError as e:
        logger.critical(f"Cannot apply default theme: {e}")
        raise SystemExit(1) from e


def palette_fromDict(data: Dict[str, Any]) -> ThemePalette:
    """
    Build a palette from a mapping of level name to field mapping

    Missing levels and fields default to empty fragments.

    Raises:
        ThemeError: On unknown level or field names, or non-string values
    """
    levels: Dict[str, ThemeLevel] = {}

    for name, fields in data.items():
        try:
            level = Level.from_name(str(name))
        except ValueError as e:
            raise ThemeError(f"Palette has unknown level {name!r}") from e

        if fields is None:
            fields = {}
        if not isinstance(fields, dict):
            raise ThemeError(f"Palette level {name!r} must be a mapping")

        unknown = set(fields) - set(PALETTE_FIELDS)
        if unknown:
            raise ThemeError(f"Palette level {name!r} has unknown fields: {sorted(unknown)}")

        for key, value in fields.items():
            if value is not None and not isinstance(value, str):
                raise ThemeError(f"Palette field {name}.{key} must be a string")

        levels[level.lower] = ThemeLevel(**{k: v or "" for k, v in fields.items()})

    return ThemePalette(**levels)


def palette_load(path: Union[str, Path]) -> ThemePalette:
    """
    Load a palette from a YAML file

    Args:
        path: Path to the palette file

    Returns:
        ThemePalette

    Raises:
        ThemeError: If the file is missing, unparsable or malformed
    """
    palette_path = Path(path)
    if not palette_path.exists():
        raise ThemeError(f"Palette file not found: {palette_path}")

    try:
        with open(palette_path, 'r') as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ThemeError(f"Failed to parse {palette_path}: {e}") from e
    except OSError as e:
        raise ThemeError(f"Failed to load {palette_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ThemeError(f"Palette file {palette_path} must contain a mapping")

    LOG(f"Loaded palette from {palette_path}", level=2)
    return palette_fromDict(data)


def palettes_listAvailable(palettes_dir: Optional[Union[str, Path]] = None) -> list[str]:
    """
    List all available palette names.

    Args:
        palettes_dir: Optional directory of <name>.yaml palette files

    Returns:
        Sorted built-in names plus names of palette files found
    """
    names = set(BUILTIN_PALETTES)

    if palettes_dir is not None:
        palettes_path = Path(palettes_dir)
        if palettes_path.is_dir():
            names.update(item.stem for item in palettes_path.glob('*.yaml'))

    return sorted(names)


def palette_get(name: str, palettes_dir: Optional[Union[str, Path]] = None) -> ThemePalette:
    """
    Get a palette by name: built-in first, then <palettes_dir>/<name>.yaml

    Raises:
        ThemeError: If no palette has that name
    """
    builtin = BUILTIN_PALETTES.get(name.lower())
    if builtin is not None:
        return builtin

    if palettes_dir is not None:
        candidate = Path(palettes_dir) / f"{name}.yaml"
        if candidate.exists():
            return palette_load(candidate)

    raise ThemeError(
        f"Palette '{name}' not found. Available: {', '.join(palettes_listAvailable(palettes_dir))}"
    )


def palette_validate(palette: ThemePalette) -> tuple[bool, str]:
    """
    Validate that every fragment of a palette compiles and executes.

    Args:
        palette: Palette to check

    Returns:
        Tuple of (is_valid, message)
    """
    for level in Level:
        styles = palette.level_get(level)
        for field in PALETTE_FIELDS:
            fragment = getattr(styles, field)
            try:
                compile(fragment, config=StyleConfig()).execute()
            except StyleError as e:
                return False, f"{level.lower}.{field}: {e}"

    return True, "Palette is valid"
