"""
Level-aware formatters compiled from styled format strings

format() runs the whole compile pipeline:

1. Rewrite ${name} shorthands into {field "name"} directives
2. Compile with the Inserter's extension functions registered
3. Execute once: plain directives become escape sequences, level
   conditionals become ${onlevel:N} placeholders backed by tokens
4. Wrap the result in a host Format whose onlevel/store/restore
   placeholders are resolved by a Restorer at render time

Example:
    >>> formatter = format('{onerror "{bg 1}"}${level} %s')
    >>> formatter.render(Level.INFO)
    'INFO %s'
    >>> formatter.render(Level.ERROR)
    '\\x1b[48;5;1mERROR %s'
"""

from typing import Optional, Tuple, Union

from ..config import appsettings
from ..models.level import Level
from ..models.style import StyleConfig
from .host import Format
from .inserter import Inserter, PLACEHOLDER_ONLEVEL, PLACEHOLDER_RESTORE, PLACEHOLDER_STORE
from .log import LOG
from .preprocessor import placeholders_rewrite
from .restorer import Restorer
from .style import STYLE_RESET, compile


class Formatter:
    """
    A compiled template plus the Restorer resolving its placeholders

    Attributes:
        format: Host format holding the compiled template
        restorer: Per-formatter restore state
    """

    def __init__(self, template: str, restorer: Restorer) -> None:
        self.restorer = restorer
        self.format = Format(template)
        self.format.placeholder_set(PLACEHOLDER_ONLEVEL, restorer.onLevel_handle)
        self.format.placeholder_set(PLACEHOLDER_STORE, restorer.store_handle)
        self.format.placeholder_set(PLACEHOLDER_RESTORE, restorer.restore_handle)

    @property
    def template(self) -> str:
        """The compiled, directive-free template"""
        return self.format.template

    def render(self, level: Union[Level, str, int], prefix: str = "") -> str:
        """
        Render the header for one log line

        Clears any snapshot stored by a previous line first, so store and
        restore never leak between lines.

        Args:
            level: Level of the line
            prefix: Text substituted for ${prefix}

        Returns:
            Rendered header with escape sequences for this level
        """
        self.restorer.reset()
        return self.format.render(Level.coerce(level), prefix)

    def render_parts(self, level: Union[Level, str, int], prefix: str = "") -> Tuple[str, str]:
        """Same as render(), split around the template's own %s slot"""
        self.restorer.reset()
        return self.format.render_parts(Level.coerce(level), prefix)


def format(
    formatting: str,
    config: Optional[StyleConfig] = None,
    thread_safe: Optional[bool] = None,
) -> Formatter:
    """
    Compile a styled format string into a Formatter

    Available directives:

      * {bg N}, {fg N}, {nobg}, {nofg}, {bold}, {nobold}, {reverse},
        {noreverse}, {reset}, {from TEXT N}, {to N TEXT}
      * {onlevel "LEVEL" "STYLE"} - apply STYLE only on lines of LEVEL
      * {ontrace "STYLE"} ... {onfatal "STYLE"} - aliases for onlevel
      * {store} - remember the style set by the last matching onlevel
      * {restore} - return to the stored style, or to the style active
        before the last matching onlevel
      * ${name} - host field (level, time, prefix, ...)

    Args:
        formatting: Styled format string; %s marks the message
        config: Style configuration; defaults to application settings
        thread_safe: Lock restore state for concurrent renders;
                     defaults to COLORGFUL_THREAD_SAFE

    Returns:
        Formatter

    Raises:
        StyleCompileError: If the format string cannot be parsed
        StyleExecuteError: If a directive outside onlevel fragments fails
    """
    if config is None:
        config = StyleConfig.from_settings()
    if thread_safe is None:
        thread_safe = appsettings.thread_safe

    formatting = placeholders_rewrite(formatting)
    LOG(f"Compiling format: {formatting!r}", level=2)

    inserter = Inserter(config)
    style = compile(formatting, inserter.extensions_make(), config)
    inserter.style = style

    template = style.execute()
    LOG(f"Compiled template with {len(inserter.tokens)} level tokens", level=2)

    return Formatter(template, Restorer(inserter.tokens, thread_safe=thread_safe))


def format_with_reset(
    formatting: str,
    config: Optional[StyleConfig] = None,
    thread_safe: Optional[bool] = None,
) -> Formatter:
    """Same as format(), with {reset} appended to the format string"""
    return format(formatting + STYLE_RESET, config=config, thread_safe=thread_safe)
