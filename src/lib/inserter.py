"""
Compile-time extension functions for level-conditional styling

The Inserter resolves onlevel/store/restore directives while the outer
format program executes. Each onlevel directive is compiled on the spot,
its escape sequence and the style active before it are recorded as an
OnLevelToken, and a host placeholder referring to that token is left in
the output for the Restorer to resolve at render time.
"""

from functools import partial
from typing import Any, Callable, Dict, List, Optional

from ..models.level import Level
from ..models.style import StyleConfig
from ..models.tokens import OnLevelToken
from .log import LOG
from .style import Style, StyleCompileError, StyleExecuteError, compile, compile_and_execute


# Host placeholder names resolved by the Restorer
PLACEHOLDER_ONLEVEL = "onlevel"
PLACEHOLDER_STORE = "store"
PLACEHOLDER_RESTORE = "restore"


class Inserter:
    """
    Extension functions bound to one format compilation

    Attributes:
        config: Style configuration shared with the outer program
        style: The outer program; must be set before it executes
        tokens: OnLevelTokens recorded so far, indexed by the number
                carried in their ${onlevel:N} placeholder
    """

    def __init__(self, config: StyleConfig) -> None:
        self.config = config
        self.style: Optional[Style] = None
        self.tokens: List[OnLevelToken] = []

    def extensions_make(self) -> Dict[str, Callable[..., Any]]:
        """
        Build the extension table for the style compiler

        Returns:
            Mapping of directive name to bound function, including the
            on<level> alias for each of the six levels
        """
        extensions: Dict[str, Callable[..., Any]] = {
            "field": self.field_insert,
            "onlevel": self.onLevel_insert,
            "store": self.store_insert,
            "restore": self.restore_insert,
        }

        for level in Level:
            extensions[f"on{level.lower}"] = partial(self.onLevel_insert, level.lower)

        return extensions

    def field_insert(self, name: str) -> str:
        """Emit a host placeholder: field "level" → ${level}"""
        return f"${{{name}}}"

    def onLevel_insert(self, level: str, fragment: str) -> str:
        """
        Pre-compute the styling of one level-conditional directive

        Args:
            level: Level name the fragment applies to
            fragment: Directive text, e.g. "{bold}{bg 52}"

        Returns:
            ${onlevel:N} placeholder, or a literal #{COMPILE ERROR: ...} /
            #{EXECUTE ERROR: ...} diagnostic if the fragment is broken
        """
        if self.style is None:
            raise RuntimeError("onlevel directive executed outside of a format compilation")

        try:
            style = compile(fragment, config=self.config)
        except StyleCompileError as e:
            LOG(f"onlevel {level!r}: cannot compile {fragment!r}: {e}", level=1, severity="WARNING")
            return f"#{{COMPILE ERROR: {e}}}"

        outer = self.style.state_get()

        previous = ""
        if self.config.colors:
            previous = compile_and_execute(outer.directives_render(), config=self.config)

        style.state_set(outer)

        try:
            sequence = style.execute()
        except StyleExecuteError as e:
            LOG(f"onlevel {level!r}: cannot execute {fragment!r}: {e}", level=1, severity="WARNING")
            return f"#{{EXECUTE ERROR: {e}}}"

        token = OnLevelToken(
            target_level=level.lower(),
            sequence=sequence,
            previous=previous,
        )
        self.tokens.append(token)
        LOG(f"Token {len(self.tokens) - 1}: {token.target_level}", level=3)

        return self.field_insert(f"{PLACEHOLDER_ONLEVEL}:{len(self.tokens) - 1}")

    def store_insert(self) -> str:
        """Emit the ${store} placeholder"""
        return self.field_insert(PLACEHOLDER_STORE)

    def restore_insert(self) -> str:
        """Emit the ${restore} placeholder"""
        return self.field_insert(PLACEHOLDER_RESTORE)
