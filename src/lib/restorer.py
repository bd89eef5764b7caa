"""
Render-time resolution of level-conditional placeholders

The Restorer owns the previous/current/stored triple of one compiled
formatter and resolves the ${onlevel:N}, ${store} and ${restore}
placeholders for the level being rendered.

Concurrency is an explicit choice: with thread_safe=True every operation
holds a per-instance lock; with thread_safe=False the formatter must only
ever be rendered from one thread at a time.
"""

import threading
from contextlib import nullcontext
from typing import ContextManager, List, Optional

from ..models.level import Level
from ..models.tokens import OnLevelToken, RestorerState


class Restorer:
    """
    Placeholder handlers sharing one RestorerState

    Attributes:
        tokens: OnLevelTokens recorded at compile time
        state: The previous/current/stored triple
        thread_safe: Whether operations are serialized with a lock
    """

    def __init__(self, tokens: List[OnLevelToken], thread_safe: bool = True) -> None:
        self.tokens = tokens
        self.state = RestorerState()
        self.thread_safe = thread_safe
        self.lock: ContextManager = threading.Lock() if thread_safe else nullcontext()

    def token_get(self, value: str) -> Optional[OnLevelToken]:
        """
        Look up the token an ${onlevel:N} placeholder refers to

        Returns None for a value that is not an index of this formatter's
        table, e.g. a literal ${onlevel} written in the format string.
        """
        if not value.isdigit():
            return None
        index = int(value)
        if index >= len(self.tokens):
            return None
        return self.tokens[index]

    def onLevel_handle(self, level: Level, value: str) -> str:
        """
        Resolve ${onlevel:N} for the level being rendered

        Args:
            level: Level of the line being rendered
            value: Token index

        Returns:
            The token's escape sequence if it targets this level (and the
            state now remembers it), otherwise an empty string
        """
        token = self.token_get(value)
        if token is None or not token.matches(level):
            return ""

        with self.lock:
            self.state.previous = token.previous
            self.state.current = token.sequence

        return token.sequence

    def store_handle(self, level: Level, value: str) -> str:
        """Resolve ${store}: snapshot previous + current"""
        with self.lock:
            self.state.stored = self.state.previous + self.state.current
        return ""

    def restore_handle(self, level: Level, value: str) -> str:
        """Resolve ${restore}: the stored snapshot, else the previous style"""
        with self.lock:
            if self.state.stored:
                return self.state.stored
            return self.state.previous

    def reset(self) -> None:
        """Forget the stored snapshot; called once per rendered line"""
        with self.lock:
            self.state.stored = ""
