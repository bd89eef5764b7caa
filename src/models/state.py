"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern used by
the preview command and the pipeline() helper for composing stages.
"""

from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field, fields, replace
from functools import reduce


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the preview pipeline (state bus pattern).

    Each stage adds new fields as the pipeline progresses.

    Pipeline stages and their state additions:
        - Initial: formatString, theme, paletteFile, message, levels,
          noColors, showCompiled, verbosity
        - env_check: palette, levelList, envOK
        - theme_compile: compiledTheme
        - samples_render: renderedCount
        - results_report: (no additions, terminal stage)

    Attributes:
        formatString: Host format string to preview
        theme: Built-in palette name
        paletteFile: Optional YAML palette file (overrides theme)
        message: Sample message written at every level
        levels: Comma-separated level names to render
        noColors: Compile without escape sequences
        showCompiled: Print the compiled line template
        verbosity: Logging verbosity level (0-3)
        output: Stream samples are written to
        envOK: Environment validation passed
        palette: Resolved ThemePalette
        levelList: Resolved Level values
        compiledTheme: Theme built from palette and format
        renderedCount: Number of sample lines written
    """

    # CLI arguments
    formatString: str = field(default="${time} ${level:[%s]:right} %s")
    theme: str = field(default="default")
    paletteFile: Optional[str] = field(default=None)
    message: str = field(default="the quick brown fox\njumps over the lazy dog")
    levels: str = field(default="trace,debug,info,warning,error,fatal")
    noColors: bool = field(default=False)
    showCompiled: bool = field(default=False)
    verbosity: int = field(default=1)
    output: Any = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    palette: Optional[Any] = field(default=None)  # ThemePalette at runtime
    levelList: List[Any] = field(default_factory=list)  # List[Level] at runtime
    compiledTheme: Optional[Any] = field(default=None)  # Theme at runtime
    renderedCount: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, output: Any = None
    ) -> "ProgramState":
        """
        Build the initial preview state from parsed CLI options.

        Namespace entries without a matching field (e.g. argparse's
        version action) are dropped.

        Args:
            options: Parsed CLI arguments
            output: Stream sample lines are written to
        """
        known = {f.name for f in fields(cls)}
        options_known = {name: value for name, value in vars(options).items() if name in known}
        return cls(**options_known, output=output)

    def copy(self: PS) -> PS:
        """Shallow copy, so each stage hands on a fresh state"""
        return replace(self)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Run stages in order, feeding each the state returned by the one before.

    Example:
        pipeline(state, env_check, theme_compile, samples_render, results_report)
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
