#!/usr/bin/env python3
"""
colorgful - Level-aware styling for log lines

Preview tool: compiles a host format string with a theme palette and
writes one sample record per level, so palettes and format strings can
be tried out in the terminal they will be used in.

Usage:
    colorgful --format '${time} ${level:[%s]:right} %s' --theme dark

Examples:
    # Built-in palette
    colorgful --theme light

    # Custom palette file, only two levels, show the compiled template
    colorgful --palette mypalette.yaml --levels info,error --showCompiled

    # Without escape sequences, verbose diagnostics
    colorgful --noColors -vv

    # Directive reference
    colorgful --listDirectives
"""

import sys
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import Any, List, Optional

from loguru import logger

from . import __version__
from .config import appsettings
from .lib import Level, StyleConfig, LOG, application_only, verbosity_connectToLogger, logger_configure
from .lib.directives import DirectiveRegistry
from .lib.sink import level_loguruName
from .lib.theme import ThemeError, apply_default_theme, palette_get, palette_load, palette_validate
from .models import DirectiveCategory, ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="colorgful - preview level-aware log styling",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--format",
    dest="formatString",
    default="${time} ${level:[%s]:right} %s",
    type=str,
    help="Host format string; %%s marks the message",
)

parser.add_argument(
    "--theme",
    default=appsettings.theme,
    type=str,
    help="Built-in palette name (dark, light, default)",
)

parser.add_argument(
    "--palette",
    dest="paletteFile",
    default=None,
    type=str,
    help="YAML palette file (overrides --theme)",
)

parser.add_argument(
    "--message",
    default="the quick brown fox\njumps over the lazy dog",
    type=str,
    help="Sample message written at each level",
)

parser.add_argument(
    "--levels",
    default="trace,debug,info,warning,error,fatal",
    type=str,
    help="Comma-separated levels to render",
)

parser.add_argument(
    "--noColors",
    action="store_true",
    default=appsettings.no_colors,
    help="Compile without emitting escape sequences",
)

parser.add_argument(
    "--showCompiled",
    action="store_true",
    help="Print the compiled line template before the samples",
)

parser.add_argument(
    "--listDirectives",
    action="store_true",
    help="List the built-in style directives with examples and exit",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def directives_show(output: Any) -> None:
    """
    Print the built-in directives by category, with usage examples.

    Args:
        output: Stream to print to
    """
    registry = DirectiveRegistry()
    for category in DirectiveCategory:
        specs = registry.directives_listByCategory(category)
        if not specs:
            continue
        print(f"{category.value}:", file=output)
        for spec in specs:
            print(f"  {spec.name:<10} {spec.description}", file=output)
            for example in spec.examples:
                print(f"  {'':<10}   {example}", file=output)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Resolve the palette and the list of levels to render.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - palette: ThemePalette from --palette or --theme
            - levelList: Levels parsed from --levels
            - envOK: True if both resolved

    Exits:
        1 if the palette cannot be found or a level name is unknown
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    try:
        if state.paletteFile:
            state.palette = palette_load(state.paletteFile)
        else:
            state.palette = palette_get(state.theme)
    except ThemeError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    valid, message = palette_validate(state.palette)
    if not valid:
        print(f"Warning: {message}", file=sys.stderr)

    try:
        state.levelList = [Level.from_name(name) for name in state.levels.split(",") if name.strip()]
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Levels: {', '.join(level.lower for level in state.levelList)}", level=2)

    state.envOK = True
    return state


def theme_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the format string with the resolved palette.

    Returns:
        ProgramState with added field:
            - compiledTheme: Theme writing to the state's output

    Exits:
        1 if the theme fails to compile
    """
    state = inputstate.copy()

    LOG("Compiling theme...", level=1)

    try:
        state.compiledTheme = apply_default_theme(
            state.formatString,
            state.palette,
            writer=state.output,
            config=StyleConfig(colors=not state.noColors),
        )
    except ThemeError as e:
        print(f"Compilation error: {e}", file=sys.stderr)
        sys.exit(1)

    if state.showCompiled:
        print(repr(state.compiledTheme.formatter.template), file=state.output)

    return state


def samples_render(inputstate: ProgramState) -> ProgramState:
    """
    Write the sample message once per requested level, logging it through
    loguru with the compiled theme installed as the only handler for
    application records.

    Returns:
        ProgramState with added field:
            - renderedCount: Number of lines written
    """
    state = inputstate.copy()

    handler_id = state.compiledTheme.install(logger, filter=application_only)
    try:
        for level in state.levelList:
            logger.log(level_loguruName(level), state.message)
            state.renderedCount += 1
    finally:
        logger.remove(handler_id)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Report how many samples were written (terminal pipeline stage).

    Exits:
        1 if nothing was rendered
    """
    state: ProgramState = inputstate.copy()
    if not state.renderedCount:
        print("Error: No levels rendered", file=sys.stderr)
        sys.exit(1)

    LOG(f"Rendered {state.renderedCount} sample lines", level=2)
    return state


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point - preview a format string under a theme.

    Orchestrates the pipeline:
        1. env_check: Resolve palette and levels
        2. theme_compile: Compile line and trailing formatters
        3. samples_render: Write one record per level
        4. results_report: Summarize

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Process exit status
    """
    options: Namespace = parser.parse_args(argv)

    if options.listDirectives:
        directives_show(sys.stdout)
        return 0

    state: ProgramState = ProgramState.state_createFromNamespace(options, output=sys.stdout)

    # Diagnostics to stderr; samples only ever reach the theme handler
    diagnostics_id = logger_configure(sys.stderr)
    verbosity_connectToLogger(state.verbosity)

    try:
        pipeline(state, env_check, theme_compile, samples_render, results_report)
    finally:
        logger.remove(diagnostics_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
