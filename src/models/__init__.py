"""
Models package for colorgful

Contains data structures and type definitions for the style compiler,
the level-conditional formatter and the preview pipeline.
"""

from .state import ProgramState, pipeline
from .level import Level
from .style import StyleState, StyleConfig, TextNode, CallNode
from .directives import DirectiveSpec, DirectiveCategory
from .tokens import OnLevelToken, RestorerState
from .theme import ThemeLevel, ThemePalette, DARK, LIGHT, DEFAULT, BUILTIN_PALETTES

__all__ = [
    "ProgramState",
    "pipeline",
    "Level",
    "StyleState",
    "StyleConfig",
    "TextNode",
    "CallNode",
    "DirectiveSpec",
    "DirectiveCategory",
    "OnLevelToken",
    "RestorerState",
    "ThemeLevel",
    "ThemePalette",
    "DARK",
    "LIGHT",
    "DEFAULT",
    "BUILTIN_PALETTES",
]
