"""
Directive implementations for colorgful

Each built-in directive updates the running StyleState of a program and
returns the escape sequence realizing that change. Uses DirectiveSpec for
metadata and argument validation.
"""

from typing import Any, Callable, Dict, Mapping, Optional

from ..models.directives import DirectiveSpec, DirectiveCategory
from ..models.style import StyleState


# SGR parameters
SGR_RESET = "0"
SGR_BOLD = "1"
SGR_NOBOLD = "22"
SGR_REVERSE = "7"
SGR_NOREVERSE = "27"
SGR_NOFG = "39"
SGR_NOBG = "49"


def fg_code(color: Optional[int]) -> str:
    """SGR parameter selecting given foreground (None means default)"""
    return SGR_NOFG if color is None else f"38;5;{color}"


def bg_code(color: Optional[int]) -> str:
    """SGR parameter selecting given background (None means default)"""
    return SGR_NOBG if color is None else f"48;5;{color}"


class DirectiveRegistry:
    """
    Registry of directive specifications and handlers

    Maps directive names to DirectiveSpec objects containing metadata
    and execution handlers. Handlers receive the executing Style first,
    followed by the directive's arguments.
    """

    def __init__(self) -> None:
        """Initialize the directive registry and register all built-in directives"""
        self.specs: Dict[str, DirectiveSpec] = {}
        self.colorDirectives_register()
        self.attributeDirectives_register()
        self.transitionDirectives_register()
        self.resetDirectives_register()

    def register(self, spec: DirectiveSpec) -> None:
        """Register a directive specification"""
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[DirectiveSpec]:
        """
        Get directive specification by name

        Args:
            name: Directive name to look up

        Returns:
            DirectiveSpec or None if not found
        """
        return self.specs.get(name)

    def directives_listByCategory(self, category: DirectiveCategory) -> list[DirectiveSpec]:
        """Get all directives in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def extensions_register(self, extensions: Mapping[str, Callable[..., Any]]) -> None:
        """
        Register caller-supplied functions as directives

        Extensions are called with the directive's arguments only (not the
        executing style) and their return value is inserted verbatim.
        Arguments are not type-checked; a wrong call surfaces as an
        execution error.

        Args:
            extensions: Mapping of directive name to callable
        """

        def make_extension(function: Callable[..., Any]) -> Callable[..., str]:
            """Adapt extension signature to the handler signature"""
            def handler(style: Any, *args: Any) -> str:
                return str(function(*args))
            return handler

        for name, function in extensions.items():
            self.register(DirectiveSpec(
                name=name,
                category=DirectiveCategory.EXTENSION,
                description=(function.__doc__ or "").strip().split("\n")[0],
                handler=make_extension(function),
                args=None,
            ))

    def colorDirectives_register(self) -> None:
        """Register foreground/background color directives"""

        def fg_handler(style: Any, color: int) -> str:
            """Handle {fg N} - set 256-color foreground"""
            style.color_check(color)
            style.state.foreground = color
            return style.sequence_make(fg_code(color))

        def bg_handler(style: Any, color: int) -> str:
            """Handle {bg N} - set 256-color background"""
            style.color_check(color)
            style.state.background = color
            return style.sequence_make(bg_code(color))

        def nofg_handler(style: Any) -> str:
            """Handle {nofg} - back to default foreground"""
            style.state.foreground = None
            return style.sequence_make(SGR_NOFG)

        def nobg_handler(style: Any) -> str:
            """Handle {nobg} - back to default background"""
            style.state.background = None
            return style.sequence_make(SGR_NOBG)

        color_specs = [
            ('fg', fg_handler, (int,), 'Set foreground color (0-255)', ['{fg 202}']),
            ('bg', bg_handler, (int,), 'Set background color (0-255)', ['{bg 52}']),
            ('nofg', nofg_handler, (), 'Reset foreground to terminal default', ['{nofg}']),
            ('nobg', nobg_handler, (), 'Reset background to terminal default', ['{nobg}']),
        ]

        for name, handler, args, desc, examples in color_specs:
            self.register(DirectiveSpec(
                name=name,
                category=DirectiveCategory.COLOR,
                description=desc,
                handler=handler,
                args=args,
                examples=examples
            ))

    def attributeDirectives_register(self) -> None:
        """Register bold/reverse attribute directives"""

        def make_attribute(attribute: str, value: bool, code: str) -> Callable[[Any], str]:
            """Factory for attribute toggles"""
            def handler(style: Any) -> str:
                """Set attribute on the running state"""
                setattr(style.state, attribute, value)
                return style.sequence_make(code)
            return handler

        attribute_specs = [
            ('bold', 'bold', True, SGR_BOLD, 'Bold text'),
            ('nobold', 'bold', False, SGR_NOBOLD, 'Normal intensity'),
            ('reverse', 'reversed', True, SGR_REVERSE, 'Swap foreground and background'),
            ('noreverse', 'reversed', False, SGR_NOREVERSE, 'Cancel reverse video'),
        ]

        for name, attribute, value, code, desc in attribute_specs:
            self.register(DirectiveSpec(
                name=name,
                category=DirectiveCategory.ATTRIBUTE,
                description=desc,
                handler=make_attribute(attribute, value, code),
                examples=[f'{{{name}}}']
            ))

    def transitionDirectives_register(self) -> None:
        """Register powerline-style background transitions"""

        def from_handler(style: Any, text: str, color: int) -> str:
            """
            Handle {from TEXT N} - leave the current background

            TEXT (typically a separator glyph) is drawn on the new
            background N using the old background as its foreground.
            """
            style.color_check(color)
            state: StyleState = style.state
            codes = [
                style.sequence_make(fg_code(state.background)),
                style.sequence_make(bg_code(color)),
                text,
                style.sequence_make(fg_code(state.foreground)),
            ]
            state.background = color
            return "".join(codes)

        def to_handler(style: Any, color: int, text: str) -> str:
            """
            Handle {to N TEXT} - enter background N

            TEXT is drawn on the current background using N as its
            foreground, then N becomes the background.
            """
            style.color_check(color)
            state: StyleState = style.state
            codes = [
                style.sequence_make(fg_code(color)),
                text,
                style.sequence_make(bg_code(color)),
                style.sequence_make(fg_code(state.foreground)),
            ]
            state.background = color
            return "".join(codes)

        self.register(DirectiveSpec(
            name='from',
            category=DirectiveCategory.TRANSITION,
            description='Transition from the current background to another',
            handler=from_handler,
            args=(str, int),
            examples=['{bg 4}text{from "" 0}more']
        ))

        self.register(DirectiveSpec(
            name='to',
            category=DirectiveCategory.TRANSITION,
            description='Transition into a new background',
            handler=to_handler,
            args=(int, str),
            examples=['{to 4 ""}text']
        ))

    def resetDirectives_register(self) -> None:
        """Register the full reset"""

        def reset_handler(style: Any) -> str:
            """Handle {reset} - clear every attribute"""
            style.state = StyleState()
            return style.sequence_make(SGR_RESET)

        self.register(DirectiveSpec(
            name='reset',
            category=DirectiveCategory.RESET,
            description='Reset all colors and attributes',
            handler=reset_handler,
            examples=['{bold}text{reset}']
        ))
