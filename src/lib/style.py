"""
Style compiler: directive programs to terminal escape sequences

Compiles text containing {directive ...} calls into a Style program and
executes it into plain text with ANSI SGR escape sequences spliced in.

The compiler operates in two phases:
1. Compilation: Tokenize with StyleLexer, build text/call nodes, resolve
   every function name against the directive registry (built-ins plus
   caller-supplied extensions)
2. Execution: Walk the nodes, let each directive update the running
   StyleState and emit its escape sequence

Example:
    >>> compile_and_execute("{fg 1}red{reset}")
    '\\x1b[38;5;1mred\\x1b[0m'
"""

import ast
from typing import Any, Callable, List, Mapping, Optional

from pygments.token import Name, Number, Punctuation, String, Text, Whitespace

from ..models.style import CallNode, Node, StyleConfig, StyleState, TextNode
from .directives import DirectiveRegistry
from .lexer import StyleLexer
from .log import LOG


# Directive text appended by format_with_reset()
STYLE_RESET = "{reset}"

_lexer = StyleLexer()


class StyleError(Exception):
    """Base class for style compilation failures"""
    pass


class StyleCompileError(StyleError):
    """Raised when a directive program cannot be parsed"""
    pass


class StyleExecuteError(StyleError):
    """Raised when a directive program fails while executing"""
    pass


def nodes_parse(source: str, registry: DirectiveRegistry) -> List[Node]:
    """
    Parse directive source into a list of text and call nodes

    Adjacent text tokens are merged into one TextNode. Every call must
    name a function known to the registry.

    Args:
        source: Directive program text
        registry: Registry used to validate function names

    Returns:
        List of TextNode / CallNode in source order

    Raises:
        StyleCompileError: On unexpected characters, empty or unclosed
                           directives, or unknown function names

    Example:
        '{fg 1}hi' → [CallNode(name='fg', args=[1], position=0), TextNode('hi')]
    """
    nodes: List[Node] = []
    call: Optional[CallNode] = None

    for position, token, value in _lexer.get_tokens_unprocessed(source):
        if call is None:
            if token is Punctuation and value == '{':
                call = CallNode(name='', position=position)
            elif nodes and isinstance(nodes[-1], TextNode):
                nodes[-1].text += value
            else:
                nodes.append(TextNode(value))
            continue

        if token is Whitespace or token in Text:
            continue

        if token is Punctuation and value == '}':
            if not call.name:
                raise StyleCompileError(f"empty directive at position {call.position}")
            if registry.get(call.name) is None:
                raise StyleCompileError(
                    f'function "{call.name}" not defined (directive at position {call.position})'
                )
            nodes.append(call)
            call = None
        elif token is Name.Function and not call.name:
            call.name = value
        elif token in Name:
            call.args.append(value)
        elif token in Number:
            call.args.append(int(value))
        elif token is String.Backtick:
            call.args.append(value[1:-1])
        elif token in String:
            call.args.append(string_unquote(value, position))
        elif not call.name:
            raise StyleCompileError(
                f"unexpected {value!r} in directive at position {position}, expected function name"
            )
        else:
            raise StyleCompileError(f"unexpected {value!r} in directive at position {position}")

    if call is not None:
        raise StyleCompileError(f"unclosed directive at position {call.position}")

    return nodes


def string_unquote(literal: str, position: int) -> str:
    """Decode a double-quoted argument, honoring backslash escapes"""
    try:
        value = ast.literal_eval(literal)
    except (ValueError, SyntaxError) as e:
        raise StyleCompileError(f"bad string {literal} at position {position}: {e}") from e
    if not isinstance(value, str):
        raise StyleCompileError(f"bad string {literal} at position {position}")
    return value


class Style:
    """
    A compiled directive program

    Holds the parsed nodes, the function table they were resolved
    against, the running StyleState and the configuration it was
    compiled with. Execution starts from whatever state is current, so
    state_set() can seed a program with style inherited from elsewhere.
    """

    def __init__(
        self,
        nodes: List[Node],
        registry: DirectiveRegistry,
        config: StyleConfig,
    ) -> None:
        self.nodes = nodes
        self.registry = registry
        self.config = config
        self.state = StyleState()

    def state_get(self) -> StyleState:
        """Return a copy of the running state"""
        return self.state.copy()

    def state_set(self, state: StyleState) -> None:
        """Replace the running state with a copy of given state"""
        self.state = state.copy()

    def sequence_make(self, code: str) -> str:
        """
        Build an SGR escape sequence for given parameter string

        Returns an empty string when colors are disabled.
        """
        if not self.config.colors:
            return ""
        return f"\x1b[{code}m"

    def color_check(self, color: int) -> None:
        if not 0 <= color <= 255:
            raise StyleExecuteError(f"color index {color} out of range 0-255")

    def execute(self) -> str:
        """
        Execute the program from the current state

        Returns:
            Text with every directive replaced by its output

        Raises:
            StyleExecuteError: On bad arguments, out-of-range colors or an
                               exception raised by an extension function
        """
        parts: List[str] = []

        for node in self.nodes:
            if isinstance(node, TextNode):
                parts.append(node.text)
            else:
                parts.append(self.call_execute(node))

        return "".join(parts)

    def call_execute(self, node: CallNode) -> str:
        """Execute a single directive call"""
        spec = self.registry.get(node.name)
        if spec is None:
            raise StyleExecuteError(f'function "{node.name}" not defined')

        problem = spec.arguments_check(node.args)
        if problem:
            raise StyleExecuteError(
                f"error calling {node.name} at position {node.position}: {problem}"
            )

        try:
            return spec.handler(self, *node.args)
        except StyleError:
            raise
        except Exception as e:
            raise StyleExecuteError(
                f"error calling {node.name} at position {node.position}: {e}"
            ) from e


def compile(
    source: str,
    extensions: Optional[Mapping[str, Callable[..., Any]]] = None,
    config: Optional[StyleConfig] = None,
) -> Style:
    """
    Compile directive source into a Style program

    Args:
        source: Text with {directive ...} calls
        extensions: Extra functions callable as directives; their return
                    value is inserted verbatim at execution time
        config: Compilation settings; defaults to application settings

    Returns:
        Style ready to execute

    Raises:
        StyleCompileError: If source cannot be parsed
    """
    if config is None:
        config = StyleConfig.from_settings()

    registry = DirectiveRegistry()
    if extensions:
        registry.extensions_register(extensions)

    nodes = nodes_parse(source, registry)
    LOG(f"Compiled {len(nodes)} style nodes", level=3)

    return Style(nodes, registry, config)


def compile_and_execute(
    source: str,
    extensions: Optional[Mapping[str, Callable[..., Any]]] = None,
    config: Optional[StyleConfig] = None,
    state: Optional[StyleState] = None,
) -> str:
    """
    Compile and execute directive source in one step

    Args:
        source: Text with {directive ...} calls
        extensions: Extra functions callable as directives
        config: Compilation settings; defaults to application settings
        state: Initial running state (default: empty)

    Returns:
        Executed text

    Example:
        >>> compile_and_execute("{fg 1}{nobg}{nobold}{noreverse}")
        '\\x1b[38;5;1m\\x1b[49m\\x1b[22m\\x1b[27m'
    """
    style = compile(source, extensions, config)
    if state is not None:
        style.state_set(state)
    return style.execute()
