"""
Shorthand field reference rewriting

Rewrites ${name} host-field references into {field "name"} directives so
they pass through the style compiler untouched and come out again as
host placeholders.
"""

import re

# Non-greedy up to the first closing brace; no nesting
PLACEHOLDER_PATTERN = re.compile(r'\$\{([^}]+)\}')


def argument_quote(value: str) -> str:
    """
    Quote a value as a double-quoted directive argument

    Example:
        >>> argument_quote('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'


def placeholders_rewrite(formatting: str) -> str:
    """
    Replace every ${name} with a {field "name"} directive

    Unbalanced braces are left alone and surface as a compile error in
    the style compiler.

    Args:
        formatting: Raw format string

    Returns:
        Format string ready for the style compiler

    Example:
        >>> placeholders_rewrite('{bg 1}${level} %s')
        '{bg 1}{field "level"} %s'
    """
    return PLACEHOLDER_PATTERN.sub(
        lambda match: '{field ' + argument_quote(match.group(1)) + '}',
        formatting,
    )
