"""
Pygments lexer for the style directive language

Tokenizes format strings such as '{fg 1}{onerror "{bg 199}"}${level} %s'
for the style compiler, and doubles as a highlighter when displaying
format strings.

Token types:
- Text: Literal text outside braces
- Punctuation: Opening and closing braces
- Name.Function: Directive names (e.g., fg, onerror, store)
- String.Double: Quoted arguments with backslash escapes
- String.Backtick: Raw arguments, no escapes
- Number.Integer: Numeric arguments (color indices)
- Error: Anything else inside braces
"""

from pygments.lexer import RegexLexer
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Number,
    Whitespace,
)


class StyleLexer(RegexLexer):
    """
    Lexer for colorgful style directives

    Example:
        {fg 1}{onerror "{bg 199}"}ERROR

    Tokens:
        { → Punctuation
        fg → Name.Function
        1 → Number.Integer
        } → Punctuation
        "{bg 199}" → String.Double
        ERROR → Text
    """

    name = 'Colorgful'
    aliases = ['colorgful']
    filenames = []

    tokens = {
        'root': [
            # Directive start
            (r'\{', Punctuation, 'directive'),

            # Everything up to the next directive is literal
            (r'[^{]+', Text),
        ],

        'directive': [
            (r'\s+', Whitespace),

            # Quoted argument, may itself contain braces: "{bg 1}"
            (r'"(\\.|[^"\\])*"', String.Double),

            # Raw argument
            (r'`[^`]*`', String.Backtick),

            # Color index or other number
            (r'-?\d+', Number.Integer),

            # Function name or bare word argument
            (r'[a-zA-Z_]\w*', Name.Function),

            # Directive end
            (r'\}', Punctuation, '#pop'),
        ],
    }

