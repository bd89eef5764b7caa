"""
Directive specification and metadata models

Defines the structure and categories of style directives for
validation, documentation and registry management.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple


class DirectiveCategory(Enum):
    """
    Categories of style directives

    Used for organization and for listing the available directives.
    """
    COLOR = "color"              # {fg}, {bg}, {nofg}, {nobg}
    ATTRIBUTE = "attribute"      # {bold}, {reverse} and their negations
    TRANSITION = "transition"    # {from}, {to}
    RESET = "reset"              # {reset}
    EXTENSION = "extension"      # functions supplied by the caller of compile()


@dataclass
class DirectiveSpec:
    """
    Specification for a style directive

    Attributes:
        name: Directive name as written inside braces
        category: Category for organization
        description: Human-readable description
        handler: Execution function (style, *args) -> str
        args: Expected argument types, or None to skip checking
        examples: Example usage strings (shown by --listDirectives)
    """
    name: str
    category: DirectiveCategory
    description: str
    handler: Callable[..., str]
    args: Optional[Tuple[type, ...]] = ()
    examples: List[str] = field(default_factory=list)

    def arguments_check(self, args: Sequence[object]) -> Optional[str]:
        """
        Validate call arguments against the declared types

        Args:
            args: Arguments parsed from the directive

        Returns:
            Error message, or None if arguments are acceptable

        Example:
            For spec fg (args=(int,)) called as {fg "red"}:
            'wrong type for value; expected int; got str'
        """
        if self.args is None:
            return None

        if len(args) != len(self.args):
            return f"wrong number of args for {self.name}: want {len(self.args)} got {len(args)}"

        for expected, value in zip(self.args, args):
            if not isinstance(value, expected):
                return (
                    f"wrong type for value; expected {expected.__name__}; "
                    f"got {type(value).__name__}"
                )

        return None
