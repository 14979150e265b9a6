# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation Parser for Literal Options.

The `literal` module contains the `should_parse` function, which checks
whether this module should be used for an option type, as well as the
`create_parser` function, which creates a parser accepting exactly the
choices of a `typing.Literal`.
"""

from typing import Any, Literal, get_args

from taskopts.exceptions import TypeConversionError
from taskopts.utils import is_a


class LiteralNotationParser:
    multi_valued = False

    def __init__(self, choices: tuple[Any, ...]) -> None:
        self.choices = choices

    def convert(self, token: str) -> Any:
        # Choices are compared by their textual form, so Literal[1, 2]
        # accepts "1" and converts it back to the integer 1.
        for choice in self.choices:
            if str(choice) == token:
                return choice

        raise TypeConversionError(token, "literal", [str(c) for c in self.choices])

    def describe(self, candidates: list[str]) -> None:
        candidates.extend(str(c) for c in self.choices)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.choices!r})"


def should_parse(option_type: Any) -> bool:
    """Checks whether the option type should be parsed as a `literal`.

    Args:
        option_type (Any): Option type to check.

    Returns:
        bool: Whether the option type is a `literal`.
    """
    return is_a(option_type, Literal)


def create_parser(option_type: Any) -> LiteralNotationParser:
    return LiteralNotationParser(get_args(option_type))
