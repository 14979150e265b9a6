# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation Parser for Enum Options.

The `enum` module contains the `should_parse` function, which checks whether
this module should be used for an option type, as well as the `create_parser`
function, which creates a parser converting tokens to enum members.
"""

import enum
from typing import Any

from taskopts.exceptions import TypeConversionError
from taskopts.utils import is_a


class EnumNotationParser[E: enum.Enum]:
    """Converts tokens to members of `enum_type`.

    A token is looked up as a member name first, then case insensitively
    as a member name, and finally as a member value.
    """

    multi_valued = False

    def __init__(self, enum_type: type[E]) -> None:
        self.enum_type = enum_type

    def convert(self, token: str) -> E:
        try:
            return self.enum_type[token]
        except KeyError:
            pass

        for member in self.enum_type:
            if member.name.lower() == token.lower():
                return member

        for member in self.enum_type:
            if str(member.value) == token:
                return member

        raise TypeConversionError(token, self.enum_type.__name__, self._names())

    def describe(self, candidates: list[str]) -> None:
        candidates.extend(self._names())

    def _names(self) -> list[str]:
        # Iterating an enum skips aliases, which keeps declaration order.
        return [member.name for member in self.enum_type]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.enum_type.__name__})"


def should_parse(option_type: Any) -> bool:
    """Checks whether the option type should be parsed as an `enum`.

    Args:
        option_type (Any): Option type to check.

    Returns:
        bool: Whether the option type is an `enum`.
    """
    return is_a(option_type, enum.Enum)


def create_parser(option_type: Any) -> EnumNotationParser[Any]:
    return EnumNotationParser(option_type)
