# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation Parser for Flag Options.

Flag options are toggled by their presence on the command line and never
take a value. The `novalue` module contains the `should_parse` function,
which checks whether the option type is the no-value type, as well as the
`create_parser` function.
"""

from typing import Any

from taskopts.exceptions import TypeConversionError
from taskopts.utils import NoneType


class NoValueNotationParser:
    multi_valued = False

    def convert(self, token: str) -> Any:
        raise TypeConversionError(token, "a flag (option does not take a value)")

    def describe(self, candidates: list[str]) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def should_parse(option_type: Any) -> bool:
    """Checks whether the option type is the no-value type.

    Args:
        option_type (Any): Option type to check.

    Returns:
        bool: Whether the option is a flag.
    """
    return option_type is NoneType


def create_parser(option_type: Any) -> NoValueNotationParser:
    return NoValueNotationParser()
