# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation Parsers for Standard Options.

The `standard` module contains the parsers for plain strings and the
fallback parser, which delegates conversion to a `pydantic.TypeAdapter`.

Unlike the other `notation` modules, the fallback has no `should_parse`
function: every type that no other module claims ends up here. Types for
which pydantic cannot generate a schema (e.g. arbitrary classes) make
`create_parser` fail, which renders the option invalid.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from taskopts.exceptions import TypeConversionError
from taskopts.utils import type_name


class StringNotationParser:
    multi_valued = False

    def convert(self, token: str) -> str:
        return token

    def describe(self, candidates: list[str]) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class StandardNotationParser:
    multi_valued = False

    def __init__(self, option_type: Any) -> None:
        self.option_type = option_type
        self.adapter: TypeAdapter[Any] = TypeAdapter(option_type)

    def convert(self, token: str) -> Any:
        try:
            return self.adapter.validate_python(token)
        except ValidationError as e:
            raise TypeConversionError(token, type_name(self.option_type)) from e

    def describe(self, candidates: list[str]) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type_name(self.option_type)})"


def should_parse_string(option_type: Any) -> bool:
    return option_type is str


def create_parser(option_type: Any) -> StringNotationParser | StandardNotationParser:
    if should_parse_string(option_type):
        return StringNotationParser()
    return StandardNotationParser(option_type)
