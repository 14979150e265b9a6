# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation parser protocol and composition.

A notation parser converts a single raw command line token into a typed
value and is able to describe the values it accepts. Parsers for a given
option type are bundled into a `CompositeNotationParser`, which is the
object an option element owns.
"""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from taskopts.exceptions import TypeConversionError
from taskopts.log import get_logger

logger = get_logger(__name__)


class NotationParser(Protocol):
    """Converts raw command line tokens into values of one type."""

    #: Whether all tokens given for an option are aggregated into one value.
    multi_valued: bool

    def convert(self, token: str) -> Any:
        """Converts a raw token.

        Raises:
            TypeConversionError: If the token is not valid for this parser.
        """
        ...

    def describe(self, candidates: list[str]) -> None:
        """Appends the accepted values, if enumerable, to `candidates`."""
        ...


@runtime_checkable
class SupportsConvertAll(Protocol):
    def convert_all(self, tokens: Sequence[str]) -> Any: ...


class CompositeNotationParser:
    """Tries a sequence of notation parsers in order.

    The first parser which accepts a token wins. Descriptions of all
    delegates are concatenated in delegate order.
    """

    def __init__(self, target: str, parsers: Sequence[NotationParser]) -> None:
        if len(parsers) == 0:
            raise ValueError(f"no notation parser available for {target}")

        self.target = target
        self.parsers = tuple(parsers)

    @property
    def multi_valued(self) -> bool:
        return any(p.multi_valued for p in self.parsers)

    def convert(self, token: str) -> Any:
        errors: list[TypeConversionError] = []

        for parser in self.parsers:
            try:
                return parser.convert(token)
            except TypeConversionError as e:
                errors.append(e)

        logger.trace(f"no delegate accepted {token!r}: {'; '.join(str(e) for e in errors)}")

        candidates: list[str] = []
        for e in errors:
            candidates += e.candidates
        raise TypeConversionError(token, self.target, candidates)

    def convert_all(self, tokens: Sequence[str]) -> Any:
        """Converts all tokens given for one option into a single value.

        Multi valued parsers receive the tokens as one batch. For all others
        exactly one token is required.
        """
        for parser in self.parsers:
            if parser.multi_valued and isinstance(parser, SupportsConvertAll):
                return parser.convert_all(tokens)

        if len(tokens) != 1:
            raise TypeConversionError(" ".join(tokens), self.target)
        return self.convert(tokens[0])

    def describe(self, candidates: list[str]) -> None:
        for parser in self.parsers:
            parser.describe(candidates)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.target}, {list(self.parsers)!r})"
