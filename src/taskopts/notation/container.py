# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Notation Parser for Multi-Valued Options.

The `container` module contains the `should_parse` function, which checks
whether this module should be used for an option type, as well as the
`create_parser` function. Container options collect every token given for
the option and convert each of them with the parser of the item type.
"""

import collections.abc
import enum
from collections.abc import Callable, Sequence
from typing import Any, get_args, get_origin

from taskopts.utils import is_a


class ContainerNotationParser:
    multi_valued = True

    def __init__(
        self,
        container: Callable[[list[Any]], Any],
        item_parser: Any,
    ) -> None:
        self.container = container
        self.item_parser = item_parser

    def convert(self, token: str) -> Any:
        return self.container([self.item_parser.convert(token)])

    def convert_all(self, tokens: Sequence[str]) -> Any:
        return self.container([self.item_parser.convert(t) for t in tokens])

    def describe(self, candidates: list[str]) -> None:
        self.item_parser.describe(candidates)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.container!r}, {self.item_parser!r})"


def should_parse(option_type: Any) -> bool:
    """Checks whether the option type should be parsed as a `container`.

    Mappings are not containers in this sense: there is no notation for
    key value pairs on the command line.

    Args:
        option_type (Any): Option type to check.

    Returns:
        bool: Whether the option type is a `container`.
    """
    return is_a(option_type, collections.abc.Container) and not is_a(
        option_type, (enum.Enum, str, bytes, collections.abc.Mapping)
    )


def item_type(option_type: Any) -> Any:
    args = get_args(option_type)

    if len(args) == 0:
        return str

    # tuple[int, ...] is homogeneous, tuple[int, str] is not supported.
    if get_origin(option_type) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if len(set(args)) == 1:
            return args[0]
        raise TypeError(f"heterogeneous tuples are not supported: {option_type}")

    if len(args) != 1:
        raise TypeError(f"unsupported container type: {option_type}")
    return args[0]


def create_parser(option_type: Any, item_parser: Any) -> ContainerNotationParser:
    origin = get_origin(option_type)
    container = origin if origin is not None else option_type

    if container in (
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Iterable,
        collections.abc.Collection,
    ):
        container = list
    elif container in (collections.abc.Set, collections.abc.MutableSet):
        container = set

    return ContainerNotationParser(container, item_parser)
