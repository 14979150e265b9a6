# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Converts Raw Command-Line Tokens to Typed Option Values.

This package contains the notation parsers which option elements use to
convert the textual values given on the command line. The modules each
contain a `should_parse()` and a `create_parser()` function; the
`OptionNotationParserFactory` chooses between them based on the option type
and bundles the result into a `CompositeNotationParser`.
"""

from collections.abc import Callable
from typing import Any, ClassVar, get_args

from taskopts.log import get_logger
from taskopts.utils import is_union, type_name

from . import (
    container,
    enum,
    literal,
    novalue,
    standard,
)
from .base import CompositeNotationParser, NotationParser

logger = get_logger(__name__)

ParserBuilder = Callable[[Any], NotationParser]
ParserPredicate = Callable[[Any], bool]
ParserChain = Callable[[Any], list[NotationParser]]


def build_parsers(option_type: Any, build: ParserChain | None = None) -> list[NotationParser]:
    """Creates the builtin notation parsers for an option type.

    Unions yield one parser per member, tried in declaration order.

    Args:
        option_type (Any): The effective option type.
        build (ParserChain | None): Creates the parsers of union members and
            container items. Defaults to `build_parsers` itself.

    Returns:
        list[NotationParser]: Parsers to be bundled into a composite.
    """
    if build is None:
        build = build_parsers

    if is_union(option_type):
        parsers: list[NotationParser] = []
        for member in get_args(option_type):
            parsers += build(member)
        return parsers

    if novalue.should_parse(option_type):
        return [novalue.create_parser(option_type)]
    elif container.should_parse(option_type):
        item = container.item_type(option_type)
        item_parser = CompositeNotationParser(type_name(item), build(item))
        return [container.create_parser(option_type, item_parser)]
    elif literal.should_parse(option_type):
        return [literal.create_parser(option_type)]
    elif enum.should_parse(option_type):
        return [enum.create_parser(option_type)]
    else:
        return [standard.create_parser(option_type)]


class OptionNotationParserFactory:
    """Builds the composite notation parser for an option type.

    Additional parsers can be registered with :meth:`register`. They take
    precedence over the builtin ones for every type their predicate accepts,
    including union members and container items. Each subclass keeps its
    own registry; parsers registered on a base class apply to its
    subclasses as well.
    """

    _registry: ClassVar[list[tuple[ParserPredicate, ParserBuilder]]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry = []

    def __init__(self, option_type: Any) -> None:
        self.option_type = option_type

    @classmethod
    def register(cls, predicate: ParserPredicate, builder: ParserBuilder) -> None:
        cls._registry.append((predicate, builder))

    @classmethod
    def unregister(cls, builder: ParserBuilder) -> None:
        cls._registry[:] = [(p, b) for p, b in cls._registry if b is not builder]

    @classmethod
    def _registered(cls, option_type: Any) -> list[NotationParser]:
        for klass in cls.__mro__:
            if not issubclass(klass, OptionNotationParserFactory):
                continue
            parsers = [
                builder(option_type)
                for predicate, builder in klass._registry
                if predicate(option_type)
            ]
            if len(parsers) > 0:
                return parsers
        return []

    def _build(self, option_type: Any) -> list[NotationParser]:
        if len(parsers := self._registered(option_type)) > 0:
            return parsers
        return build_parsers(option_type, self._build)

    def to_composite(self) -> CompositeNotationParser:
        composite = CompositeNotationParser(
            type_name(self.option_type), self._build(self.option_type)
        )
        logger.trace(f"built {composite!r}")
        return composite


__all__ = (
    "CompositeNotationParser",
    "NotationParser",
    "OptionNotationParserFactory",
    "build_parsers",
)
