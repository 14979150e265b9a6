# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from taskopts.exceptions import OptionValidationError
from taskopts.log import get_logger
from taskopts.notation import CompositeNotationParser, OptionNotationParserFactory
from taskopts.option import OptionInfo
from taskopts.targets import OptionTarget
from taskopts.utils import NoneType, type_name

logger = get_logger(__name__)

#: The option type of flags, i.e. options which do not take a value.
NO_VALUE: type = NoneType

NotationParserFactory = Callable[[Any], OptionNotationParserFactory]


class OptionElement(Protocol):
    """A validated command line option of a task class.

    Option elements are created once per option while a task class is
    scanned and are immutable afterwards.
    """

    @property
    def option_name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def option_type(self) -> Any:
        """The type of the option value; :data:`NO_VALUE` for flags, never ``bool``."""
        ...

    @property
    def available_values(self) -> list[str]: ...

    @property
    def declaring_class(self) -> type: ...

    def apply(self, instance: Any, values: Sequence[str]) -> Any:
        """Converts the raw values given on the command line and applies them to `instance`."""
        ...


def calculate_option_type(option_type: Any) -> Any:
    # "--flag true" syntax is not supported
    if option_type is bool:
        return NO_VALUE
    return option_type


class AbstractOptionElement(ABC):
    """Shared validation and conversion logic of method and field options.

    The constructor either yields a fully valid element or raises
    :class:`OptionValidationError`. All attributes are read only.
    """

    def __init__(
        self,
        option_name: str,
        info: OptionInfo,
        option_type: Any,
        declaring_class: type,
        target: OptionTarget,
        parser_factory: NotationParserFactory = OptionNotationParserFactory,
    ) -> None:
        if option_name.strip() == "":
            raise OptionValidationError(
                f"Empty option name in class '{declaring_class.__qualname__}'.",
                option_name,
                declaring_class,
            )

        self._option_name = option_name
        self._declaring_class = declaring_class
        self._description = self._read_description(info, option_name, declaring_class)
        self._option_type = calculate_option_type(option_type)
        self._notation_parser = self._create_notation_parser(
            option_name, self._option_type, declaring_class, parser_factory
        )
        self._target = target
        self._frozen = True

        logger.trace(
            f"option '{option_name}' of {declaring_class.__qualname__}: "
            f"{type_name(self._option_type)} via {target!r}"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(name, value)

    @staticmethod
    def _read_description(info: OptionInfo, option_name: str, declaring_class: type) -> str:
        if not info.has_description() or str(info.description).strip() == "":
            raise OptionValidationError(
                f"No description set on option '{option_name}' in class '{declaring_class.__qualname__}'.",
                option_name,
                declaring_class,
            )
        return str(info.description)

    @staticmethod
    def _create_notation_parser(
        option_name: str,
        option_type: Any,
        declaring_class: type,
        parser_factory: NotationParserFactory,
    ) -> CompositeNotationParser:
        try:
            return parser_factory(option_type).to_composite()
        except Exception as e:
            logger.debug(
                f"no notation parser for option '{option_name}' ({type_name(option_type)}): {e!r}"
            )
            raise OptionValidationError(
                f"Option '{option_name}' cannot be casted to type '{type_name(option_type)}' "
                f"in class '{declaring_class.__qualname__}'.",
                option_name,
                declaring_class,
                option_type,
            ) from e

    @property
    def option_name(self) -> str:
        return self._option_name

    @property
    def description(self) -> str:
        return self._description

    @property
    def option_type(self) -> Any:
        return self._option_type

    @property
    def declaring_class(self) -> type:
        return self._declaring_class

    @property
    def notation_parser(self) -> CompositeNotationParser:
        return self._notation_parser

    @property
    def available_values(self) -> list[str]:
        candidates: list[str] = []
        self._notation_parser.describe(candidates)
        return candidates

    @property
    def is_flag(self) -> bool:
        return self._option_type is NO_VALUE

    def invoke(self, instance: Any, *values: Any) -> Any:
        """Calls the target member of `instance` once with `values`.

        Exceptions raised by the member are not wrapped.
        """
        return self._target.bind(instance)(*values)

    @abstractmethod
    def apply(self, instance: Any, values: Sequence[str]) -> Any: ...

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(option_name={self._option_name!r}, "
            f"option_type={type_name(self._option_type)}, "
            f"declaring_class={self._declaring_class.__qualname__})"
        )
