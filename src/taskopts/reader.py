# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import inspect
from threading import Lock
from typing import Any

from pydantic import BaseModel

from taskopts.element import AbstractOptionElement, NotationParserFactory
from taskopts.exceptions import OptionValidationError, UnknownOptionError
from taskopts.field import FieldOptionElement
from taskopts.log import get_logger
from taskopts.method import MethodOptionElement
from taskopts.notation import OptionNotationParserFactory
from taskopts.option import OptionFieldInfo, get_option_info

logger = get_logger(__name__)


def _owner(cls: type, name: str) -> type:
    for klass in cls.__mro__:
        if name in vars(klass):
            return klass
    return cls


class OptionReader:
    """Collects the option elements of task classes.

    Methods decorated with :func:`taskopts.option.option` and fields of
    pydantic models declared with :func:`taskopts.option.OptionField` are
    turned into option elements. The result is cached per class.
    """

    def __init__(self, parser_factory: NotationParserFactory = OptionNotationParserFactory) -> None:
        self.parser_factory = parser_factory
        self._cache: dict[type, list[AbstractOptionElement]] = {}
        self._lock = Lock()

    def get_options(self, cls: type) -> list[AbstractOptionElement]:
        """Returns the option elements of `cls`, sorted by option name.

        Raises:
            OptionValidationError: If an option declaration is invalid or
                two members share the same option name.
        """
        with self._lock:
            if cls not in self._cache:
                self._cache[cls] = self._read(cls)
            return list(self._cache[cls])

    def get_option(self, cls: type, option_name: str) -> AbstractOptionElement:
        for element in self.get_options(cls):
            if element.option_name == option_name:
                return element
        raise UnknownOptionError(option_name, cls)

    def _read(self, cls: type) -> list[AbstractOptionElement]:
        elements: dict[str, AbstractOptionElement] = {}

        for element in [*self._read_methods(cls), *self._read_fields(cls)]:
            if element.option_name in elements:
                raise OptionValidationError(
                    f"Option '{element.option_name}' linked to multiple elements in class '{cls.__qualname__}'.",
                    element.option_name,
                    cls,
                )
            elements[element.option_name] = element

        logger.debug(f"{cls.__qualname__}: found {len(elements)} options")
        return [elements[name] for name in sorted(elements)]

    def _read_methods(self, cls: type) -> list[AbstractOptionElement]:
        result: list[AbstractOptionElement] = []

        for name in dir(cls):
            member: Any = inspect.getattr_static(cls, name)
            if (info := get_option_info(member)) is None:
                continue

            if isinstance(member, staticmethod | classmethod):
                func = member.__func__
            elif inspect.isfunction(member):
                func = member
            else:
                continue

            result.append(MethodOptionElement.create(info, func, _owner(cls, name), self.parser_factory))

        return result

    def _read_fields(self, cls: type) -> list[AbstractOptionElement]:
        if not (isinstance(cls, type) and issubclass(cls, BaseModel)):
            return []

        result: list[AbstractOptionElement] = []

        for name, info in cls.model_fields.items():
            if not isinstance(info, OptionFieldInfo):
                continue

            result.append(
                FieldOptionElement.create(
                    info.option_info,
                    name,
                    info.annotation,
                    self._field_owner(cls, name),
                    self.parser_factory,
                )
            )

        return result

    @staticmethod
    def _field_owner(model: type[BaseModel], name: str) -> type:
        for klass in model.__mro__:
            if name in inspect.get_annotations(klass):
                return klass
        return model
