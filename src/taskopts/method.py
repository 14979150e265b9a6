# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import inspect
from collections.abc import Callable, Sequence
from typing import Any, get_type_hints

from taskopts.element import NO_VALUE, AbstractOptionElement, NotationParserFactory
from taskopts.exceptions import OptionValidationError
from taskopts.notation import OptionNotationParserFactory
from taskopts.option import OptionInfo
from taskopts.targets import MethodTarget
from taskopts.utils import get_type


class MethodOptionElement(AbstractOptionElement):
    """An option backed by a method of the task class.

    Flags are backed by methods without parameters or with a single
    ``bool`` parameter, which receives ``True``. Valued options are backed
    by methods with a single parameter receiving the converted value.
    """

    def __init__(
        self,
        option_name: str,
        info: OptionInfo,
        option_type: Any,
        method_name: str,
        declaring_class: type,
        takes_parameter: bool,
        parser_factory: NotationParserFactory = OptionNotationParserFactory,
    ) -> None:
        self._takes_parameter = takes_parameter
        super().__init__(
            option_name,
            info,
            option_type,
            declaring_class,
            MethodTarget(method_name),
            parser_factory,
        )

    @classmethod
    def create(
        cls,
        info: OptionInfo,
        method: Callable[..., Any],
        declaring_class: type,
        parser_factory: NotationParserFactory = OptionNotationParserFactory,
    ) -> "MethodOptionElement":
        name = method.__name__
        option_name = info.name if info.name is not None else name
        location = f"{declaring_class.__qualname__}#{name}"

        if isinstance(inspect.getattr_static(declaring_class, name, None), staticmethod | classmethod):
            raise OptionValidationError(
                f"Option '{option_name}' cannot be attached to static method or classmethod '{location}'.",
                option_name,
                declaring_class,
            )

        # The first parameter is the instance.
        params = list(inspect.signature(method).parameters.values())[1:]

        if any(p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD) for p in params):
            raise OptionValidationError(
                f"Option '{option_name}' cannot take variadic parameters in class '{location}'.",
                option_name,
                declaring_class,
            )
        if any(p.kind is p.KEYWORD_ONLY for p in params):
            raise OptionValidationError(
                f"Option '{option_name}' cannot take keyword-only parameters in class '{location}'.",
                option_name,
                declaring_class,
            )
        if len(params) > 1:
            raise OptionValidationError(
                f"Option '{option_name}' cannot take multiple parameters in class '{location}'.",
                option_name,
                declaring_class,
            )

        if len(params) == 0:
            return cls(option_name, info, NO_VALUE, name, declaring_class, False, parser_factory)

        try:
            hints = get_type_hints(method, include_extras=True)
        except Exception as e:
            raise OptionValidationError(
                f"Option '{option_name}' has an unresolvable type annotation in class '{location}'.",
                option_name,
                declaring_class,
            ) from e

        option_type = get_type(hints.get(params[0].name, str))
        return cls(option_name, info, option_type, name, declaring_class, True, parser_factory)

    def apply(self, instance: Any, values: Sequence[str]) -> Any:
        if not self.is_flag:
            return self.invoke(instance, self.notation_parser.convert_all(values))

        if len(values) > 0:
            # Raises, flags do not take a value.
            self.notation_parser.convert_all(values)

        if self._takes_parameter:
            return self.invoke(instance, True)
        return self.invoke(instance)
