# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar, Unpack

from pydantic.fields import FieldInfo, _FromFieldInfoInputs
from pydantic_core import PydanticUndefined, PydanticUndefinedType

F = TypeVar("F", bound=Callable[..., Any])

OPTION_ATTRIBUTE = "__taskopts_option__"


@dataclass(frozen=True)
class OptionInfo:
    """Declarative metadata of a command line option.

    ``description`` is ``PydanticUndefined`` if it was never supplied
    explicitly. Use :meth:`has_description` instead of comparing it with
    an empty string.
    """

    name: str | None = None
    description: str | PydanticUndefinedType = PydanticUndefined

    def has_description(self) -> bool:
        return self.description is not PydanticUndefined


def option(
    name: str | None = None,
    description: str | PydanticUndefinedType = PydanticUndefined,
) -> Callable[[F], F]:
    """Marks a method of a task class as a command line option.

    The method takes either no parameter besides ``self``, which makes the
    option a flag, or exactly one parameter whose annotation is the option
    type.

    :param name: The option name. If none is specified, the method name is used.
    :param description: The description shown in the help output. Required.
    """

    def decorator(func: F) -> F:
        setattr(func, OPTION_ATTRIBUTE, OptionInfo(name, description))
        return func

    return decorator


def get_option_info(member: Any) -> OptionInfo | None:
    if (info := getattr(member, OPTION_ATTRIBUTE, None)) is not None:
        return info
    # @option applied below @staticmethod or @classmethod
    if isinstance(member, staticmethod | classmethod):
        return getattr(member.__func__, OPTION_ATTRIBUTE, None)
    return None


class OptionFieldInfo(FieldInfo):
    def __init__(
        self,
        default: Any,
        option_name: str | None,
        **kwargs: Unpack[_FromFieldInfoInputs],
    ):
        """Creates a new OptionFieldInfo.

        This is a special variant of pydantic's FieldInfo, which marks a field
        of a task model as a command line option.
        For general usage and details on the generic parameters see https://docs.pydantic.dev/latest/concepts/fields.
        Just as with pydantic's FieldInfo, this should usually not be called directly.
        Instead use the OptionField() function of this module.

        :param default: The default value, if none is given explicitly.
        :param option_name: The option name. If none is specified, the field name is used.
        :param kwargs: Generic pydantic Field() arguments (see https://docs.pydantic.dev/latest/api/fields/#pydantic.fields.FieldInfo).
        """
        super().__init__(default=default, **kwargs)

        self.option_name = option_name

    @property
    def option_info(self) -> OptionInfo:
        description = self.description if self.description is not None else PydanticUndefined
        return OptionInfo(self.option_name, description)


def OptionField(
    default: Any = PydanticUndefined,
    option_name: str | None = None,
    **kwargs: Unpack[_FromFieldInfoInputs],
) -> Any:
    """Creates a new OptionFieldInfo.

    This is a special variant of pydantic's Field() function, which marks the
    field as a command line option.
    For general usage and details on the generic parameters see https://docs.pydantic.dev/latest/concepts/fields.

    :param default: The default value, if none is given explicitly.
    :param option_name: The option name. If none is specified, the field name is used.
    :param kwargs: Generic pydantic Field() arguments, ``description`` being the option description.
    :return: An OptionFieldInfo.
    """
    return OptionFieldInfo(default, option_name, **kwargs)
