# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from collections.abc import Sequence
from typing import Any

from taskopts.element import AbstractOptionElement, NotationParserFactory
from taskopts.notation import OptionNotationParserFactory
from taskopts.option import OptionInfo
from taskopts.targets import FieldTarget
from taskopts.utils import get_type


class FieldOptionElement(AbstractOptionElement):
    """An option backed by a field of a task model.

    Flags set the field to ``True``, valued options assign the converted value.
    """

    def __init__(
        self,
        option_name: str,
        info: OptionInfo,
        option_type: Any,
        field_name: str,
        declaring_class: type,
        parser_factory: NotationParserFactory = OptionNotationParserFactory,
    ) -> None:
        super().__init__(
            option_name,
            info,
            option_type,
            declaring_class,
            FieldTarget(field_name),
            parser_factory,
        )

    @classmethod
    def create(
        cls,
        info: OptionInfo,
        field_name: str,
        annotation: Any,
        declaring_class: type,
        parser_factory: NotationParserFactory = OptionNotationParserFactory,
    ) -> "FieldOptionElement":
        option_name = info.name if info.name is not None else field_name
        return cls(
            option_name,
            info,
            get_type(annotation),
            field_name,
            declaring_class,
            parser_factory,
        )

    def apply(self, instance: Any, values: Sequence[str]) -> Any:
        if not self.is_flag:
            return self.invoke(instance, self.notation_parser.convert_all(values))

        if len(values) > 0:
            # Raises, flags do not take a value.
            self.notation_parser.convert_all(values)

        return self.invoke(instance, True)
