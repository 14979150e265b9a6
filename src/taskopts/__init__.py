# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Typed Command-Line Options for Task Classes.

This is the `taskopts` package, which turns methods and fields of task
classes that are marked as options into validated option elements. An
option element knows its name, description and value type, converts raw
command line tokens with a notation parser and applies the converted
value to the underlying method or field.

The public interface exposed by this package is the option markers, the
option elements with their reader, and the error types.
"""

from taskopts.element import NO_VALUE, AbstractOptionElement, OptionElement, calculate_option_type
from taskopts.exceptions import OptionValidationError, TypeConversionError, UnknownOptionError
from taskopts.field import FieldOptionElement
from taskopts.method import MethodOptionElement
from taskopts.notation import CompositeNotationParser, NotationParser, OptionNotationParserFactory
from taskopts.option import OptionField, OptionFieldInfo, OptionInfo, option
from taskopts.reader import OptionReader

# Public Re-Exports
__all__ = (
    "NO_VALUE",
    "AbstractOptionElement",
    "CompositeNotationParser",
    "FieldOptionElement",
    "MethodOptionElement",
    "NotationParser",
    "OptionElement",
    "OptionField",
    "OptionFieldInfo",
    "OptionInfo",
    "OptionNotationParserFactory",
    "OptionReader",
    "OptionValidationError",
    "TypeConversionError",
    "UnknownOptionError",
    "calculate_option_type",
    "option",
)
