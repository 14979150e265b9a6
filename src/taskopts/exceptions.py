# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from typing import Any


class OptionValidationError(Exception):
    """Raised when an option declaration cannot be turned into an option element.

    Carries the offending option name and the class declaring it, so that
    the message can be attributed to the build script declaration.
    """

    def __init__(
        self,
        message: str,
        option_name: str | None = None,
        declaring_class: type | None = None,
        option_type: Any = None,
    ) -> None:
        super().__init__(message)
        self.option_name = option_name
        self.declaring_class = declaring_class
        self.option_type = option_type


class TypeConversionError(ValueError):
    """Raised by notation parsers if a raw token cannot be converted."""

    def __init__(self, token: str, target: str, candidates: list[str] | None = None) -> None:
        self.token = token
        self.target = target
        self.candidates = candidates if candidates is not None else []

        msg = f"cannot convert {token!r} to {target}"
        if len(self.candidates) > 0:
            msg += f"; candidates are: {', '.join(self.candidates)}"

        super().__init__(msg)


class UnknownOptionError(LookupError):
    def __init__(self, option_name: str, declaring_class: type) -> None:
        super().__init__(f"no option '{option_name}' in class '{declaring_class.__qualname__}'")
        self.option_name = option_name
        self.declaring_class = declaring_class
