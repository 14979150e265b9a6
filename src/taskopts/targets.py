# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Dispatch targets of option elements.

An option element never touches the members of a task object directly.
It binds an `OptionTarget` to the instance and calls the result with the
converted value(s).
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

BoundInvoker = Callable[..., Any]


class OptionTarget(Protocol):
    name: str

    def bind(self, instance: Any) -> BoundInvoker: ...


@dataclass(frozen=True)
class MethodTarget:
    """Calls the method `name` of the instance."""

    name: str

    def bind(self, instance: Any) -> BoundInvoker:
        return getattr(instance, self.name)


@dataclass(frozen=True)
class FieldTarget:
    """Assigns to the attribute `name` of the instance.

    If the instance has a ``set_<name>`` method, the value is passed to it
    instead, which allows task classes to intercept assignments.
    """

    name: str

    def bind(self, instance: Any) -> BoundInvoker:
        setter = getattr(instance, f"set_{self.name}", None)
        if callable(setter):
            return setter

        def assign(value: Any) -> None:
            setattr(instance, self.name, value)

        return assign
