# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Type annotation helpers.

Option types are taken from annotations on task classes. These helpers
strip the parts of an annotation which are irrelevant for command line
parsing (``Annotated`` metadata, ``None`` in optional unions) and answer
questions such as "is this annotation an enum?".
"""

from collections.abc import Iterable
from types import UnionType
from typing import Annotated, Any, Union, get_args, get_origin

NoneType = type(None)


def all_types(types: Iterable[Any]) -> bool:
    """Check if all inputs are `type`s and not instances.

    Args:
        types (Iterable): an iterable of putative `type` objects

    Returns:
        bool: whether or not all inputs are `type`s
    """
    return all(isinstance(t, type) for t in types)


def strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is UnionType


def get_type(annotation: Any) -> Any:
    """Return the type which is relevant for argument parsing.

    ``Annotated`` wrappers are removed and ``None`` is dropped from
    unions, so that ``Annotated[int | None, ...]`` yields ``int``.
    Unions with more than one remaining member are kept as a union.
    Generic aliases such as ``list[int]`` are returned untouched.
    """
    annotation = strip_annotated(annotation)

    if not is_union(annotation):
        return annotation

    members = tuple(strip_annotated(arg) for arg in get_args(annotation) if arg is not NoneType)

    if len(members) == 1:
        return members[0]
    return Union[members]  # noqa: UP007


def is_a(annotation: Any, types: Any | tuple[Any, ...]) -> bool:
    """Checks whether the annotation *is* any of the supplied types.

    The checks are performed on the annotation itself and, for generic
    aliases such as ``list[int]`` or ``Literal["a"]``, on its origin:

    1. it *is* one of the `types`
    2. it *is a subclass* of one of the `types`

    Args:
        annotation (Any): Annotation to check.
        types (Union[Any, Tuple[Any, ...]]): Type(s) to compare against.

    Returns:
        bool: Whether the annotation *is* considered one of the types.
    """
    if not isinstance(types, tuple):
        types = (types,)

    origin = get_origin(annotation)
    subject = origin if origin is not None else annotation

    if subject in types:
        return True

    # issubclass() raises TypeError for anything which is not a class,
    # e.g. typing special forms such as Literal.
    if all_types((subject, *types)):
        return issubclass(subject, types)
    return False


def type_name(annotation: Any) -> str:
    if isinstance(annotation, type) and get_origin(annotation) is None:
        if annotation.__module__ == "builtins":
            return annotation.__qualname__
        return f"{annotation.__module__}.{annotation.__qualname__}"
    return repr(annotation)
