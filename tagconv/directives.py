"""Export directives derived from per-namespace field tags.

A record is a dataclass instance whose fields carry one tag string per
namespace in ``dataclasses.field(metadata=...)``, or an instance of a type
whose tags were registered with :func:`register_directives`. A tag has the
form ``key.path[,omitempty]``; the tag ``-`` excludes the field.
"""

from __future__ import annotations

import dataclasses
import functools
import numbers
from collections.abc import Sized
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from tagconv.errors import InvalidInputError


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping


SKIP_TAG = "-"
OMIT_EMPTY_OPTION = "omitempty"

_registry: dict[tuple[type, str], tuple[ExportDirective, ...]] = {}
_registered_types: set[type] = set()


@dataclass(frozen=True)
class ExportDirective:
    """One exported attribute of a record type under a single namespace.

    ``path`` is ``None`` for an untagged attribute; such an attribute only
    contributes when its value is itself a record, whose entries are then
    promoted without a prefix.
    """

    attribute: str
    path: str | None = None
    omit_empty: bool = False


def parse_tag(raw: str) -> tuple[str, bool]:
    """Split a tag into its key path and the ``omitempty`` flag."""
    parts = raw.split(",")
    if len(parts) > 1:
        return parts[0], parts[1].strip() == OMIT_EMPTY_OPTION
    return raw, False


def directive_from_tag(attribute: str, raw: str) -> ExportDirective | None:
    """Build the directive for one attribute, or ``None`` when it is excluded."""
    if raw == SKIP_TAG:
        return None
    if not raw:
        return ExportDirective(attribute)
    key, omit_empty = parse_tag(raw)
    return ExportDirective(attribute, key, omit_empty)


def tagged(
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    **namespaces: str,
) -> Any:
    """Declare a dataclass field with one tag per namespace.

    >>> @dataclass
    ... class User:
    ...     age: int = tagged(default=0, foo="age", bar="details.myAge")
    """
    return dataclasses.field(default=default, default_factory=default_factory, metadata=namespaces)


def register_directives(record_type: type, namespace: str, tags: Mapping[str, str]) -> None:
    """Register tags for a type that is not a dataclass.

    ``tags`` maps attribute names to tag strings in declaration order. A
    registration wins over tags found in dataclass field metadata.
    """
    if not isinstance(record_type, type):
        msg = "record_type must be a class"
        raise InvalidInputError(msg)
    if not namespace:
        msg = "namespace must not be empty"
        raise InvalidInputError(msg)
    directives: list[ExportDirective] = []
    for attribute, raw in tags.items():
        if not attribute:
            msg = "attribute names must not be empty"
            raise InvalidInputError(msg)
        directive = directive_from_tag(attribute, raw)
        if directive is not None:
            directives.append(directive)
    _registry[record_type, namespace] = tuple(directives)
    _registered_types.add(record_type)


def export_directives(record_type: type, namespace: str) -> tuple[ExportDirective, ...]:
    """Return the directives of ``record_type`` for ``namespace`` in declaration order."""
    registered = _registry.get((record_type, namespace))
    if registered is not None:
        return registered
    if not dataclasses.is_dataclass(record_type):
        if record_type in _registered_types:
            return ()
        msg = f"{record_type.__qualname__} is neither a dataclass nor a registered record type"
        raise InvalidInputError(msg)
    return _derive_directives(record_type, namespace)


@functools.cache
def _derive_directives(record_type: type, namespace: str) -> tuple[ExportDirective, ...]:
    directives: list[ExportDirective] = []
    for field in dataclasses.fields(record_type):
        # private attributes are never exported
        if field.name.startswith("_"):
            continue
        directive = directive_from_tag(field.name, field.metadata.get(namespace, ""))
        if directive is not None:
            directives.append(directive)
    return tuple(directives)


def is_record(value: Any) -> bool:
    """Return True for dataclass instances and instances of registered types."""
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or type(value) in _registered_types


def is_record_list(value: Any) -> bool:
    """Return True for a non-empty list or tuple holding only records."""
    return isinstance(value, (list, tuple)) and bool(value) and all(is_record(item) for item in value)


def _record_values(record: Any) -> Iterator[Any]:
    if dataclasses.is_dataclass(record):
        for field in dataclasses.fields(record):
            yield getattr(record, field.name, None)
        return
    attributes = getattr(record, "__dict__", None)
    if attributes is not None:
        yield from attributes.values()
        return
    for klass in type(record).__mro__:
        slots = getattr(klass, "__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            yield getattr(record, name, None)


def is_zero(value: Any) -> bool:
    """Return True when ``value`` is the zero value of its type.

    ``None``, ``False``, numeric zero (``Decimal`` included), a zero
    ``timedelta`` and anything sized with length zero are zero. A record is
    zero when every one of its attributes is zero.
    """
    if value is None:
        return True
    if is_record(value):
        return all(is_zero(item) for item in _record_values(value))
    if isinstance(value, (numbers.Number, timedelta)):
        return not value
    if isinstance(value, Sized):
        return len(value) == 0
    return False
