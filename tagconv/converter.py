"""Conversion of tagged records into nested key-value maps."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tagconv.errors import InvalidInputError, NoMappableFieldsError
from tagconv.flatten import flatten
from tagconv.key_mapping.nested import CONFLICT_POLICIES, reconstruct_nested


if TYPE_CHECKING:
    from collections.abc import Mapping

    from tagconv.key_mapping.nested import ConflictPolicy


logger = logging.getLogger(__name__)


class TagConverter:
    """Convert records to nested maps using the tags of one namespace."""

    def __init__(self, namespace: str, *, sep: str = ".", on_conflict: ConflictPolicy = "first") -> None:
        super().__init__()
        if not isinstance(namespace, str) or not namespace:
            msg = "namespace must be a non-empty string"
            raise InvalidInputError(msg)
        if not sep:
            msg = "sep must not be empty"
            raise InvalidInputError(msg)
        if on_conflict not in CONFLICT_POLICIES:
            msg = f"on_conflict must be one of {', '.join(CONFLICT_POLICIES)}, got {on_conflict!r}"
            raise InvalidInputError(msg)

        self.namespace = namespace
        self.sep = sep
        self.on_conflict: ConflictPolicy = on_conflict

    def flatten(self, record: Any) -> dict[str, Any]:
        """Return the flat key path/value entries of ``record``."""
        return flatten(record, self.namespace, sep=self.sep, on_conflict=self.on_conflict)

    def expand(self, flat: Mapping[str, Any]) -> dict[str, Any]:
        """Expand flat entries into one nested mapping."""
        return reconstruct_nested(flat, sep=self.sep, on_conflict=self.on_conflict)

    def to_map(self, record: Any) -> dict[str, Any]:
        """Convert ``record`` into a nested mapping.

        Raises
        ------
        InvalidInputError
            ``record`` is ``None`` or not a record.
        EmptyInputError
            ``record`` is the zero value of its type.
        NoMappableFieldsError
            No field of ``record`` is exported under the namespace.
        MergeError
            Two key paths collide under the ``"error"`` policy.
        """
        if record is None:
            msg = "nil record passed"
            raise InvalidInputError(msg)

        flat = self.flatten(record)
        if not flat:
            msg = f"no field of {type(record).__qualname__} is tagged for namespace {self.namespace!r}"
            raise NoMappableFieldsError(msg)

        nested = self.expand(flat)
        logger.debug(
            "converted %s with namespace %r: %d key paths, %d top-level keys",
            type(record).__qualname__,
            self.namespace,
            len(flat),
            len(nested),
        )
        return nested

    def __repr__(self) -> str:
        return f"{type(self).__name__}(namespace={self.namespace!r}, sep={self.sep!r}, on_conflict={self.on_conflict!r})"


def to_map(
    record: Any,
    namespace: str,
    *,
    sep: str = ".",
    on_conflict: ConflictPolicy = "first",
) -> dict[str, Any]:
    """Convert ``record`` into a nested mapping using the tags of ``namespace``.

    Tags are read from ``dataclasses.field(metadata={namespace: "key.path"})``;
    see :class:`TagConverter` for the errors raised.
    """
    return TagConverter(namespace, sep=sep, on_conflict=on_conflict).to_map(record)
