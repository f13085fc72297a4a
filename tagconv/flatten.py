"""Depth-first extraction of tagged record fields into dot-path entries."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tagconv.directives import export_directives, is_record, is_record_list, is_zero
from tagconv.errors import EmptyInputError, InvalidInputError, TraversalError
from tagconv.key_mapping.nested import reconstruct_nested, resolve_collision


if TYPE_CHECKING:
    from tagconv.directives import ExportDirective
    from tagconv.key_mapping.nested import ConflictPolicy


logger = logging.getLogger(__name__)


def flatten(
    record: Any,
    namespace: str,
    *,
    sep: str = ".",
    on_conflict: ConflictPolicy = "first",
) -> dict[str, Any]:
    """Map every exported field of ``record`` to its full key path.

    Nested records contribute their own entries, prefixed with the parent's
    key path when the parent field is tagged. A list of records is stored as
    an ordered list of nested mappings under its own key path.

    Raises
    ------
    InvalidInputError
        ``record`` is not a dataclass instance or a registered record.
    EmptyInputError
        ``record`` is the zero value of its type.
    """
    if not is_record(record):
        msg = f"expected a tagged record, got {type(record).__qualname__}"
        raise InvalidInputError(msg)
    if is_zero(record):
        msg = f"{type(record).__qualname__} is the zero value and has nothing to export"
        raise EmptyInputError(msg)
    return _collect(record, namespace, sep, on_conflict)


def _read_field(record: Any, directive: ExportDirective) -> Any:
    try:
        return getattr(record, directive.attribute)
    except Exception as exc:  # noqa: BLE001 - a failing property skips its field only
        msg = f"cannot read {type(record).__name__}.{directive.attribute}"
        raise TraversalError(msg) from exc


def _store(entries: dict[str, Any], path: str, value: Any, on_conflict: ConflictPolicy) -> None:
    if path in entries:
        resolve_collision(path, entries[path], value, on_conflict)
        return
    entries[path] = value


def _collect(record: Any, namespace: str, sep: str, on_conflict: ConflictPolicy) -> dict[str, Any]:
    entries: dict[str, Any] = {}
    for directive in export_directives(type(record), namespace):
        try:
            value = _read_field(record, directive)
        except TraversalError as exc:
            logger.debug("skipping field: %s", exc)
            continue

        if directive.path is None:
            # untagged records are hoisted into the parent's key space
            if is_record(value) and not is_zero(value):
                for path, child in _collect(value, namespace, sep, on_conflict).items():
                    _store(entries, path, child, on_conflict)
            continue

        if directive.omit_empty and is_zero(value):
            continue

        if is_record(value):
            if is_zero(value):
                continue
            for path, child in _collect(value, namespace, sep, on_conflict).items():
                _store(entries, f"{directive.path}{sep}{path}", child, on_conflict)
        elif is_record_list(value):
            items = [
                reconstruct_nested(_collect(item, namespace, sep, on_conflict), sep=sep, on_conflict=on_conflict)
                for item in value
                if not is_zero(item)
            ]
            _store(entries, directive.path, items, on_conflict)
        elif isinstance(value, tuple):
            _store(entries, directive.path, list(value), on_conflict)
        else:
            _store(entries, directive.path, value, on_conflict)
    return entries
