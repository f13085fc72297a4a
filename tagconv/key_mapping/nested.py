"""Nested mapping construction from flattened dot paths."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal

from tagconv.errors import MergeError


if TYPE_CHECKING:
    from collections.abc import Sequence


ConflictPolicy = Literal["first", "error"]

CONFLICT_POLICIES: tuple[str, ...] = ("first", "error")

logger = logging.getLogger(__name__)


def build_nested(parts: Sequence[str], value: Any) -> dict[str, Any]:
    """Build the chain ``{p0: {p1: {... {pn: value}}}}`` for one key path."""
    if not parts:
        msg = "at least one key part is required"
        raise ValueError(msg)
    first, *rest = parts
    if rest:
        return {first: build_nested(rest, value)}
    return {first: value}


def _copy_branches(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _copy_branches(child) for key, child in value.items()}
    return value


def resolve_collision(path: str, existing: Any, incoming: Any, on_conflict: ConflictPolicy) -> None:
    """Apply the conflict policy to a second write at an occupied leaf.

    The first value always stays in place; the ``"error"`` policy raises
    when the two values differ in type or value.
    """
    if type(existing) is type(incoming) and existing == incoming:
        return
    if on_conflict == "error":
        msg = f"conflicting values for key path '{path}': {existing!r} != {incoming!r}"
        raise MergeError(msg, path)
    logger.debug("key path %r already holds %r, dropping %r", path, existing, incoming)


def merge_fragment(
    target: dict[str, Any],
    fragment: Mapping[str, Any],
    *,
    sep: str = ".",
    on_conflict: ConflictPolicy = "first",
    prefix: tuple[str, ...] = (),
) -> None:
    """Deep-merge ``fragment`` into ``target`` in place.

    Mappings meeting at the same key are merged key by key. Any other
    collision keeps what ``target`` already holds; the ``"error"`` policy
    raises :class:`MergeError` instead.
    """
    for key, value in fragment.items():
        if key not in target:
            target[key] = _copy_branches(value)
            continue

        path = (*prefix, key)
        existing = target[key]
        existing_is_branch = isinstance(existing, Mapping)
        incoming_is_branch = isinstance(value, Mapping)
        if existing_is_branch and incoming_is_branch:
            merge_fragment(existing, value, sep=sep, on_conflict=on_conflict, prefix=path)
        elif existing_is_branch or incoming_is_branch:
            dotted = sep.join(path)
            if on_conflict == "error":
                msg = f"key path '{dotted}' holds both a value and nested keys"
                raise MergeError(msg, dotted)
            logger.debug("key path %r already holds %r, dropping %r", dotted, existing, value)
        else:
            resolve_collision(sep.join(path), existing, value, on_conflict)


def reconstruct_nested(
    flat: Mapping[str, Any],
    *,
    sep: str = ".",
    on_conflict: ConflictPolicy = "first",
) -> dict[str, Any]:
    """Reconstruct one nested mapping from dot-path/value pairs.

    Each key of ``flat`` is split on ``sep`` and turned into a nested
    fragment; fragments are merged in iteration order.
    """
    nested: dict[str, Any] = {}
    for path, value in flat.items():
        merge_fragment(nested, build_nested(path.split(sep), value), sep=sep, on_conflict=on_conflict)
    return nested
