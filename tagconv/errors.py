"""Exceptions raised while converting tagged records to nested maps."""

from __future__ import annotations


class TagConvError(Exception):
    """Base class for all tagconv failures."""


class InputError(TagConvError, ValueError):
    """The record handed to the converter cannot be used."""


class InvalidInputError(InputError):
    """Raised for a missing record, a non-record value or bad converter options."""


class EmptyInputError(InputError):
    """Raised when the record is the zero value of its type."""


class NoMappableFieldsError(TagConvError, ValueError):
    """Raised when no field of the record carries a tag for the namespace."""


class MergeError(TagConvError, ValueError):
    """Raised when a fragment cannot be merged into the output mapping."""

    def __init__(self, msg: str, path: str) -> None:
        super().__init__(msg)
        self.path = path


class TraversalError(TagConvError):
    """A single field could not be read; the walker skips it."""
