"""tagconv - convert tagged dataclass records into nested key-value maps"""

import logging

from ._version import version as __version__
from .converter import TagConverter, to_map
from .directives import ExportDirective, is_zero, parse_tag, register_directives, tagged
from .errors import (
    EmptyInputError,
    InputError,
    InvalidInputError,
    MergeError,
    NoMappableFieldsError,
    TagConvError,
    TraversalError,
)
from .flatten import flatten
from .key_mapping import reconstruct_nested


logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "EmptyInputError",
    "ExportDirective",
    "InputError",
    "InvalidInputError",
    "MergeError",
    "NoMappableFieldsError",
    "TagConvError",
    "TagConverter",
    "TraversalError",
    "__version__",
    "flatten",
    "is_zero",
    "parse_tag",
    "reconstruct_nested",
    "register_directives",
    "tagged",
    "to_map",
]
