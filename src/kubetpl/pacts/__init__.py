"""Public contracts for templates — types, errors and shared helpers."""

from kubetpl.pacts.types import (
    Cluster, ClusterConfigError, MissingFieldError, TemplateError,
    UnitParseError, ValidationError,
)
from kubetpl.pacts.helpers import (
    hyphenate, map_to_named_list, object_items, object_values, overlay,
    si_to_num,
)

__all__ = [
    "Cluster",
    "TemplateError",
    "MissingFieldError",
    "ValidationError",
    "UnitParseError",
    "ClusterConfigError",
    "hyphenate",
    "map_to_named_list",
    "object_items",
    "object_values",
    "overlay",
    "si_to_num",
]
