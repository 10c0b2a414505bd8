"""Utility functions for KubeReport."""

from kubereport.utils.formatting import (
    field,
    format_age,
    format_conditions,
    format_mapping,
    format_name_list,
    require,
)
from kubereport.utils.resource_parser import (
    memory_str_to_bytes,
    parse_cpu_millicores,
)

__all__ = [
    # Formatting
    "field",
    "format_age",
    "format_conditions",
    "format_mapping",
    "format_name_list",
    "require",
    # Resource parsing
    "memory_str_to_bytes",
    "parse_cpu_millicores",
]
