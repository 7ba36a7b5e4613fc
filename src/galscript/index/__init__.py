"""Project-wide variable index."""

from galscript.index.models import (
    UsageKind,
    VariableLocation,
    VariableRecord,
    VariableUsage,
)
from galscript.index.variable_index import VariableIndex, index_lines

__all__ = [
    "UsageKind",
    "VariableIndex",
    "VariableLocation",
    "VariableRecord",
    "VariableUsage",
    "index_lines",
]
