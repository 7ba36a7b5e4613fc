"""Script diagnostics."""

from galscript.diagnostics.engine import (
    AssetPredicate,
    DiagnosticsEngine,
    count_by_severity,
)
from galscript.diagnostics.models import (
    Diagnostic,
    DiagnosticCode,
    DiagnosticsConfig,
    Severity,
)

__all__ = [
    "AssetPredicate",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticsConfig",
    "DiagnosticsEngine",
    "Severity",
    "count_by_severity",
]
