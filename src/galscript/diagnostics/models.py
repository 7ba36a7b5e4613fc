"""Diagnostic records and per-call configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from galscript.config.settings import GalScriptSettings


class Severity(str, Enum):
    """Severity levels of a diagnostic."""

    ERROR = "error"
    WARNING = "warning"
    HINT = "hint"


class DiagnosticCode(str, Enum):
    """Stable identifiers for each kind of check."""

    UNKNOWN_COMMAND = "unknown-command"
    MISSING_PARAMETER = "missing-parameter"
    RESOURCE_NOT_FOUND = "resource-not-found"
    UNDEFINED_LABEL = "undefined-label"
    UNDEFINED_VARIABLE = "undefined-variable"
    UNUSED_LABEL = "unused-label"


@dataclass(frozen=True)
class Diagnostic:
    """An advisory issue on one line; columns are 0-based, end exclusive."""

    line_number: int
    start_col: int
    end_col: int
    message: str
    severity: Severity
    code: DiagnosticCode
    file_path: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        data["code"] = self.code.value
        return data


@dataclass(frozen=True)
class DiagnosticsConfig:
    """Options read once per diagnose call."""

    validate_resources: bool = True

    @classmethod
    def from_settings(cls, settings: GalScriptSettings) -> DiagnosticsConfig:
        return cls(validate_resources=settings.validate_resources)
