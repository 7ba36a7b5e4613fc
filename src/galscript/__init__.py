"""galscript: static analysis for visual-novel scene scripts.

Parses line-oriented scene scripts, indexes variables across a project,
diagnoses common mistakes and resolves scene references to files.
"""

__version__ = "0.1.0"

from .config import GalScriptSettings, get_logger, get_settings
from .diagnostics import Diagnostic, DiagnosticsConfig, DiagnosticsEngine, Severity
from .index import VariableIndex
from .parser import LineKind, ParsedLine, parse_line, parse_lines
from .project import GalProject
from .scenes import ScenePathResolver

__all__ = [
    "Diagnostic",
    "DiagnosticsConfig",
    "DiagnosticsEngine",
    "GalProject",
    "GalScriptSettings",
    "LineKind",
    "ParsedLine",
    "ScenePathResolver",
    "Severity",
    "VariableIndex",
    "__version__",
    "get_logger",
    "get_settings",
    "parse_line",
    "parse_lines",
]
