"""Custom exception hierarchy for galscript with helpful error messages."""

from __future__ import annotations

from typing import Any


class GalScriptError(Exception):
    """Base exception with helpful formatting for all galscript errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(GalScriptError):
    """Configuration errors including invalid settings and unsupported files."""

    pass


class ValidationError(GalScriptError):
    """Input validation errors with details about what was expected."""

    pass


class FileSystemError(GalScriptError):
    """File system operation errors."""

    pass


class SceneCreationError(FileSystemError):
    """Scene file or directory could not be created."""

    pass


class ScriptFileNotFoundError(GalScriptError):
    """Script file not found errors with helpful path information."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Editor-style camelCase option names are the most common mistake, since
    that is how the options are spelled in editor settings files.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "gamePath": "game_path",
        "autoScanResources": "auto_scan_resources",
        "validateResources": "validate_resources",
        "enablePreview": "enable_preview",
        "scene_path": "game_path",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
