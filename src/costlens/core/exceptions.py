"""Custom exception hierarchy for costlens.

All custom exceptions inherit from CostLensError to enable:
- Unified exception handling at the CLI boundary
- Clear distinction from built-in exceptions

The change-detection core itself never raises; these are used by the
boundary adapters (configuration loading, cost report parsing).
"""

from pathlib import Path

__all__ = [
    "CostLensError",
    "ConfigError",
    "ReportError",
]


class CostLensError(Exception):
    """Base exception for all costlens errors."""

    pass


class ConfigError(CostLensError):
    """Configuration loading or validation error.

    Raised when:
    - The configuration file is missing or unreadable
    - The file is not valid YAML or not a mapping
    - Pydantic validation of the data fails
    """

    pass


class ReportError(CostLensError):
    """Cost report could not be read or has an unexpected shape.

    Attributes:
        path: Report file path, if the report came from a file.

    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        """Initialize ReportError with message and optional source path.

        Args:
            message: Human-readable error message.
            path: Path of the offending report file.

        """
        super().__init__(message)
        self.path = path
