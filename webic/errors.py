"""Exception types shared across webic."""

from __future__ import annotations


class WebicError(Exception):
    """Base class for every error raised by webic."""


class ConfigError(WebicError):
    """Raised when a project manifest cannot be turned into a configuration."""


class ScaffoldError(WebicError):
    """Raised when scaffolding must stop; carries the process exit code."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.exit_code = exit_code
        super().__init__(message)


class ManifestError(WebicError):
    """Raised when a generated manifest is missing or malformed."""


class BundleError(WebicError):
    """Raised when a script module cannot be resolved while bundling."""
