"""Error taxonomy for configuration-time site generation.

Every error is fatal for the configuration pass except :class:`NoInputsFound`,
which is only raised when strict discovery is enabled (otherwise it is
logged as a warning).
"""

from __future__ import annotations

from pathlib import Path


class SiteGenError(Exception):
    """Base class for all rmf_site_gen errors."""


class MissingArgument(SiteGenError):
    """Raised when a required parameter is absent or empty."""

    def __init__(self, function: str, parameter: str, message: str | None = None) -> None:
        self.function = function
        self.parameter = parameter
        super().__init__(message or f"{function}: {parameter} argument is required.")


class InputNotFound(MissingArgument):
    """Raised when the site-description input does not exist at registration."""

    def __init__(self, function: str, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            function, "INPUT", f"{function}: INPUT file does not exist: {self.path}"
        )


class InvalidArgument(SiteGenError):
    """Raised when a parameter is present but unusable."""

    def __init__(self, function: str, parameter: str, reason: str) -> None:
        self.function = function
        self.parameter = parameter
        super().__init__(f"{function}: {parameter} {reason}")


class DirectoryCreateFailed(SiteGenError):
    """Raised when an output directory cannot be created."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot create directory {self.path}: {reason}")


class DuplicateActionIdentifier(SiteGenError):
    """Raised when two actions collapse to the same identifier."""

    def __init__(self, identifier: str, detail: str = "") -> None:
        self.identifier = identifier
        message = f"Action '{identifier}' is already registered"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NoInputsFound(SiteGenError):
    """Raised (in strict mode) when package discovery finds no site files."""

    def __init__(self, input_root: str | Path, pattern: str) -> None:
        self.input_root = Path(input_root)
        self.pattern = pattern
        super().__init__(f"No '*{pattern}' files found under {self.input_root}")
