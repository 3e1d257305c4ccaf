"""Error types raised while consolidating prompt documents."""

from __future__ import annotations

from pathlib import Path


class ConsolidationError(Exception):
    """Base class for consolidation failures."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class MissingDirectoryError(ConsolidationError):
    """The prompt directory does not exist, is not a directory, or cannot be listed."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        message = f"Prompts directory not found: {path}"
        if cause is not None:
            message = f"Prompts directory could not be listed: {path} ({cause})"
        super().__init__(message, path)
        self.cause = cause


class MissingInstructionsError(ConsolidationError):
    """The instructions document does not exist or cannot be read."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        message = f"Instructions file not found: {path}"
        if cause is not None:
            message = f"Instructions file could not be read: {path} ({cause})"
        super().__init__(message, path)
        self.cause = cause


class ReadError(ConsolidationError):
    """A single document could not be read."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Error reading file {path}: {cause}", path)
        self.cause = cause


class WriteError(ConsolidationError):
    """The consolidated output could not be written."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        super().__init__(f"Error writing consolidated file {path}: {cause}", path)
        self.cause = cause


class ConfigError(ConsolidationError):
    """A project config file could not be parsed or holds invalid values."""

    def __init__(self, path: Path, cause: BaseException | str) -> None:
        super().__init__(f"Invalid config file {path}: {cause}", path)
        self.cause = cause
