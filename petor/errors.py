"""Error taxonomy for petor.

Library code raises one of these; only the CLI entry point turns them into a
console diagnostic and a process exit code.  Invalid numeric input is not an
error at all -- the collector warns and keeps the default.
"""

from __future__ import annotations

from pathlib import Path


class PetorError(Exception):
    """Base class for every fatal petor error."""

    exit_code: int = 1

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(PetorError):
    """Conflicting or missing command-line invocation shape."""

    exit_code = 2


class SourceResolutionError(PetorError):
    """Template not found, clone failure or missing schema document."""

    exit_code = 3

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class DestinationConflictError(PetorError):
    """The destination directory already exists."""

    exit_code = 4

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Folder already exists: {self.path}. Move the existing folder "
            "somewhere or rename the project to something else."
        )


class SchemaError(PetorError):
    """Unsupported or missing field in a template's ``petor.toml``."""

    exit_code = 5

    def __init__(self, message: str, key: str = "") -> None:
        self.key = key
        super().__init__(message)
