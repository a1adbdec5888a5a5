"""Exception hierarchy for the react-mcp tools.

Anything derived from ``ToolFailure`` is caught at the tool-handler boundary
and turned into a result carrying an ``error`` field.  ``ValidationError`` is
deliberately outside that branch: bad arguments surface as a protocol-level
tool error.
"""

from __future__ import annotations


class ReactMCPError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(ReactMCPError):
    """Missing or malformed tool arguments."""


class ToolFailure(ReactMCPError):
    """A handled failure, reported back to the caller as a result."""


class NotFoundError(ToolFailure):
    pass


class ProcessNotFound(NotFoundError):
    def __init__(self, process_id: str) -> None:
        super().__init__(f"Process with ID {process_id} not found")
        self.process_id = process_id


class DirectoryNotFound(NotFoundError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Directory {path} does not exist")
        self.path = path


class FileNotFound(NotFoundError):
    def __init__(self, path: str) -> None:
        super().__init__(f"File {path} does not exist")
        self.path = path


class ConflictError(ToolFailure):
    pass


class AlreadyExists(ConflictError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Directory {path} already exists")
        self.path = path


class InvalidProject(ToolFailure):
    pass


class SpawnError(ToolFailure):
    """The operating system refused to start the process."""


class ExecError(ToolFailure):
    """A blocking command ran but exited with a failure status."""

    def __init__(
        self,
        message: str,
        *,
        stdout: str = "",
        stderr: str = "",
        exit_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code
