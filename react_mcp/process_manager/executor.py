"""Run a shell command to completion and hand back everything it printed.

This is the blocking counterpart of :class:`ProcessSupervisor`: the caller
waits for the exit, and nothing is registered.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass

from react_mcp.errors import DirectoryNotFound, ExecError, SpawnError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    command: str
    directory: str
    stdout: str
    stderr: str
    exit_code: int


class CommandExecutor:
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    async def run(self, command: str, cwd: str | None = None) -> CommandResult:
        """Run ``command`` through the shell in ``cwd`` and wait for it.

        Raises ExecError when the command exits non-zero; its stdout and
        stderr are attached to the exception.
        """
        directory = cwd or os.getcwd()
        if not os.path.isdir(directory):
            raise DirectoryNotFound(directory)

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=directory,
            )
        except OSError as exc:
            raise SpawnError(f"Failed to start '{command}': {exc}") from exc

        try:
            raw_out, raw_err = await process.communicate()
        except asyncio.CancelledError:
            # The caller gave up; do not leave the command running unowned
            if process.returncode is None:
                process.kill()
            raise
        stdout = raw_out.decode(self.encoding, errors="replace")
        stderr = raw_err.decode(self.encoding, errors="replace")
        code = process.returncode

        if code:
            log.info("Command exited with code %s in %s: %s", code, directory, command)
            raise ExecError(
                f"Command failed with exit code {code}: {command}",
                stdout=stdout,
                stderr=stderr,
                exit_code=code,
            )

        return CommandResult(
            command=command,
            directory=directory,
            stdout=stdout,
            stderr=stderr,
            exit_code=code,
        )
