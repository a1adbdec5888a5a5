"""Process supervisor: launches, tracks, and terminates background processes."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import signal
from collections.abc import Mapping

from react_mcp.errors import DirectoryNotFound, SpawnError
from react_mcp.process_manager.models import ProcessRecord, ProcessSnapshot
from react_mcp.process_manager.output import OutputBuffer
from react_mcp.process_manager.registry import ProcessRegistry

log = logging.getLogger(__name__)

# Tools like create-react-app and webpack drop colours when stdout is a pipe.
DEFAULT_EXTRA_ENV = {"FORCE_COLOR": "true"}

READ_CHUNK_SIZE = 4096


def build_command_line(command: str, args: list[str] | None = None) -> str:
    """``command`` is a shell fragment; ``args`` are quoted individually."""
    if not args:
        return command
    return f"{command} {shlex.join(args)}"


class ProcessSupervisor:
    """Launches background processes and answers questions about them.

    ``launch`` returns as soon as the OS process exists.  Output is collected
    by two reader tasks per process and the exit code is recorded by a
    watcher task, all running on the same event loop as the callers.
    """

    def __init__(
        self,
        registry: ProcessRegistry | None = None,
        extra_env: Mapping[str, str] | None = None,
    ) -> None:
        self.registry = registry if registry is not None else ProcessRegistry()
        self._extra_env = dict(DEFAULT_EXTRA_ENV if extra_env is None else extra_env)

    # ------------------------------------------------------------------
    # Launching
    # ------------------------------------------------------------------

    async def launch(
        self,
        command: str,
        args: list[str] | None = None,
        cwd: str | None = None,
    ) -> ProcessRecord:
        """Start ``command`` in the background and register it."""
        resolved_cwd = cwd or os.getcwd()
        if not os.path.isdir(resolved_cwd):
            raise DirectoryNotFound(resolved_cwd)

        proc_args = list(args or [])
        spawn_env = os.environ.copy()
        spawn_env.update(self._extra_env)

        try:
            process = await asyncio.create_subprocess_shell(
                build_command_line(command, proc_args),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=resolved_cwd,
                env=spawn_env,
                # New session so terminate() reaches the shell's children too
                start_new_session=True,
            )
        except OSError as exc:
            raise SpawnError(f"Failed to start '{command}': {exc}") from exc

        record = ProcessRecord(
            command=command,
            args=proc_args,
            cwd=resolved_cwd,
            pid=process.pid,
            _process=process,
        )
        process_id = self.registry.register(record)

        record._tasks = [
            asyncio.create_task(
                self._read_stream(process.stdout, record.stdout),  # type: ignore[arg-type]
                name=f"{process_id}-stdout",
            ),
            asyncio.create_task(
                self._read_stream(process.stderr, record.stderr),  # type: ignore[arg-type]
                name=f"{process_id}-stderr",
            ),
        ]
        record._tasks.append(
            asyncio.create_task(self._watch(record), name=f"{process_id}-waiter")
        )

        log.info(
            "Launched %s (pid=%s) in %s: %s",
            process_id, process.pid, resolved_cwd, record.command_line,
        )
        return record

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def get(self, process_id: str) -> ProcessRecord:
        return self.registry.get(process_id)

    def status(self, process_id: str) -> ProcessSnapshot:
        return self.registry.get(process_id).snapshot()

    def list_all(self) -> list[ProcessSnapshot]:
        return [record.snapshot() for record in self.registry.list()]

    def terminate(self, process_id: str) -> ProcessRecord:
        """Send SIGTERM to the process group and return without waiting.

        Stopping a process that has already exited is a successful no-op.
        The record's exit code is filled in later by the watcher task.
        """
        record = self.registry.get(process_id)
        proc = record._process
        if not record.is_running or proc is None:
            return record

        # The shell may already be gone while a backgrounded child still
        # holds the pipes open, so signal the group regardless.
        try:
            os.killpg(proc.pid, signal.SIGTERM)
        except ProcessLookupError:
            return record
        log.info("Sent SIGTERM to %s (pid=%s)", process_id, proc.pid)
        return record

    async def wait(self, process_id: str, timeout: float | None = None) -> int:
        """Wait until the process has exited and return its exit code."""
        record = self.registry.get(process_id)
        return await asyncio.wait_for(record.wait_exited(), timeout=timeout)

    def shutdown_cleanup(self) -> dict[str, BaseException]:
        """Terminate every process that is still running.

        Best effort: a failure for one process is logged and collected, and
        the remaining processes are still visited.
        """
        failures: dict[str, BaseException] = {}
        for record in self.registry.list():
            if not record.is_running:
                continue
            try:
                self.terminate(record.id)
            except Exception as exc:
                failures[record.id] = exc

        if failures:
            log.error(
                "Failed to stop %d process(es) during shutdown: %s",
                len(failures),
                ", ".join(f"{pid}: {exc}" for pid, exc in failures.items()),
            )
        return failures

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    async def _read_stream(
        stream: asyncio.StreamReader,
        buf: OutputBuffer,
    ) -> None:
        """Read from an async stream into an output buffer until EOF."""
        while True:
            chunk = await stream.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            buf.feed(chunk)
        buf.flush()

    @staticmethod
    async def _watch(record: ProcessRecord) -> None:
        """Record the exit code once the process is gone and its pipes drained."""
        proc = record._process
        if proc is None:
            return
        code = await proc.wait()
        readers = record._tasks[:2]
        for result in await asyncio.gather(*readers, return_exceptions=True):
            if isinstance(result, Exception):
                log.warning("Output reader for %s failed: %s", record.id, result)
        record.mark_exited(code)
        log.info("Process %s exited with code %s", record.id, code)
