"""State for launched processes and the snapshots handed out to callers."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from react_mcp.process_manager.output import OutputBuffer


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProcessRecord:
    """One background process launched by the supervisor.

    ``id`` is assigned by the registry.  ``exit_code`` stays ``None`` until
    the process has exited and both pipes have been drained; it is set once
    through :meth:`mark_exited` and never changes afterwards.
    """

    command: str
    args: list[str]
    cwd: str
    id: str = ""
    pid: int | None = None
    started_at: datetime = field(default_factory=_now)
    stdout: OutputBuffer = field(default_factory=OutputBuffer)
    stderr: OutputBuffer = field(default_factory=OutputBuffer)
    _exit_code: int | None = field(default=None, repr=False)
    _process: asyncio.subprocess.Process | None = field(default=None, repr=False)
    _tasks: list[asyncio.Task[None]] = field(default_factory=list, repr=False)
    _exited: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def exit_code(self) -> int | None:
        return self._exit_code

    @property
    def is_running(self) -> bool:
        return self._exit_code is None

    @property
    def command_line(self) -> str:
        return " ".join([self.command, *self.args])

    def elapsed(self, now: datetime | None = None) -> float:
        return ((now or _now()) - self.started_at).total_seconds()

    def mark_exited(self, code: int) -> None:
        if self._exit_code is not None:
            raise RuntimeError(f"Process {self.id} already exited with {self._exit_code}")
        self.stdout.freeze()
        self.stderr.freeze()
        self._exit_code = code
        self._exited.set()

    async def wait_exited(self) -> int:
        await self._exited.wait()
        return self._exit_code  # type: ignore[return-value]

    def snapshot(self, now: datetime | None = None) -> ProcessSnapshot:
        return ProcessSnapshot(
            process_id=self.id,
            command=self.command_line,
            directory=self.cwd,
            is_running=self.is_running,
            exit_code=self._exit_code,
            output=self.stdout.text(),
            error_output=self.stderr.text(),
            start_time=self.started_at,
            run_time=int(self.elapsed(now)),
        )


@dataclass(frozen=True)
class ProcessSnapshot:
    process_id: str
    command: str
    directory: str
    is_running: bool
    exit_code: int | None
    output: str
    error_output: str
    start_time: datetime
    run_time: int  # whole seconds

    def to_dict(self, include_output: bool = True) -> dict[str, Any]:
        """Render in the wire shape used by the process tools."""
        result: dict[str, Any] = {
            "processId": self.process_id,
            "command": self.command,
            "directory": self.directory,
            "isRunning": self.is_running,
            "exitCode": self.exit_code,
        }
        if include_output:
            result["output"] = self.output
            result["errorOutput"] = self.error_output
        result["startTime"] = self.start_time.isoformat()
        result["runTime"] = f"{self.run_time} seconds"
        return result
