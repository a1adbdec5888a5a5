"""Tool handlers: validation, launch presets, and the error boundary.

Every public coroutine here backs one MCP tool.  Handled failures come back
as ``{"error": ...}`` results; only ValidationError escapes, so the protocol
layer reports it as a failed call.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from collections.abc import Awaitable, Callable
from typing import Any

from react_mcp import files, manifest
from react_mcp.config import Config
from react_mcp.errors import (
    AlreadyExists,
    ExecError,
    SpawnError,
    ToolFailure,
    ValidationError,
)
from react_mcp.process_manager import CommandExecutor, ProcessSupervisor

log = logging.getLogger(__name__)

Result = dict[str, Any]


def _require(value: Any, what: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{what} is required")


def tool_boundary(prefix: str) -> Callable[
    [Callable[..., Awaitable[Result]]], Callable[..., Awaitable[Result]]
]:
    """Turn handled failures into an ``error`` result prefixed with ``prefix``."""

    def decorator(fn: Callable[..., Awaitable[Result]]) -> Callable[..., Awaitable[Result]]:
        @functools.wraps(fn)
        async def wrapper(*args: Any, **kwargs: Any) -> Result:
            try:
                return await fn(*args, **kwargs)
            except (ExecError, SpawnError) as exc:
                log.warning("%s: %s", prefix, exc)
                return {
                    "error": f"{prefix}: {exc}",
                    "stderr": getattr(exc, "stderr", ""),
                }
            except (ToolFailure, OSError) as exc:
                log.warning("%s: %s", prefix, exc)
                return {"error": f"{prefix}: {exc}"}

        return wrapper

    return decorator


class ToolHandlers:
    def __init__(
        self,
        supervisor: ProcessSupervisor,
        executor: CommandExecutor | None = None,
        config: Config | None = None,
    ) -> None:
        self.supervisor = supervisor
        self.executor = executor or CommandExecutor()
        self.config = config or Config()

    # ------------------------------------------------------------------
    # Launch presets
    # ------------------------------------------------------------------

    @tool_boundary("Error creating React app")
    async def create_app(
        self,
        name: str,
        template: str | None = None,
        directory: str | None = None,
    ) -> Result:
        _require(name, "Project name")

        base_dir = self.config.resolve_directory(directory)
        project_dir = os.path.join(base_dir, name)
        if os.path.exists(project_dir):
            raise AlreadyExists(project_dir)

        args = [name]
        if template:
            args += ["--template", template]

        log.info("Creating React app %r in %s", name, base_dir)
        record = await self.supervisor.launch(self.config.scaffold_command, args, base_dir)
        return {
            "message": f'Creating React app "{name}" in {project_dir}',
            "processId": record.id,
            "projectDir": project_dir,
        }

    @tool_boundary("Error running React app")
    async def run_app(self, project_path: str) -> Result:
        _require(project_path, "Project path")

        manifest.require_dependency(project_path, self.config.required_dependency)
        record = await self.supervisor.launch(self.config.dev_command, cwd=project_path)
        return {
            "message": f"Starting React development server in {project_path}",
            "processId": record.id,
            "note": (
                "The development server should be accessible at "
                f"{self.config.dev_server_url}"
            ),
        }

    @tool_boundary("Error installing package")
    async def install_package(
        self,
        package_name: str,
        directory: str | None = None,
        dev: bool = False,
    ) -> Result:
        _require(package_name, "Package name")

        working_dir = directory or os.getcwd()
        manifest.load_manifest(working_dir)

        args = [package_name, "--save-dev"] if dev else [package_name]
        record = await self.supervisor.launch(self.config.install_command, args, working_dir)
        return {
            "message": f"Installing {package_name} in {working_dir}",
            "processId": record.id,
            "command": record.command_line,
        }

    # ------------------------------------------------------------------
    # Blocking command
    # ------------------------------------------------------------------

    @tool_boundary("Error executing command")
    async def run_command(self, command: str, directory: str | None = None) -> Result:
        _require(command, "Command")

        result = await self.executor.run(command, cwd=directory)
        return {
            "command": result.command,
            "directory": result.directory,
            "output": result.stdout,
            "stderr": result.stderr,
        }

    # ------------------------------------------------------------------
    # Process lifecycle
    # ------------------------------------------------------------------

    @tool_boundary("Error getting process output")
    async def get_process_output(self, process_id: str) -> Result:
        _require(process_id, "Process ID")
        return self.supervisor.status(process_id).to_dict()

    @tool_boundary("Error stopping process")
    async def stop_process(self, process_id: str, wait: bool = False) -> Result:
        _require(process_id, "Process ID")

        record = self.supervisor.terminate(process_id)
        result: Result = {
            "message": f"Process {process_id} stopped",
            "command": record.command_line,
            "directory": record.cwd,
        }
        if wait:
            try:
                result["exitCode"] = await self.supervisor.wait(
                    process_id, timeout=self.config.stop_wait_seconds,
                )
            except asyncio.TimeoutError:
                # Still shutting down; report what we know
                result["exitCode"] = None
        return result

    @tool_boundary("Error listing processes")
    async def list_processes(self) -> Result:
        processes = [
            snapshot.to_dict(include_output=False)
            for snapshot in self.supervisor.list_all()
        ]
        return {"processes": processes, "count": len(processes)}

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    @tool_boundary("Error editing file")
    async def edit_file(self, file_path: str, content: str) -> Result:
        _require(file_path, "File path")
        if content is None:
            raise ValidationError("File content is required")

        size = files.write_text(file_path, content)
        return {
            "message": f"File {file_path} updated successfully",
            "filePath": file_path,
            "size": size,
        }

    @tool_boundary("Error reading file")
    async def read_file(self, file_path: str) -> Result:
        _require(file_path, "File path")

        content, size = files.read_text(file_path)
        return {"filePath": file_path, "content": content, "size": size}
