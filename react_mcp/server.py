"""MCP server exposing the React development tools over stdio or HTTP."""

from __future__ import annotations

from typing import Annotated, Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from react_mcp.audit import AuditLog
from react_mcp.config import Config
from react_mcp.handlers import ToolHandlers
from react_mcp.process_manager import CommandExecutor, ProcessSupervisor

ProcessId = Annotated[str, Field(description="ID returned when the process was launched")]


class AuditedFastMCP(FastMCP):
    """FastMCP that appends every tool listing and call to an audit log."""

    def __init__(self, *args: Any, audit: AuditLog | None = None, **kwargs: Any) -> None:
        self.audit = audit
        super().__init__(*args, **kwargs)

    async def list_tools(self):  # type: ignore[override]
        tools = await super().list_tools()
        if self.audit is not None:
            self.audit.record({"event": "list_tools", "tools": [t.name for t in tools]})
        return tools

    async def call_tool(self, name: str, arguments: dict[str, Any]):  # type: ignore[override]
        if self.audit is not None:
            self.audit.record({"event": "call_tool", "name": name, "args": arguments})
        return await super().call_tool(name, arguments)


def create_server(
    supervisor: ProcessSupervisor | None = None,
    config: Config | None = None,
    executor: CommandExecutor | None = None,
) -> AuditedFastMCP:
    """Create and configure the react-mcp server."""

    cfg = config or Config()
    sv = supervisor or ProcessSupervisor()
    handlers = ToolHandlers(sv, executor=executor, config=cfg)

    mcp = AuditedFastMCP(
        name="react-mcp",
        instructions=(
            "Creates and runs React applications and other long-running dev "
            "processes. Launch with create-app, run-app or install-package, poll "
            "get-process-output for logs, list-processes for status, and "
            "stop-process to shut them down. run-command blocks until done."
        ),
        host=cfg.host,
        port=cfg.port,
        stateless_http=True,
        audit=AuditLog(cfg.log_dir) if cfg.audit_enabled else None,
    )

    # ------------------------------------------------------------------
    # Launchers
    # ------------------------------------------------------------------
    @mcp.tool(name="create-app")
    async def create_app(
        name: Annotated[str, Field(description="Name of the React app")],
        template: Annotated[
            str | None,
            Field(description="Template to use (e.g., typescript, cra-template-pwa)"),
        ] = None,
        directory: Annotated[
            str | None,
            Field(description="Base directory to create the app in (defaults to the configured base directory)"),
        ] = None,
    ) -> dict:
        """Create a new React application in the background."""
        return await handlers.create_app(name, template=template, directory=directory)

    @mcp.tool(name="run-app")
    async def run_app(
        projectPath: Annotated[str, Field(description="Path to the React project folder")],
    ) -> dict:
        """Run a React application in development mode."""
        return await handlers.run_app(projectPath)

    @mcp.tool(name="install-package")
    async def install_package(
        packageName: Annotated[
            str, Field(description="Name of the package to install (can include version)"),
        ],
        directory: Annotated[
            str | None,
            Field(description="Directory of the project (defaults to current directory)"),
        ] = None,
        dev: Annotated[bool, Field(description="Whether to install as a dev dependency")] = False,
    ) -> dict:
        """Install an npm package in a project."""
        return await handlers.install_package(packageName, directory=directory, dev=dev)

    @mcp.tool(name="run-command")
    async def run_command(
        command: Annotated[str, Field(description="Command to execute")],
        directory: Annotated[
            str | None,
            Field(description="Directory to run the command in (defaults to current directory)"),
        ] = None,
    ) -> dict:
        """Run a terminal command and wait for it to finish."""
        return await handlers.run_command(command, directory=directory)

    # ------------------------------------------------------------------
    # Process lifecycle
    # ------------------------------------------------------------------
    @mcp.tool(name="get-process-output")
    async def get_process_output(processId: ProcessId) -> dict:
        """Get the output from a running or completed process."""
        return await handlers.get_process_output(processId)

    @mcp.tool(name="stop-process")
    async def stop_process(
        processId: ProcessId,
        wait: Annotated[
            bool, Field(description="Wait for the process to exit and report its exit code"),
        ] = False,
    ) -> dict:
        """Stop a running process.

        Sends SIGTERM to the process group and returns immediately unless
        wait is set.
        """
        return await handlers.stop_process(processId, wait=wait)

    @mcp.tool(name="list-processes")
    async def list_processes() -> dict:
        """List all processes launched by this server, running or finished."""
        return await handlers.list_processes()

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------
    @mcp.tool(name="edit-file")
    async def edit_file(
        filePath: Annotated[str, Field(description="Path to the file to edit")],
        content: Annotated[str, Field(description="Content to write to the file")],
    ) -> dict:
        """Create or edit a file."""
        return await handlers.edit_file(filePath, content)

    @mcp.tool(name="read-file")
    async def read_file(
        filePath: Annotated[str, Field(description="Path to the file to read")],
    ) -> dict:
        """Read the contents of a file."""
        return await handlers.read_file(filePath)

    return mcp
