"""Shared fixtures: a supervisor with deterministic ids that cleans up after itself."""

from __future__ import annotations

import asyncio

import pytest

from react_mcp.config import Config
from react_mcp.handlers import ToolHandlers
from react_mcp.process_manager import ProcessRegistry, ProcessSupervisor, counter_ids


async def wait_all(supervisor: ProcessSupervisor, timeout: float = 10.0) -> None:
    """Wait until every launched process has exited."""
    await asyncio.wait_for(
        asyncio.gather(*(r.wait_exited() for r in supervisor.registry.list())),
        timeout=timeout,
    )


@pytest.fixture
async def supervisor():
    sv = ProcessSupervisor(ProcessRegistry(counter_ids()))
    yield sv
    sv.shutdown_cleanup()
    await wait_all(sv)


@pytest.fixture
def config(tmp_path):
    return Config(
        base_directory=str(tmp_path),
        log_dir=str(tmp_path / "logs"),
        scaffold_command="echo scaffold",
        dev_command="echo dev-server started",
        install_command="echo install",
        stop_wait_seconds=5.0,
    )


@pytest.fixture
def handlers(supervisor, config):
    return ToolHandlers(supervisor, config=config)
