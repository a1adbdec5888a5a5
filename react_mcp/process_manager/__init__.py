"""Process supervision: background launches, output capture, termination.

  - ProcessSupervisor: non-blocking launch, status, terminate, shutdown cleanup
  - ProcessRegistry:   every process launched in this run, keyed by id
  - CommandExecutor:   run a command to completion (blocking, unregistered)
"""

from react_mcp.process_manager.executor import CommandExecutor, CommandResult
from react_mcp.process_manager.models import ProcessRecord, ProcessSnapshot
from react_mcp.process_manager.output import OutputBuffer
from react_mcp.process_manager.registry import (
    ProcessRegistry,
    counter_ids,
    random_ids,
)
from react_mcp.process_manager.supervisor import ProcessSupervisor

__all__ = [
    "CommandExecutor",
    "CommandResult",
    "OutputBuffer",
    "ProcessRecord",
    "ProcessRegistry",
    "ProcessSnapshot",
    "ProcessSupervisor",
    "counter_ids",
    "random_ids",
]
