"""react-mcp: MCP tools for creating, running and supervising React dev processes.

Can run standalone:
    python -m react_mcp
"""

from react_mcp.process_manager import CommandExecutor, ProcessSupervisor
from react_mcp.server import create_server

__all__ = ["CommandExecutor", "ProcessSupervisor", "create_server"]
