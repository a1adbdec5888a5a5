from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_PORT = 8901


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("0", "false", "no", "off")


@dataclass(frozen=True)
class Config:
    base_directory: str = str(Path.home())
    log_dir: str = "logs"
    audit_enabled: bool = True
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    scaffold_command: str = "npx create-react-app"
    dev_command: str = "npm start"
    install_command: str = "npm install"
    dev_server_url: str = "http://localhost:3000"
    required_dependency: str = "react"
    stop_wait_seconds: float = 10.0

    def resolve_directory(self, directory: str | None = None) -> str:
        """Where create-app puts new projects.

        create-app                 ->  base_directory
        create-app directory=web   ->  base_directory/web
        create-app directory=/tmp  ->  /tmp   (absolute paths used as-is)
        """
        base = Path(self.base_directory).expanduser()
        if not directory:
            return str(base)
        path = Path(directory).expanduser()
        return str(path if path.is_absolute() else base / path)

    @classmethod
    def from_env(cls, env_path: str | Path | None = None) -> Config:
        load_dotenv(env_path)

        return cls(
            base_directory=os.getenv("REACT_MCP_BASE_DIR", str(Path.home())),
            log_dir=os.getenv("REACT_MCP_LOG_DIR", "logs"),
            audit_enabled=_env_bool("REACT_MCP_AUDIT", True),
            host=os.getenv("REACT_MCP_HOST", "127.0.0.1"),
            port=int(os.getenv("REACT_MCP_PORT", str(DEFAULT_PORT))),
            scaffold_command=os.getenv("REACT_MCP_SCAFFOLD_COMMAND", "npx create-react-app"),
            dev_command=os.getenv("REACT_MCP_DEV_COMMAND", "npm start"),
            install_command=os.getenv("REACT_MCP_INSTALL_COMMAND", "npm install"),
            dev_server_url=os.getenv("REACT_MCP_DEV_SERVER_URL", "http://localhost:3000"),
            required_dependency=os.getenv("REACT_MCP_REQUIRED_DEPENDENCY", "react"),
            stop_wait_seconds=float(os.getenv("REACT_MCP_STOP_WAIT", "10")),
        )
