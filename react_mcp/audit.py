"""Append-only record of every tool listing and invocation.

Two files live in the log directory: ``react-mcp-logs.jsonl`` holds one JSON
object per event, ``react-mcp-logs.txt`` the same events as readable lines.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

JSON_LOG_NAME = "react-mcp-logs.jsonl"
TEXT_LOG_NAME = "react-mcp-logs.txt"


class AuditLog:
    def __init__(self, log_dir: str | Path) -> None:
        self.log_dir = Path(log_dir)
        self.json_path = self.log_dir / JSON_LOG_NAME
        self.text_path = self.log_dir / TEXT_LOG_NAME

    def record(self, event: dict[str, Any]) -> None:
        """Append ``event``. Write failures are logged, never raised."""
        timestamp = datetime.now(timezone.utc).isoformat()
        payload = json.dumps(event, default=str)
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            with self.json_path.open("a", encoding="utf-8") as f:
                f.write(json.dumps({"timestamp": timestamp, **event}, default=str) + "\n")
            with self.text_path.open("a", encoding="utf-8") as f:
                f.write(f"[{timestamp}] {payload}\n")
        except OSError:
            log.exception("Failed to write audit log entry to %s", self.log_dir)
