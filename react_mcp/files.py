from __future__ import annotations

from pathlib import Path

from react_mcp.errors import FileNotFound


def write_text(file_path: str, content: str) -> int:
    """Create or overwrite ``file_path``; returns the size in UTF-8 bytes."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode("utf-8")
    path.write_bytes(data)
    return len(data)


def read_text(file_path: str) -> tuple[str, int]:
    """Return the file's text and its size in UTF-8 bytes."""
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFound(file_path)
    content = path.read_text(encoding="utf-8")
    return content, len(content.encode("utf-8"))
