"""Append-only output buffers fed from a child process's pipes."""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field


@dataclass
class OutputBuffer:
    """Accumulates one stream's text in arrival order.

    Bytes go in through :meth:`feed`, which decodes incrementally so a UTF-8
    sequence split across two reads still comes out as one character.  Once
    the stream has been drained the owner calls :meth:`freeze`; from then on
    the content never changes.
    """

    encoding: str = "utf-8"
    _chunks: list[str] = field(default_factory=list)
    _length: int = 0
    _seq: int = 0  # one per non-empty append
    _frozen: bool = False
    _decoder: codecs.IncrementalDecoder | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")

    def append(self, data: str) -> None:
        if self._frozen:
            raise RuntimeError("Output buffer is frozen")
        if not data:
            return
        self._chunks.append(data)
        self._length += len(data)
        self._seq += 1

    def feed(self, chunk: bytes) -> None:
        """Decode a raw chunk and append whatever text it completes."""
        self.append(self._decoder.decode(chunk))

    def flush(self) -> None:
        """Emit any partial sequence still held by the decoder."""
        self.append(self._decoder.decode(b"", final=True))

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def seq(self) -> int:
        return self._seq

    def text(self) -> str:
        # Collapse the chunk list so repeated status reads stay cheap.
        if len(self._chunks) > 1:
            self._chunks = ["".join(self._chunks)]
        return self._chunks[0] if self._chunks else ""

    def __len__(self) -> int:
        return self._length
