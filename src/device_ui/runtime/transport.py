"""Transport adapters for the line-framed device channel.

The runtime never opens or configures the channel itself; it is handed
an object that yields complete inbound lines and accepts outbound ones.
"""

import sys
import threading
from abc import ABC, abstractmethod
from typing import Iterator, Optional, TextIO


class Transport(ABC):
    """Interface for a line-framed, byte-oriented channel."""

    @abstractmethod
    def lines(self) -> Iterator[str]:
        """Yields inbound lines until the channel ends."""
        pass  # pragma: no cover

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Writes one outbound message followed by a newline."""
        pass  # pragma: no cover


class StreamTransport(Transport):
    """Transport over a pair of text streams (stdin/stdout by default)."""

    def __init__(
        self,
        reader: Optional[TextIO] = None,
        writer: Optional[TextIO] = None,
    ) -> None:
        self.reader = reader or sys.stdin
        self.writer = writer or sys.stdout
        # Responses and snapshots are written from different threads.
        self._write_lock = threading.Lock()

    def lines(self) -> Iterator[str]:
        for line in self.reader:
            yield line.rstrip("\r\n")

    def write_line(self, text: str) -> None:
        with self._write_lock:
            self.writer.write(text + "\n")
            self.writer.flush()
