"""
Pool of reusable JSON decoders.
"""
import json
import queue
from contextlib import contextmanager
from typing import Any, Iterator


class ParserPool:
    """
    Lends ``json.JSONDecoder`` instances.

    Decoders are only reachable inside ``borrow()``; they go back to the pool
    on every exit path, including errors.
    """

    def __init__(self) -> None:
        self._pool: "queue.SimpleQueue[json.JSONDecoder]" = queue.SimpleQueue()

    @contextmanager
    def borrow(self) -> Iterator[json.JSONDecoder]:
        try:
            decoder = self._pool.get_nowait()
        except queue.Empty:
            decoder = json.JSONDecoder()
        try:
            yield decoder
        finally:
            self._pool.put(decoder)

    def parse(self, data: bytes) -> Any:
        """Decode a UTF-8 JSON document."""
        text = data.decode("utf-8")
        with self.borrow() as decoder:
            return decoder.decode(text)

    def size(self) -> int:
        """Number of idle decoders."""
        return self._pool.qsize()
