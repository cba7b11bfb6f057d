"""
Open document store shared by the dispatcher and its worker threads
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer"""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class DocumentStore:
    """Latest full text per URI with a generation counter per change"""

    def __init__(self):
        self._lock = ReadWriteLock()
        self._texts: Dict[str, str] = {}
        self._generations: Dict[str, int] = {}

    def open(self, uri: str, text: str) -> int:
        return self.change(uri, text)

    def change(self, uri: str, text: str) -> int:
        with self._lock.write():
            self._texts[uri] = text
            generation = self._generations.get(uri, 0) + 1
            self._generations[uri] = generation
            return generation

    def close(self, uri: str):
        with self._lock.write():
            self._texts.pop(uri, None)
            # generations stay monotonic across reopen
            self._generations[uri] = self._generations.get(uri, 0) + 1

    @contextmanager
    def read(self, uri: str) -> Iterator[Optional[str]]:
        """Hold the shared lock while a request works on the text"""
        with self._lock.read():
            yield self._texts.get(uri)

    def generation(self, uri: str) -> int:
        with self._lock.read():
            return self._generations.get(uri, 0)

    def __contains__(self, uri: str) -> bool:
        with self._lock.read():
            return uri in self._texts

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._texts)
