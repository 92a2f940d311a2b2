import threading
from contextlib import contextmanager
from itertools import count
from typing import Any, Dict, Iterator

from fastapi import Request

from ..core.exceptions import StorageNotFoundError
from ..core.logger import logger

TABLES = ("users", "portfolios", "holdings")


class MemoryDatabase:
    """Process-lifetime store for users, portfolios and holdings.

    Every table has its own id counter starting at 1. Ids are handed out
    once and never reused, even after the row is deleted.
    """

    def __init__(self):
        self.tables: Dict[str, Dict[int, Any]] = {name: {} for name in TABLES}
        self._counters = {name: count(1) for name in TABLES}
        self.lock = threading.RLock()
        self._portfolio_locks: Dict[int, threading.Lock] = {}

    def next_id(self, table: str) -> int:
        with self.lock:
            return next(self._counters[table])

    def get(self, table: str, row_id: int) -> Any:
        row = self.tables[table].get(row_id)
        if row is None:
            raise StorageNotFoundError(table, row_id)
        return row

    def put(self, table: str, row_id: int, row: Any) -> None:
        with self.lock:
            self.tables[table][row_id] = row

    def remove(self, table: str, row_id: int) -> Any:
        with self.lock:
            row = self.tables[table].pop(row_id, None)
        if row is None:
            raise StorageNotFoundError(table, row_id)
        return row

    @contextmanager
    def portfolio_lock(self, portfolio_id: int) -> Iterator[None]:
        """Serializes holding replacement for one portfolio."""
        with self.lock:
            lock = self._portfolio_locks.setdefault(portfolio_id, threading.Lock())
        with lock:
            yield


def create_database() -> MemoryDatabase:
    db = MemoryDatabase()
    logger.info("In-memory database created")
    return db


def get_db(request: Request) -> MemoryDatabase:
    return request.app.state.db
