"""Query execution and provisioning interfaces, plus an in-process bitmap store."""
from __future__ import annotations

import re
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, Dict, List, Optional, Set, Tuple

from ..utils.logger import get_logger
from .context import RunContext

LOGGER = get_logger("benchmark.client")

Provisioner = Callable[[str, str, str], None]

_BIT_QUERY = re.compile(
    r"^(?P<call>SetBit|ClearBit)\(frame='(?P<frame>[^']*)', rowID=(?P<row>\d+), columnID=(?P<column>\d+)\)$"
)


class QueryError(RuntimeError):
    """The target service rejected or failed a query."""


def format_bit_query(call: str, frame: str, row_id: int, column_id: int) -> str:
    """Render a ``SetBit``/``ClearBit`` query in the form the server parses."""

    return f"{call}(frame='{frame}', rowID={row_id}, columnID={column_id})"


class QueryClient:
    """Executes query text against one index of a target service.

    Implementations raise on failure; the benchmark treats any exception as
    fatal for the run.
    """

    def execute_query(self, ctx: Optional[RunContext], index: str, query: str, remote: bool = True):
        raise NotImplementedError()


@dataclass
class BitResult:
    changed: bool


class InMemoryBitmapClient(QueryClient):
    """A :class:`QueryClient` backed by Python sets.

    Each ``(index, frame)`` holds a mapping of row id to the set of columns
    whose bit is on. Every executed query is recorded in :attr:`queries`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._frames: Dict[Tuple[str, str], DefaultDict[int, Set[int]]] = {}
        self.queries: List[str] = []

    def provision_index(self, host: str, index: str, frame: str) -> None:
        with self._lock:
            self._frames.setdefault((index, frame), defaultdict(set))
        LOGGER.debug("Provisioned %s/%s on %s", index, frame, host)

    def execute_query(self, ctx: Optional[RunContext], index: str, query: str, remote: bool = True) -> BitResult:
        match = _BIT_QUERY.match(query)
        if match is None:
            raise QueryError(f"unsupported query: {query}")
        row = int(match.group("row"))
        column = int(match.group("column"))

        with self._lock:
            rows = self._frames.get((index, match.group("frame")))
            if rows is None:
                raise QueryError(f"frame not found: {index}/{match.group('frame')}")
            columns = rows[row]
            if match.group("call") == "SetBit":
                changed = column not in columns
                columns.add(column)
            else:
                changed = column in columns
                columns.discard(column)
            self.queries.append(query)
        return BitResult(changed=changed)

    def bit(self, index: str, frame: str, row_id: int, column_id: int) -> bool:
        with self._lock:
            rows = self._frames.get((index, frame), {})
            return column_id in rows.get(row_id, ())

    def row_count(self, index: str, frame: str, row_id: int) -> int:
        with self._lock:
            rows = self._frames.get((index, frame), {})
            return len(rows.get(row_id, ()))
