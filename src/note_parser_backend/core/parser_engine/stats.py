"""
Parser statistics store.

Cumulative invocation counts and running average durations per field
parser. One store is owned by each orchestrator, so independent
orchestrators never share counters.
"""

import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class ParserStatsEntry:
    """Observed performance of one field parser."""
    invocations: int = 0
    average_duration_ms: float = 0.0
    last_duration_ms: float = 0.0
    failures: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ParserStats:
    """Thread-safe store of per-parser statistics."""

    def __init__(self):
        self._entries: Dict[str, ParserStatsEntry] = {}
        self._lock = threading.Lock()

    def record(self, parser_name: str, duration_ms: float, failed: bool = False) -> ParserStatsEntry:
        """Record one invocation and update the running average."""
        with self._lock:
            entry = self._entries.setdefault(parser_name, ParserStatsEntry())
            entry.invocations += 1
            total = entry.invocations
            entry.average_duration_ms = (
                (entry.average_duration_ms * (total - 1) + duration_ms) / total
            )
            entry.last_duration_ms = duration_ms
            if failed:
                entry.failures += 1
            return ParserStatsEntry(**asdict(entry))

    def get(self, parser_name: str) -> Optional[ParserStatsEntry]:
        with self._lock:
            entry = self._entries.get(parser_name)
            return ParserStatsEntry(**asdict(entry)) if entry else None

    def snapshot(self) -> Dict[str, ParserStatsEntry]:
        """Copy of every entry, safe to read while passes continue."""
        with self._lock:
            return {name: ParserStatsEntry(**asdict(entry)) for name, entry in self._entries.items()}

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, parser_name: str) -> bool:
        return parser_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
