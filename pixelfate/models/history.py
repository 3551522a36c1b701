"""
History log of completed sessions.

INVARIANT: Records are immutable snapshots taken at completion time.
INVARIANT: The log keeps at most `limit` records; the oldest is evicted first.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from pixelfate.config import settings


@dataclass(frozen=True, slots=True)
class HistoryRecord:
    """
    Snapshot of one completed session.

    Attributes:
        id: Millisecond timestamp, strictly increasing within a log
        time: ISO-8601 completion time
        mbti: Four-letter personality code
        profession: Title looked up for the code
        narrative: Narrative text shown at completion
        cards: The four final cards in slot order (see CardInstance.to_record)
    """

    id: int
    time: str
    mbti: str
    profession: str
    narrative: str
    cards: tuple[dict[str, Any], ...] = ()


@dataclass
class HistoryLog:
    """Capped FIFO of HistoryRecords, oldest first."""

    records: list[HistoryRecord] = field(default_factory=list)
    limit: int = field(default_factory=lambda: settings.history_limit)

    def __post_init__(self) -> None:
        self._trim()

    def append(self, record: HistoryRecord) -> None:
        self.records.append(record)
        self._trim()

    def _trim(self) -> None:
        overflow = len(self.records) - self.limit
        if overflow > 0:
            del self.records[:overflow]

    def next_id(self, now_ms: int) -> int:
        """An id for a new record: the timestamp, bumped past the newest id."""
        if self.records and self.records[-1].id >= now_ms:
            return self.records[-1].id + 1
        return now_ms

    def latest(self) -> HistoryRecord | None:
        return self.records[-1] if self.records else None

    def clear(self) -> None:
        self.records.clear()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(self.records)
