from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


MILESTONE_EVERY_DAYS = 1000


class EventKind(str, Enum):
    BIRTHDAY = "birthday"
    ADVANCE = "advance"
    MILESTONE = "milestone"


@dataclass(frozen=True)
class PersonRecord:
    name: str
    date: str | None = None
    notification_before: int = 0

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> PersonRecord:
        # Values are taken as-is; type problems surface when the record is evaluated.
        return cls(
            name=row.get("name", ""),
            date=row.get("date"),
            notification_before=row.get("notification_before") or 0,
        )


@dataclass(frozen=True)
class MatchedEvent:
    kind: EventKind
    payload: str | int | None = None


@dataclass(frozen=True)
class ComposedMessage:
    subject: str
    html: str
