"""Health-check record types."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Columns returned by every read, in display order.
COLUMNS = ("id", "name", "feeling", "date", "created_at")

# Labels offered by the form. The server accepts any non-empty feeling.
FEELINGS = ("Great", "Good", "Okay", "Not Great", "Bad")


@dataclass(frozen=True)
class NewHealthCheck:
    """A validated submission, before the store assigns id / created_at."""

    name: str
    feeling: str
    date: str  # canonical UTC instant

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HealthCheckRecord:
    """One persisted team health check."""

    id: int | str
    name: str
    feeling: str
    date: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "HealthCheckRecord":
        return cls(
            id=row["id"],
            name=row.get("name", ""),
            feeling=row.get("feeling", ""),
            date=row.get("date", ""),
            created_at=str(row.get("created_at", "")),
        )
