from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Holiday:
    """Admin-declared holiday. At most one per calendar date."""

    holiday_id: int
    holiday_date: date
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "_id": str(self.holiday_id),
            "date": self.holiday_date.isoformat(),
            "description": self.description,
        }
