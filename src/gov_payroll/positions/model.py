from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Position:
    """Job position with its pay scale."""

    position_id: int
    name: str
    base_pay: Decimal
    position_allowance: Decimal
    overtime_rate: Decimal

    def to_dict(self) -> dict:
        return {
            "id": self.position_id,
            "name": self.name,
            "base_pay": self.base_pay,
            "position_allowance": self.position_allowance,
            "overtime_rate": self.overtime_rate,
        }
