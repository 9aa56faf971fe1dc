from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Position


class PositionRepository(Protocol):
    def list_all(self) -> Sequence[Position]:
        raise NotImplementedError

    def get_by_id(self, position_id: int) -> Optional[Position]:
        raise NotImplementedError

    def create(self, *, name: str, base_pay: Decimal, position_allowance: Decimal, overtime_rate: Decimal) -> int:
        raise NotImplementedError

    def update(
        self,
        position_id: int,
        *,
        name: str,
        base_pay: Decimal,
        position_allowance: Decimal,
        overtime_rate: Decimal,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, position_id: int) -> bool:
        raise NotImplementedError
