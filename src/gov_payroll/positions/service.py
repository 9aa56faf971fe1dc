from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from ..common.money import to_money
from ..common.validators import parse_decimal, require_money_range, require_non_empty, require_non_negative
from ..core.exceptions import NotFoundError, ValidationError
from .model import Position
from .repository import PositionRepository


class PositionService:
    """Use case: maintain the position catalog."""

    def __init__(self, positions: PositionRepository):
        self._positions = positions

    def list_positions(self) -> Sequence[Position]:
        return self._positions.list_all()

    def get_position(self, position_id: int) -> Position:
        position = self._positions.get_by_id(position_id)
        if not position:
            raise NotFoundError("Position not found")
        return position

    @staticmethod
    def _validated(name: Any, base_pay: Any, position_allowance: Any, overtime_rate: Any) -> dict:
        name = require_non_empty(name, "Position name")
        base = require_money_range(parse_decimal(base_pay, "Base pay"), "Base pay")
        if base <= 0:
            raise ValidationError("Base pay must be greater than 0")
        allowance = require_non_negative(parse_decimal(position_allowance, "Position allowance"), "Position allowance")
        rate = require_non_negative(parse_decimal(overtime_rate, "Overtime rate"), "Overtime rate")
        require_money_range(allowance, "Position allowance")
        require_money_range(rate, "Overtime rate")
        return {
            "name": name,
            "base_pay": to_money(base),
            "position_allowance": to_money(allowance),
            "overtime_rate": to_money(rate),
        }

    def create_position(
        self,
        *,
        name: str,
        base_pay: Any,
        position_allowance: Any = Decimal("0"),
        overtime_rate: Any = Decimal("0"),
    ) -> Position:
        fields = self._validated(name, base_pay, position_allowance, overtime_rate)
        position_id = self._positions.create(**fields)
        return self.get_position(position_id)

    def update_position(
        self,
        position_id: int,
        *,
        name: str,
        base_pay: Any,
        position_allowance: Any = Decimal("0"),
        overtime_rate: Any = Decimal("0"),
    ) -> Position:
        self.get_position(position_id)
        fields = self._validated(name, base_pay, position_allowance, overtime_rate)
        self._positions.update(position_id, **fields)
        return self.get_position(position_id)

    def delete_position(self, position_id: int) -> None:
        """Delete a position; employees holding it are left without a position."""
        self.get_position(position_id)
        self._positions.delete_by_id(position_id)
