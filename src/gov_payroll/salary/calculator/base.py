from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ..model import SalaryComponents


class SalaryCalculator(ABC):
    """Strategy that turns salary components into a take-home total."""

    @abstractmethod
    def total(self, components: SalaryComponents) -> Decimal:
        raise NotImplementedError
