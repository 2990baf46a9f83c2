# src/staymodel/domain/ports.py
from __future__ import annotations

from typing import Any, Hashable, Protocol, TypedDict

from staymodel.domain.property import CalculationInput


# ----------------------------
# Stored expense rows
# ----------------------------

class ExpenseRecord(TypedDict, total=False):
    category: str
    amount: Any             # number or numeric string, "10%" allowed
    frequency: str          # monthly | annual | per_turnover | per_stay
    is_percentage: bool


# ----------------------------
# Financial record retrieval
# ----------------------------

class FinancialsRepository(Protocol):
    """
    Supplies a complete CalculationInput for a property, or None when the
    property does not exist. Defaulting partial records is the repository's
    job, not the calculator's.
    """

    def get_calculation_input(self, property_id: Hashable) -> CalculationInput | None:
        ...

    def list_property_ids(self) -> list[Hashable]:
        ...
