from typing import Hashable, Mapping

from staymodel.domain.ports import FinancialsRepository
from staymodel.domain.property import CalculationInput


class InMemoryFinancialsRepository(FinancialsRepository):
    def __init__(self, items: Mapping[Hashable, CalculationInput | None] | None = None) -> None:
        # None values model ids that are known but have no financials
        self._items: dict[Hashable, CalculationInput | None] = dict(items or {})

    def put(self, property_id: Hashable, inp: CalculationInput | None) -> None:
        self._items[property_id] = inp

    def get_calculation_input(self, property_id: Hashable) -> CalculationInput | None:
        return self._items.get(property_id)

    def list_property_ids(self) -> list[Hashable]:
        return list(self._items)
