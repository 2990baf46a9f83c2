# src/staymodel/api/schemas.py
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from staymodel.analysis.alos import MAX_ALOS_NIGHTS
from staymodel.domain.property import AcquisitionCost, FinancingTerms, IncomeAssumption


# --------------------------------------------
# Calculation input (as a record store would hand it over)
# --------------------------------------------

class ExpenseRow(BaseModel):
    """
    Flat stored expense row. `amount` may be a number or a numeric string
    ("75", "10%"); coercion happens in services.inputs.
    """
    model_config = ConfigDict(extra="allow")

    amount: Any = 0
    frequency: str | None = "monthly"
    is_percentage: bool = False
    category: str | None = None


class CalculateRequest(BaseModel):
    """
    Missing acquisition / financing / income sections are filled with
    baseline defaults before calculating.
    """
    model_config = ConfigDict(extra="allow")

    acquisition: AcquisitionCost | None = None
    financing: FinancingTerms | None = None
    income: IncomeAssumption | None = None
    expenses: list[ExpenseRow] = Field(default_factory=list)
    unit_count: int | None = None


class AlosRequest(CalculateRequest):
    alos_min: int | None = Field(None, ge=1, le=MAX_ALOS_NIGHTS)
    alos_max: int | None = Field(None, ge=1, le=MAX_ALOS_NIGHTS)


class PropertiesRequest(BaseModel):
    """Keyed by property id; null means the property has no financials."""
    properties: dict[str, CalculateRequest | None]
    workers: int | None = Field(None, ge=1, le=64)


# --------------------------------------------
# Responses (permissive: the result dicts grow over time)
# --------------------------------------------

class CalculateResponse(BaseModel):
    model_config = ConfigDict(extra="allow")


class AlosResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    points: list[dict[str, Any]]
    indicators: dict[str, Any]


class CompareResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    rows: list[dict[str, Any]]
    best: dict[str, str | None]


class PortfolioResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    portfolio: dict[str, Any]
    properties: list[dict[str, Any]]
