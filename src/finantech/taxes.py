# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Simplified monthly tax simulation for the three Brazilian regimes.

The rates are flat approximations on gross revenue, meant for a quick
comparison only:

- simples:   DAS 6 %
- presumido: PIS 0.65 %, COFINS 3 %, ISS 5 %
- real:      PIS 1.65 %, COFINS 7.6 %, ISS 5 %
"""

from dataclasses import dataclass
from typing import Literal

from .errors import ValidationError

TaxRegime = Literal["simples", "presumido", "real"]

TAX_RATES: dict[str, tuple[tuple[str, float], ...]] = {
    "simples": (("DAS (Simples Nacional)", 0.06),),
    "presumido": (("PIS", 0.0065), ("COFINS", 0.03), ("ISS", 0.05)),
    "real": (("PIS", 0.0165), ("COFINS", 0.076), ("ISS", 0.05)),
}

REGIME_LABELS = {
    "simples": "Simples Nacional",
    "presumido": "Lucro Presumido",
    "real": "Lucro Real",
}


@dataclass(frozen=True)
class TaxLine:
    name: str
    value: float


@dataclass(frozen=True)
class TaxResult:
    regime: str
    revenue: float
    total: float
    breakdown: tuple[TaxLine, ...]


def simulate_tax_regime(revenue: float, regime: TaxRegime) -> TaxResult:
    """
    Estimate the monthly taxes owed on `revenue` under `regime`.

    Raises
    ------
    ValidationError
        If the revenue is negative or the regime is unknown.
    """
    if revenue < 0:
        raise ValidationError("Revenue cannot be negative.")
    if regime not in TAX_RATES:
        raise ValidationError(
            f"Unknown tax regime: {regime!r}. Expected one of: {', '.join(TAX_RATES)}."
        )

    breakdown = tuple(TaxLine(name, revenue * rate) for name, rate in TAX_RATES[regime])
    return TaxResult(
        regime=regime,
        revenue=revenue,
        total=sum(line.value for line in breakdown),
        breakdown=breakdown,
    )
