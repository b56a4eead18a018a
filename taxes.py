"""
Panama personal income tax (ISR), 2025 table.

We model: a tax-free threshold of $11,000 and two marginal bands on top of it.
The same table serves the payroll engine (monthly salary annualized) and the
freelance solver (gross income minus deductible expenses).

Freelancers may also configure a custom rate; that rate is applied flat to the
excess over the exemption. Which mode applies is decided by
`tax_mode_for_rate`.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

EXEMPT_THRESHOLD = 11_000


@dataclass(frozen=True)
class Bracket:
    upper: float  # upper limit of bracket (inclusive); math.inf for top
    rate: float   # marginal rate, e.g. 0.15


PANAMA_ISR_2025: List[Bracket] = [
    Bracket(upper=EXEMPT_THRESHOLD, rate=0.0),
    Bracket(upper=50_000, rate=0.15),
    Bracket(upper=math.inf, rate=0.25),
]


class TaxMode(Enum):
    PROGRESSIVE = "progressive"
    FLAT_ABOVE_THRESHOLD = "flat_above_threshold"


def progressive_tax(income: float, brackets: List[Bracket] = PANAMA_ISR_2025) -> Tuple[float, int]:
    """Return (annual tax, marginal rate in percent) for annual taxable income."""
    if income <= 0:
        return 0.0, 0
    tax = 0.0
    last_upper = 0.0
    marginal = 0.0
    for b in brackets:
        if income <= last_upper:
            break
        width = min(income, b.upper) - last_upper
        tax += width * b.rate
        marginal = b.rate
        last_upper = b.upper
    return tax, int(round(marginal * 100))


def flat_tax_above_threshold(income: float, rate_percent: float) -> float:
    if income <= EXEMPT_THRESHOLD:
        return 0.0
    return (income - EXEMPT_THRESHOLD) * (rate_percent / 100.0)


# Rates that stand for the DGI table itself rather than a custom flat rate.
PROGRESSIVE_TRIGGER_RATES = frozenset(int(round(b.rate * 100)) for b in PANAMA_ISR_2025 if b.rate > 0)


def tax_mode_for_rate(rate_percent: float) -> TaxMode:
    """A configured rate equal to one of the table's marginal rates selects the table."""
    if rate_percent in PROGRESSIVE_TRIGGER_RATES:
        return TaxMode.PROGRESSIVE
    return TaxMode.FLAT_ABOVE_THRESHOLD


def income_tax(income: float, rate_percent: float, mode: TaxMode = None) -> float:
    if mode is None:
        mode = tax_mode_for_rate(rate_percent)
    if mode is TaxMode.PROGRESSIVE:
        return progressive_tax(income)[0]
    return flat_tax_above_threshold(income, rate_percent)
