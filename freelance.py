"""
Hourly rate for a Panamanian freelancer.

The user states the NET annual income they want to keep. Business expenses
are fully deductible, so we solve for the gross income that leaves that net
after expenses, income tax and contributions, then spread the gross over the
billable hours of the year.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from expenses import annual_expenses
from solver import SolverSettings, StepPolicy, find_input_for_target
from taxes import TaxMode, income_tax

logger = logging.getLogger(__name__)

# Smaller steps close to the target to avoid oscillating around it.
FREELANCE_STEP = StepPolicy(default=1.35, tiers=((100, 1.2), (10, 1.1)))
FREELANCE_TOLERANCE = 0.01
SEED_MARGIN = 10_000
FLOOR_MARGIN = 1_000
WORKDAYS_PER_WEEK = 5


@dataclass(frozen=True)
class FreelanceInput:
    annual_income: float          # desired net
    office_rent: float = 0.0      # monthly expenses...
    equipment: float = 0.0
    insurance: float = 0.0
    marketing: float = 0.0
    training: float = 0.0
    other_expenses: float = 0.0
    income_tax: float = 15.0      # percent
    social_security: float = 0.0
    education_insurance: float = 0.0
    hours_per_week: float = 40.0
    weeks_per_year: float = 50.0
    vacation_days: float = 0.0
    tax_mode: Optional[TaxMode] = None   # None: decided by the configured income_tax rate


@dataclass
class FreelanceResult:
    hourly_rate: float
    gross_annual_income: float
    annual_expenses: float
    annual_taxes: float
    net_annual_income: float
    billable_hours: float
    taxable_income: float
    tax_savings_from_expenses: float
    converged: bool = True
    iterations: int = 0


def billable_hours(inp: FreelanceInput) -> float:
    # vacation days are counted on a 5-day week whatever hours_per_week implies
    total = inp.hours_per_week * inp.weeks_per_year
    vacation = (inp.vacation_days / WORKDAYS_PER_WEEK) * inp.hours_per_week
    return total - vacation


def total_taxes(taxable: float, inp: FreelanceInput) -> float:
    """Income tax plus flat CSS and education insurance on taxable income."""
    isr = income_tax(taxable, inp.income_tax, inp.tax_mode)
    css = taxable * (inp.social_security / 100.0)
    education = taxable * (inp.education_insurance / 100.0)
    return isr + css + education


def net_from_gross(gross: float, inp: FreelanceInput, expenses: float) -> float:
    taxable = gross - expenses
    return taxable - total_taxes(taxable, inp)


def solve_hourly_rate(inp: FreelanceInput, settings: Optional[SolverSettings] = None) -> FreelanceResult:
    if settings is None:
        settings = SolverSettings(tolerance=FREELANCE_TOLERANCE)

    expenses = annual_expenses(inp)
    hours = billable_hours(inp)

    sol = find_input_for_target(
        lambda gross: net_from_gross(gross, inp, expenses),
        target=inp.annual_income,
        seed=inp.annual_income + expenses + SEED_MARGIN,
        settings=settings,
        step=FREELANCE_STEP,
        floor=expenses,
        floor_reset=expenses + FLOOR_MARGIN,
    )
    gross = sol.value

    taxable = gross - expenses
    taxes = total_taxes(taxable, inp)
    net = round(gross - expenses - taxes, 2)

    # what the same gross would owe if nothing were deducted
    savings = total_taxes(gross, inp) - taxes

    rate = gross / hours if hours > 0 else 0.0
    logger.debug("Freelance: net %.2f -> gross %.2f, %.1f billable h, %.2f/h",
                 inp.annual_income, gross, hours, rate)

    return FreelanceResult(
        hourly_rate=rate,
        gross_annual_income=gross,
        annual_expenses=expenses,
        annual_taxes=taxes,
        net_annual_income=net,
        billable_hours=hours,
        taxable_income=taxable,
        tax_savings_from_expenses=savings,
        converged=sol.converged,
        iterations=sol.iterations,
    )
