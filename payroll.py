import logging
from dataclasses import dataclass, asdict
from datetime import date, datetime
from enum import Enum
from typing import Optional

from config import (CSS_ELIGIBILITY_DATE, CSS_RATE_EMPLOYEE, CSS_RATE_INDEPENDENT,
                    EDUCATION_RATE)
from solver import SolverSettings, StepPolicy, find_input_for_target
from taxes import progressive_tax

logger = logging.getLogger(__name__)

# ~1 / (1 - combined marginal deduction rate)
GROSS_SALARY_STEP = StepPolicy(default=1.2)
GROSS_SALARY_TOLERANCE = 1.0   # one balboa


class WorkerClass(Enum):
    EMPLOYEE = "employee"
    INDEPENDENT = "independent"

    @classmethod
    def from_flag(cls, is_independent: bool) -> "WorkerClass":
        return cls.INDEPENDENT if is_independent else cls.EMPLOYEE


CSS_RATES = {
    WorkerClass.EMPLOYEE: CSS_RATE_EMPLOYEE,
    WorkerClass.INDEPENDENT: CSS_RATE_INDEPENDENT,  # IVM only; E&M is voluntary
}


@dataclass(frozen=True)
class PayrollInput:
    birth_date: date
    monthly_salary: float
    worker_class: WorkerClass = WorkerClass.EMPLOYEE


@dataclass(frozen=True)
class EstimationInput:
    birth_date: date
    target_net_salary: float
    worker_class: WorkerClass = WorkerClass.EMPLOYEE


@dataclass
class PayrollResult:
    gross_salary: float
    is_css_eligible: bool
    css_amount: float
    css_rate: float
    income_tax_amount: float   # monthly
    income_tax_rate: int       # marginal bracket rate of the annualized salary
    education_amount: float
    education_rate: float
    total_deductions: float
    net_salary: float


@dataclass
class EstimationResult(PayrollResult):
    estimated_gross_salary: float = 0.0
    converged: bool = True
    iterations: int = 0


def _as_date(d) -> date:
    return d.date() if isinstance(d, datetime) else d


def is_css_eligible(birth_date: date) -> bool:
    """Workers born on or after 1972-01-01 contribute to CSS (Ley 51 de 2005)."""
    return _as_date(birth_date) >= CSS_ELIGIBILITY_DATE


def compute_deductions(inp: PayrollInput) -> PayrollResult:
    salary = inp.monthly_salary
    eligible = is_css_eligible(inp.birth_date)

    css_rate = CSS_RATES[inp.worker_class]
    css_amount = salary * css_rate / 100 if eligible else 0.0

    annual_tax, tax_rate = progressive_tax(salary * 12)
    monthly_tax = annual_tax / 12

    education_amount = salary * EDUCATION_RATE / 100

    total = css_amount + monthly_tax + education_amount
    return PayrollResult(
        gross_salary=salary,
        is_css_eligible=eligible,
        css_amount=css_amount,
        css_rate=css_rate,
        income_tax_amount=monthly_tax,
        income_tax_rate=tax_rate,
        education_amount=education_amount,
        education_rate=EDUCATION_RATE,
        total_deductions=total,
        net_salary=salary - total,
    )


def net_salary(gross: float, birth_date: date, worker_class: WorkerClass) -> float:
    return compute_deductions(PayrollInput(birth_date, gross, worker_class)).net_salary


def estimate_gross_salary(inp: EstimationInput, settings: Optional[SolverSettings] = None) -> EstimationResult:
    """Gross monthly salary whose net matches `target_net_salary` within one balboa."""
    if settings is None:
        settings = SolverSettings(tolerance=GROSS_SALARY_TOLERANCE)

    sol = find_input_for_target(
        lambda gross: net_salary(gross, inp.birth_date, inp.worker_class),
        target=inp.target_net_salary,
        seed=inp.target_net_salary,
        settings=settings,
        step=GROSS_SALARY_STEP,
        floor=0.0,
    )
    logger.debug("Estimated gross %.2f for net %.2f in %d iterations",
                 sol.value, inp.target_net_salary, sol.iterations)

    breakdown = compute_deductions(PayrollInput(inp.birth_date, sol.value, inp.worker_class))
    return EstimationResult(
        **asdict(breakdown),
        estimated_gross_salary=sol.value,
        converged=sol.converged,
        iterations=sol.iterations,
    )
