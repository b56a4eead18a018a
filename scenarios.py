from dataclasses import replace
from typing import Optional

from freelance import FreelanceInput, solve_hourly_rate
from solver import SolverSettings


def without_legal_deductions(inp: FreelanceInput) -> FreelanceInput:
    """Same plan with ISR, CSS and education insurance switched off."""
    return replace(inp, income_tax=0.0, social_security=0.0, education_insurance=0.0)


def compare(inp: FreelanceInput, variants: list[tuple[str, dict]] = None,
            settings: Optional[SolverSettings] = None):
    """
    variants: list of (name, overrides-dict)
    returns: dict name -> FreelanceResult, always including the base plan
    and the plan without legal deductions
    """
    res = {
        "Con deducciones": solve_hourly_rate(inp, settings),
        "Sin deducciones legales": solve_hourly_rate(without_legal_deductions(inp), settings),
    }
    for name, edits in variants or []:
        res[name] = solve_hourly_rate(replace(inp, **edits), settings)
    return res
