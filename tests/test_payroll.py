from datetime import date, datetime, timedelta

import numpy as np
import pytest

from payroll import (EstimationInput, PayrollInput, WorkerClass, compute_deductions,
                     estimate_gross_salary)
from solver import SolverSettings


def test_employee_example():
    r = compute_deductions(PayrollInput(date(1980, 1, 1), 1000, WorkerClass.EMPLOYEE))

    assert r.is_css_eligible
    assert r.css_rate == 9.75
    assert r.css_amount == pytest.approx(97.50)
    assert r.income_tax_rate == 15
    assert r.income_tax_amount == pytest.approx(12.50)
    assert r.education_rate == 1.25
    assert r.education_amount == pytest.approx(12.50)
    assert r.total_deductions == pytest.approx(122.50)
    assert r.net_salary == pytest.approx(877.50)


def test_independent_example():
    r = compute_deductions(PayrollInput(date(1980, 1, 1), 1000, WorkerClass.INDEPENDENT))

    assert r.css_rate == 9.36
    assert r.css_amount == pytest.approx(93.60)
    assert r.income_tax_amount == pytest.approx(12.50)
    assert r.education_amount == pytest.approx(12.50)
    assert r.total_deductions == pytest.approx(118.60)
    assert r.net_salary == pytest.approx(881.40)


def test_worker_class_from_flag():
    assert WorkerClass.from_flag(True) is WorkerClass.INDEPENDENT
    assert WorkerClass.from_flag(False) is WorkerClass.EMPLOYEE


@pytest.mark.parametrize("worker_class", list(WorkerClass))
def test_css_eligibility_boundary(worker_class):
    on_date = compute_deductions(PayrollInput(date(1972, 1, 1), 2000, worker_class))
    day_before = compute_deductions(PayrollInput(date(1971, 12, 31), 2000, worker_class))

    assert on_date.is_css_eligible
    assert on_date.css_amount > 0
    assert not day_before.is_css_eligible
    assert day_before.css_amount == 0
    # education insurance has no eligibility gate
    assert day_before.education_amount == pytest.approx(25.0)


def test_datetime_birth_date_is_accepted():
    r = compute_deductions(PayrollInput(datetime(1972, 1, 1, 8, 30), 2000))

    assert r.is_css_eligible


def test_reported_tax_rate_is_marginal_rate():
    assert compute_deductions(PayrollInput(date(1990, 1, 1), 900)).income_tax_rate == 0
    assert compute_deductions(PayrollInput(date(1990, 1, 1), 3000)).income_tax_rate == 15
    assert compute_deductions(PayrollInput(date(1990, 1, 1), 5000)).income_tax_rate == 25


@pytest.mark.parametrize("salary", [0, 0.01, 500, 916.67, 1000, 4166.67, 4166.66, 10_000, 123_456.78, -250])
@pytest.mark.parametrize("worker_class", list(WorkerClass))
def test_totals_are_exact(salary, worker_class):
    r = compute_deductions(PayrollInput(date(1990, 1, 1), salary, worker_class))

    assert r.total_deductions == r.css_amount + r.income_tax_amount + r.education_amount
    assert r.net_salary == salary - r.total_deductions


def test_zero_salary():
    r = compute_deductions(PayrollInput(date(1990, 1, 1), 0))

    assert r.total_deductions == 0
    assert r.net_salary == 0
    assert r.income_tax_rate == 0


@pytest.mark.parametrize("birth_date", [date(1960, 5, 5), date(1990, 1, 1)])
@pytest.mark.parametrize("worker_class", list(WorkerClass))
def test_net_grows_slower_than_gross(birth_date, worker_class):
    salaries = np.linspace(0, 20_000, 801)
    nets = np.array([compute_deductions(PayrollInput(birth_date, float(s), worker_class)).net_salary
                     for s in salaries])

    net_steps = np.diff(nets)
    gross_steps = np.diff(salaries)
    assert (net_steps >= 0).all()
    assert (net_steps <= gross_steps + 1e-9).all()


# ---------- gross salary estimation ----------

def _random_cases(n, seed=7):
    rng = np.random.default_rng(seed)
    start = date(1950, 1, 1)
    for _ in range(n):
        target = float(rng.uniform(500, 50_000))
        birth = start + timedelta(days=int(rng.integers(0, 365 * 55)))
        worker = WorkerClass.INDEPENDENT if rng.random() < 0.5 else WorkerClass.EMPLOYEE
        yield target, birth, worker


@pytest.mark.parametrize("method", ["fixed_point", "bisection"])
def test_estimate_round_trip(method):
    settings = SolverSettings(tolerance=1.0, method=method)
    for target, birth, worker in _random_cases(150):
        est = estimate_gross_salary(EstimationInput(birth, target, worker), settings)
        check = compute_deductions(PayrollInput(birth, est.estimated_gross_salary, worker))

        assert est.converged
        assert abs(check.net_salary - target) < 1.0
        assert est.net_salary == check.net_salary


def test_estimate_default_settings():
    est = estimate_gross_salary(EstimationInput(date(1980, 1, 1), 877.50))

    assert est.converged
    assert est.estimated_gross_salary == pytest.approx(1000, abs=1.5)
    assert est.gross_salary == est.estimated_gross_salary


def test_estimate_for_css_exempt_worker():
    exempt = estimate_gross_salary(EstimationInput(date(1960, 3, 1), 2000))
    contributor = estimate_gross_salary(EstimationInput(date(1980, 3, 1), 2000))

    assert not exempt.is_css_eligible
    assert exempt.css_amount == 0
    assert abs(exempt.net_salary - 2000) < 1.0
    assert exempt.estimated_gross_salary < contributor.estimated_gross_salary


def test_estimate_zero_target():
    est = estimate_gross_salary(EstimationInput(date(1990, 1, 1), 0))

    assert est.converged
    assert est.estimated_gross_salary == 0


def test_estimate_negative_target_is_clamped_to_zero():
    est = estimate_gross_salary(EstimationInput(date(1990, 1, 1), -100))

    assert est.estimated_gross_salary == 0
    assert not est.converged


def test_estimate_reports_non_convergence_instead_of_failing():
    settings = SolverSettings(tolerance=1.0, max_iterations=1, method="fixed_point")
    est = estimate_gross_salary(EstimationInput(date(1990, 1, 1), 5000), settings)

    assert not est.converged
    assert est.iterations == 1
    assert est.estimated_gross_salary > 5000
    assert est.net_salary < 5000


def test_negative_target_clamp_ignores_solver_environment(monkeypatch):
    monkeypatch.setenv("SOLVER_METHOD", "bisection")
    est = estimate_gross_salary(EstimationInput(date(1990, 1, 1), -100))

    assert est.estimated_gross_salary == 0
    assert est.iterations == 0
    assert not est.converged
