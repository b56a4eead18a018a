import pytest


@pytest.fixture(autouse=True)
def clean_solver_env(monkeypatch):
    """Solver settings from the environment only reach the app, never the engines under test."""
    monkeypatch.delenv("SOLVER_METHOD", raising=False)
    monkeypatch.delenv("SOLVER_MAX_ITERATIONS", raising=False)
