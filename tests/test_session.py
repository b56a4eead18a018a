import logging
from datetime import date

from session import (DEDUCTION_KEY, FREELANCE_KEY, load_inputs, reset_inputs,
                     save_inputs)


def test_defaults_on_first_visit():
    state = {}
    values = load_inputs(state, DEDUCTION_KEY)

    assert values == {"birth_date": date(1990, 1, 1), "monthly_salary": 3000.0,
                      "is_independent": False, "estimation_mode": False}
    assert DEDUCTION_KEY in state


def test_freelance_defaults():
    values = load_inputs({}, FREELANCE_KEY)

    assert values["annual_income"] == 50_000
    assert values["social_security"] == 7.25
    assert values["vacation_days"] == 14


def test_saved_values_survive_reruns():
    state = {}
    save_inputs(state, DEDUCTION_KEY, {"birth_date": date(1970, 5, 1), "monthly_salary": 1500,
                                       "is_independent": True})
    values = load_inputs(state, DEDUCTION_KEY)

    assert values["birth_date"] == date(1970, 5, 1)
    assert values["monthly_salary"] == 1500.0
    assert values["is_independent"] is True
    assert values["estimation_mode"] is False


def test_iso_birth_date_is_parsed():
    state = {DEDUCTION_KEY: {"birth_date": "1985-06-15T00:00:00.000Z"}}

    assert load_inputs(state, DEDUCTION_KEY)["birth_date"] == date(1985, 6, 15)


def test_malformed_values_fall_back_to_defaults(caplog):
    state = {DEDUCTION_KEY: {"birth_date": "not-a-date", "monthly_salary": "abc"}}
    with caplog.at_level(logging.WARNING, logger="session"):
        values = load_inputs(state, DEDUCTION_KEY)

    assert values["birth_date"] == date(1990, 1, 1)
    assert values["monthly_salary"] == 3000.0
    assert "Ignoring saved" in caplog.text


def test_unknown_keys_are_dropped():
    state = {FREELANCE_KEY: {"annual_income": 60_000, "bogus": 1}}
    values = load_inputs(state, FREELANCE_KEY)

    assert values["annual_income"] == 60_000
    assert "bogus" not in values


def test_reset_restores_defaults():
    state = {FREELANCE_KEY: {"annual_income": 99_000}}
    values = reset_inputs(state, FREELANCE_KEY)

    assert values["annual_income"] == 50_000
    assert state[FREELANCE_KEY]["annual_income"] == 50_000
