import pytest

from taxes import (TaxMode, flat_tax_above_threshold, income_tax, progressive_tax,
                   tax_mode_for_rate)


def test_exempt_up_to_threshold():
    assert progressive_tax(11_000) == (0.0, 0)
    assert progressive_tax(5_000) == (0.0, 0)


def test_just_above_threshold_is_taxed_at_15():
    amount, rate = progressive_tax(11_000.01)

    assert amount > 0
    assert amount == pytest.approx(0.0015)
    assert rate == 15


def test_top_of_middle_band():
    amount, rate = progressive_tax(50_000)

    assert amount == pytest.approx(5_850)
    assert rate == 15


def test_just_above_middle_band_is_taxed_at_25():
    amount, rate = progressive_tax(50_000.01)

    assert amount == pytest.approx(5_850 + 0.01 * 0.25)
    assert rate == 25


def test_high_income():
    amount, rate = progressive_tax(100_000)

    assert amount == pytest.approx(5_850 + 50_000 * 0.25)
    assert rate == 25


@pytest.mark.parametrize("income", [0, -1, -50_000])
def test_non_positive_income_owes_nothing(income):
    assert progressive_tax(income) == (0.0, 0)


@pytest.mark.parametrize("rate", [15, 25, 15.0, 25.0])
def test_table_rates_select_progressive_mode(rate):
    assert tax_mode_for_rate(rate) is TaxMode.PROGRESSIVE


@pytest.mark.parametrize("rate", [0, 10, 14.99, 20, 30])
def test_other_rates_select_flat_mode(rate):
    assert tax_mode_for_rate(rate) is TaxMode.FLAT_ABOVE_THRESHOLD


def test_flat_mode_keeps_the_exemption():
    assert flat_tax_above_threshold(11_000, 30) == 0.0
    assert flat_tax_above_threshold(-5_000, 30) == 0.0
    assert flat_tax_above_threshold(21_000, 10) == pytest.approx(1_000)


def test_income_tax_uses_policy_unless_overridden():
    # 15 -> DGI table, so the 25% band applies above 50k
    assert income_tax(60_000, 15) == pytest.approx(8_350)
    assert income_tax(60_000, 15, TaxMode.FLAT_ABOVE_THRESHOLD) == pytest.approx(49_000 * 0.15)
    assert income_tax(20_000, 10) == pytest.approx(900)
