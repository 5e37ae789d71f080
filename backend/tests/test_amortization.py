import pytest

from lifesim.simulation.amortization import loan_payment, mortgage_payment


def test_mortgage_payment_matches_annuity_formula():
    # 320k at 6.5% over 30 years
    assert mortgage_payment(320_000, 6.5, 30) == pytest.approx(2022.62, abs=0.01)


def test_loan_payment_zero_rate_is_straight_division():
    assert loan_payment(30_000, 0.0, 60) == pytest.approx(500.0)


def test_zero_term_or_principal_is_zero():
    assert loan_payment(30_000, 5.0, 0) == 0.0
    assert mortgage_payment(0, 6.5, 30) == 0.0


def test_payment_grows_with_rate():
    assert loan_payment(30_000, 8.0, 60) > loan_payment(30_000, 4.0, 60)
