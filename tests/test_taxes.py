import pytest

from taxes import Band, TaxSystem, effective_allowance, net_from_gross, solve_gross_for_net, tax_due, tax_on_taxable

SIMPLE = TaxSystem(name="simple", allowance=100, bands=[Band(100, 0.10)], top_rate=0.20)
TAPERED = TaxSystem(name="tapered", allowance=10_000, taper_start=50_000, bands=[Band(1_000_000, 0.2)])


def test_bands_are_cumulative():
    assert tax_on_taxable(50, SIMPLE) == pytest.approx(5)
    assert tax_on_taxable(150, SIMPLE) == pytest.approx(10 + 10)


def test_allowance_comes_off_first():
    assert tax_due(100, SIMPLE) == 0
    assert tax_due(250, SIMPLE) == pytest.approx(20)
    assert net_from_gross(250, SIMPLE) == pytest.approx(230)


def test_non_positive_amounts_pay_nothing():
    assert tax_due(0, SIMPLE) == 0
    assert tax_due(-500, SIMPLE) == 0
    assert tax_on_taxable(-1, SIMPLE) == 0


def test_allowance_taper():
    assert effective_allowance(50_000, TAPERED) == 10_000
    assert effective_allowance(54_000, TAPERED) == 8_000
    assert effective_allowance(100_000, TAPERED) == 0


def test_solve_gross_for_net_meets_target():
    gross = solve_gross_for_net(800, lambda g: g * 0.8, tolerance=1)
    assert 1000 <= gross <= 1001
    assert gross * 0.8 >= 800


def test_solve_gross_for_net_zero_target():
    assert solve_gross_for_net(0, lambda g: g, tolerance=1) == 0
