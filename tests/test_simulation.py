from datetime import date

import pytest

from models import EmployedIncome, HouseholdSnapshot, update_config
from returns_presets import get_assumption
from scenarios import clone_scenario
from simulation import (
    annual_tax, fi_target, projections_frame, run_scenario_cached, run_scenario_to_exhaustion, simulate,
    working_status,
)
from windfalls import compute_investment_exit_net


def test_fi_target_modes(cfg):
    assert fi_target(cfg) == 1_800_000
    assert fi_target(update_config(cfg, fi_target_mode="amount", fi_target_amount=2_000_000)) == 2_000_000


def test_demo_household_is_comfortable(snapshot, cfg, baseline, five_none):
    result = run_scenario_to_exhaustion(snapshot, cfg, baseline, five_none)
    assert result.money_lasts_to_age == 100
    assert 0 < result.earliest_stop_work_age < 60
    assert result.time_to_fi == result.earliest_stop_work_age - 40
    assert len(result.projections) == 61
    assert result.projections[0].partner1_age == 40
    assert result.projections[0].year == 2025


def test_first_year_arithmetic(snapshot, cfg, baseline, five_none):
    first = simulate(snapshot, cfg, baseline, five_none).projections[0]
    assert first.gross_income == 345_000
    assert first.taxes == pytest.approx(annual_tax(cfg, baseline, True, True))
    assert first.net_cashflow == pytest.approx(first.net_income - 72_000)
    assert first.liquid_assets == pytest.approx(snapshot.simulated_liquid * 1.05 + first.net_cashflow)
    assert first.pensions == pytest.approx(snapshot.pensions * 1.05)
    assert first.house_equity == pytest.approx(snapshot.house_equity * 1.025)
    assert first.total_net_worth == pytest.approx(first.liquid_assets + first.pensions + first.house_equity)


def test_deterministic(snapshot, cfg, baseline, five_none):
    assert simulate(snapshot, cfg, baseline, five_none) == simulate(snapshot, cfg, baseline, five_none)
    assert run_scenario_cached(snapshot, cfg, baseline, five_none) == simulate(snapshot, cfg, baseline, five_none)


def test_more_revenue_never_shortens_the_money(thin_snapshot, cfg, baseline, five_none):
    cfg = update_config(cfg, partner1_income=EmployedIncome(0), partner2_gross_annual=0)
    ages = []
    for revenue in (0, 20_000, 50_000, 80_000, 120_000):
        scenario = clone_scenario(baseline, partner1_annual_revenue=revenue, partner2_works_until_age=0)
        ages.append(simulate(thin_snapshot, cfg, scenario, five_none).money_lasts_to_age)
    assert ages == sorted(ages)
    assert ages[0] < 100


def test_inheritance_ignored_without_assumption(snapshot, cfg, baseline, five_none):
    with_inh = update_config(cfg, inheritance_amount=500_000, inheritance_partner1_age=50)
    without = update_config(cfg, inheritance_amount=0)
    gated = simulate(snapshot, with_inh, baseline, five_none)
    assert gated.projections == simulate(snapshot, without, baseline, five_none).projections
    assert not any(p.inheritance_received for p in gated.projections)


def test_inheritance_lands_at_its_age(snapshot, cfg, baseline, five_none):
    with_inh = update_config(cfg, inheritance_amount=500_000, inheritance_partner1_age=50)
    plain = simulate(snapshot, with_inh, baseline, five_none).projections
    boosted = simulate(snapshot, with_inh, baseline, get_assumption("5-inh")).projections
    received = [p.partner1_age for p in boosted if p.inheritance_received]
    assert received == [50]
    at_50 = [p for p in boosted if p.partner1_age == 50][0]
    plain_50 = [p for p in plain if p.partner1_age == 50][0]
    assert at_50.liquid_assets - plain_50.liquid_assets == pytest.approx(500_000 * 1.05)


def test_investment_exit_lands_at_its_age(snapshot, cfg, baseline, five_none):
    with_exit = update_config(cfg, investment_exit_gross=1_000_000, investment_cost_basis=200_000,
                              investment_exit_partner1_age=45)
    additional = compute_investment_exit_net(with_exit).additional_value
    assert additional == pytest.approx(600_000)

    plain = {p.partner1_age: p for p in simulate(snapshot, with_exit, baseline, five_none).projections}
    invest = get_assumption("5-invest")
    boosted = {p.partner1_age: p for p in simulate(snapshot, with_exit, baseline, invest).projections}
    for age in range(40, 45):
        assert boosted[age].liquid_assets == plain[age].liquid_assets
    assert boosted[45].liquid_assets - plain[45].liquid_assets == pytest.approx(additional * 1.05)


def _pension_only(pensions: float) -> HouseholdSnapshot:
    return HouseholdSnapshot(date=date(2025, 12, 2), pensions=pensions)


@pytest.fixture
def retired_scenario(baseline):
    return clone_scenario(baseline, partner1_works_until_age=0, partner2_works_until_age=0,
                          partner1_annual_revenue=0)


def test_pension_locked_at_56(cfg, retired_scenario, five_none):
    cfg = update_config(cfg, partner1_birth_year=1969, partner2_gross_annual=0)
    result = simulate(_pension_only(pensions=1_000_000), cfg, retired_scenario, five_none)
    at_56, at_57 = result.projections[0], result.projections[1]
    assert at_56.partner1_age == 56
    assert at_56.liquid_assets == pytest.approx(-72_000)
    assert at_56.pensions == pytest.approx(1_050_000)
    # tapped the following year
    assert at_57.liquid_assets == 0
    assert at_57.pensions == pytest.approx(1_102_500 - (72_000 * 1.05 + 72_000))


def test_exhausted_at_56_without_pension(cfg, retired_scenario, five_none):
    cfg = update_config(cfg, partner1_birth_year=1969, partner2_gross_annual=0)
    result = simulate(_pension_only(pensions=0), cfg, retired_scenario, five_none)
    assert result.money_lasts_to_age == 56
    assert len(result.projections) == 1
    assert result.projections[0].liquid_assets < 0


def test_pension_tapped_at_58(cfg, retired_scenario, five_none):
    cfg = update_config(cfg, partner1_birth_year=1967, partner2_gross_annual=0)
    first = simulate(_pension_only(pensions=1_000_000), cfg, retired_scenario, five_none).projections[0]
    assert first.partner1_age == 58
    assert first.liquid_assets == 0
    assert first.pensions == pytest.approx(1_050_000 - 72_000)


def test_zero_income_draws_down(cfg, retired_scenario, five_none):
    snap = HouseholdSnapshot(date=date(2025, 12, 2), current_accounts=500_000, pensions=200_000)
    result = simulate(snap, cfg, retired_scenario, five_none)
    assert all(p.is_retired and not p.is_working for p in result.projections)
    assert all(p.gross_income == 0 and p.taxes == 0 for p in result.projections)

    before_access = [p.liquid_assets for p in result.projections if p.partner1_age < 57]
    assert before_access[0] < 500_000
    assert all(b < a for a, b in zip(before_access, before_access[1:]))
    assert result.money_lasts_to_age == result.projections[-1].partner1_age


def test_config_override_beats_scenario(cfg, baseline):
    forced = update_config(cfg, partner1_works_until_age=45)
    assert working_status(forced, baseline, 44, 2029) == (True, True)
    assert working_status(forced, baseline, 45, 2030) == (False, True)


def test_partner2_break_window(cfg, baseline):
    on_break = clone_scenario(baseline, partner2_break_years=2, partner2_break_start_year=2026)
    assert working_status(cfg, on_break, 40, 2025)[1]
    assert not working_status(cfg, on_break, 41, 2026)[1]
    assert not working_status(cfg, on_break, 42, 2027)[1]
    assert working_status(cfg, on_break, 43, 2028)[1]


def test_house_upgrade_resets_equity(snapshot, family_cfg, baseline, five_none):
    move = clone_scenario(baseline, include_house_upgrade=True, house_upgrade_year=2027)
    projections = simulate(snapshot, family_cfg, move, five_none).projections
    year_of_move = [p for p in projections if p.year == 2027][0]
    assert year_of_move.house_equity == pytest.approx(1_500_000 * 0.7 * 1.025)


def test_projections_frame(snapshot, cfg, baseline, five_none):
    df = projections_frame(simulate(snapshot, cfg, baseline, five_none))
    assert df.index.name == "partner1_age"
    assert df.index[0] == 40
    assert "total_net_worth" in df.columns
