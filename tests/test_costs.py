from datetime import date

import pytest

from costs import (
    annualize_ytd, baseline_annual_expenses, house_upgrade_cost, project_expenses, school_children,
    university_children, year_expenses,
)
from models import update_config
from scenarios import clone_scenario


def test_annualize_ytd():
    assert annualize_ytd(169_344, date(2025, 12, 2)) == pytest.approx(169_344)
    assert annualize_ytd(120_000, date(2025, 6, 1)) == pytest.approx(240_000)


def test_baseline_uses_monthly_budgets(cfg):
    assert baseline_annual_expenses(cfg) == 72_000


def test_school_age_window(family_cfg):
    assert school_children(family_cfg, 2025) == 1    # 7 and 3
    assert school_children(family_cfg, 2026) == 2    # 8 and 4
    assert school_children(family_cfg, 2040) == 1    # 22 and 18
    assert school_children(family_cfg, 2041) == 0


def test_university_window(family_cfg):
    assert university_children(family_cfg, 2035) == 0
    assert university_children(family_cfg, 2036) == 1
    assert university_children(family_cfg, 2040) == 1    # 22 has finished, 18 starts
    assert university_children(family_cfg, 2045) == 0


def test_school_fees_compound(family_cfg, baseline, five_none):
    e = year_expenses(family_cfg, baseline, five_none, 2026, 1)
    assert e.school_fees_active
    assert e.school_fees == pytest.approx(2 * 18_000 * 1.05)


def test_school_fees_off_when_disabled(family_cfg, baseline, five_none):
    cfg = update_config(family_cfg, school_fees_enabled=False)
    e = year_expenses(cfg, baseline, five_none, 2026, 1)
    assert not e.school_fees_active
    assert e.school_fees == 0
    assert e.total == e.baseline


def test_university_needs_both_flags(family_cfg, baseline, five_none):
    assert year_expenses(family_cfg, baseline, five_none, 2036, 11).university == 0
    uni = clone_scenario(baseline, include_university=True)
    assert year_expenses(family_cfg, uni, five_none, 2036, 11).university == 65_000
    off = update_config(family_cfg, university_enabled=False)
    assert year_expenses(off, uni, five_none, 2036, 11).university == 0


def test_house_upgrade_cost(family_cfg):
    assert house_upgrade_cost(family_cfg) == pytest.approx(550_000 + 91_250)


def test_house_upgrade_only_in_its_year(family_cfg, baseline, five_none):
    move = clone_scenario(baseline, include_house_upgrade=True, house_upgrade_year=2027)
    hit = year_expenses(family_cfg, move, five_none, 2027, 2)
    assert hit.house_upgrade == pytest.approx(641_250)
    assert hit.upgrade_equity == pytest.approx(1_050_000)

    miss = year_expenses(family_cfg, move, five_none, 2028, 3)
    assert miss.house_upgrade == 0
    assert miss.upgrade_equity is None


def test_project_expenses_frame(family_cfg, baseline, five_none):
    df = project_expenses(family_cfg, baseline, five_none, 2025)
    assert len(df) == 61
    assert df["partner1_age"].iloc[0] == 40
    assert df["partner1_age"].iloc[-1] == 100
    parts = df[["baseline", "school_fees", "university", "house_upgrade"]].sum(axis=1)
    assert (df["total"] - parts).abs().max() < 1e-6
    assert df["school_fees"].iloc[0] == pytest.approx(18_000)


def test_project_expenses_past_end_age(cfg, baseline, five_none):
    df = project_expenses(cfg, baseline, five_none, 2090)
    assert list(df["year"]) == [2090]
    assert df["partner1_age"].iloc[0] == 105
    assert isinstance(df["year"].iloc[0].item(), int)
