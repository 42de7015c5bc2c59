from datetime import date

import pytest

from models import BusinessIncome, HouseholdSnapshot, PlanConfig, ScenarioDefinition, demo_snapshot
from returns_presets import get_assumption


@pytest.fixture
def snapshot():
    # 2 Dec 2025, total 3,735,674
    return demo_snapshot()


@pytest.fixture
def cfg():
    """Business owner aged 40 in 2025, partner aged 39, no children, FI at 25x £72k."""
    return PlanConfig(
        partner1_birth_year=1985,
        partner2_birth_year=1986,
        partner1_income=BusinessIncome(300_000),
        partner2_gross_annual=45_000,
        personal_expenses_monthly=5_000,
        business_expenses_monthly=1_000,
    )


@pytest.fixture
def family_cfg():
    return PlanConfig(
        partner1_birth_year=1985,
        partner2_birth_year=1986,
        children_birth_years=(2018, 2022),
        partner1_income=BusinessIncome(300_000),
        partner2_gross_annual=45_000,
        school_fees_enabled=True,
        university_enabled=True,
        house_upgrade_enabled=True,
    )


@pytest.fixture
def five_none():
    return get_assumption("5-none")


@pytest.fixture
def baseline():
    return ScenarioDefinition(
        id="baseline",
        name="Baseline",
        short_name="Baseline",
        partner1_works_until_age=60,
        partner2_works_until_age=60,
        partner1_annual_revenue=300_000,
    )


@pytest.fixture
def thin_snapshot():
    """Small pot that runs out well before 100 without income."""
    return HouseholdSnapshot(date=date(2025, 12, 2), current_accounts=100_000, pensions=50_000, total=150_000)
