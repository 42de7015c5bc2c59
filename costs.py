from dataclasses import dataclass
from datetime import date
from typing import Optional

import pandas as pd

from config import END_AGE, SCHOOL_AGE_RANGE, UNIVERSITY_START_AGE, UPGRADE_EQUITY_SHARE
from models import AssumptionSet, PlanConfig, ScenarioDefinition
from tax_uk import compute_stamp_duty


@dataclass(frozen=True)
class YearExpenses:
    baseline: float
    school_fees: float
    university: float
    house_upgrade: float
    school_fees_active: bool
    upgrade_equity: Optional[float] = None   # equity after the move, set only in the upgrade year

    @property
    def total(self) -> float:
        return self.baseline + self.school_fees + self.university + self.house_upgrade


def annualize_ytd(ytd_amount: float, as_of: date) -> float:
    """Scale a year-to-date figure to twelve months using the snapshot's month."""
    return ytd_amount / as_of.month * 12


def baseline_annual_expenses(cfg: PlanConfig) -> float:
    """
    Fixed baseline from the configured monthly budgets, not the snapshot's YTD figures,
    so partial-year data does not swing scenario costs.
    """
    return (cfg.personal_expenses_monthly + cfg.business_expenses_monthly) * 12


def children_ages(cfg: PlanConfig, year: int) -> list[int]:
    return [year - born for born in cfg.children_birth_years]


def school_children(cfg: PlanConfig, year: int) -> int:
    lo, hi = SCHOOL_AGE_RANGE
    return sum(1 for age in children_ages(cfg, year) if lo <= age <= hi)


def university_children(cfg: PlanConfig, year: int) -> int:
    end = UNIVERSITY_START_AGE + cfg.university_years
    return sum(1 for age in children_ages(cfg, year) if UNIVERSITY_START_AGE <= age < end)


def house_upgrade_cost(cfg: PlanConfig) -> float:
    """Price difference plus stamp duty on the new purchase."""
    return cfg.house_upgrade_budget - cfg.current_house_value + compute_stamp_duty(cfg.house_upgrade_budget)


def year_expenses(cfg: PlanConfig, scenario: ScenarioDefinition, assumptions: AssumptionSet,
                  year: int, years_elapsed: int) -> YearExpenses:
    school_kids = school_children(cfg, year)
    school_active = cfg.school_fees_enabled and school_kids > 0
    school = 0.0
    if school_active:
        inflated_fee = cfg.annual_school_fee_per_child * (1 + assumptions.school_fee_inflation) ** years_elapsed
        school = school_kids * inflated_fee

    university = 0.0
    if cfg.university_enabled and scenario.include_university:
        university = university_children(cfg, year) * cfg.university_annual_cost

    upgrade = 0.0
    upgrade_equity = None
    if cfg.house_upgrade_enabled and scenario.include_house_upgrade and year == scenario.house_upgrade_year:
        upgrade = house_upgrade_cost(cfg)
        upgrade_equity = cfg.house_upgrade_budget * UPGRADE_EQUITY_SHARE

    return YearExpenses(
        baseline=baseline_annual_expenses(cfg),
        school_fees=school,
        university=university,
        house_upgrade=upgrade,
        school_fees_active=school_active,
        upgrade_equity=upgrade_equity,
    )


def project_expenses(cfg: PlanConfig, scenario: ScenarioDefinition, assumptions: AssumptionSet,
                     plan_year: int) -> pd.DataFrame:
    """
    Year-by-year expense breakdown from plan_year until partner 1 turns END_AGE.
    Same figures the runner charges, without the exhaustion cut-off.
    """
    start_age = plan_year - cfg.partner1_birth_year
    rows = []
    for n in range(max(END_AGE - start_age, 0) + 1):
        year = plan_year + n
        e = year_expenses(cfg, scenario, assumptions, year, n)
        rows.append({
            "year": year,
            "partner1_age": start_age + n,
            "baseline": e.baseline,
            "school_fees": e.school_fees,
            "university": e.university,
            "house_upgrade": e.house_upgrade,
        })
    out = pd.DataFrame(rows, columns=["year", "partner1_age", "baseline", "school_fees", "university", "house_upgrade"])
    out["total"] = out[["baseline", "school_fees", "university", "house_upgrade"]].sum(axis=1)
    return out
