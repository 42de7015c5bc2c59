import logging
from dataclasses import asdict
from functools import lru_cache

import pandas as pd

from config import END_AGE, NEVER_FI_YEARS
from costs import baseline_annual_expenses, year_expenses
from drawdown import tap_pension
from extraction import compute_optimal_extraction
from models import (
    AssumptionSet, BusinessIncome, EmployedIncome, HouseholdSnapshot, PlanConfig,
    ScenarioDefinition, ScenarioResult, YearlyProjection,
)
from tax_uk import compute_paye_tax
from windfalls import compute_investment_exit_net, exit_due, inheritance_due

logger = logging.getLogger(__name__)


def fi_target(cfg: PlanConfig) -> float:
    """Fixed amount if configured, otherwise a multiple of baseline annual expenses."""
    if cfg.fi_target_mode == "amount" and cfg.fi_target_amount is not None:
        return cfg.fi_target_amount
    return baseline_annual_expenses(cfg) * cfg.fi_target_multiple


def partner1_tax(cfg: PlanConfig, revenue: float) -> float:
    if revenue <= 0:
        return 0.0
    income = cfg.partner1_income
    if isinstance(income, BusinessIncome):
        return compute_optimal_extraction(revenue).total_tax
    if isinstance(income, EmployedIncome):
        return compute_paye_tax(revenue)
    raise TypeError(f"Unknown income variant: {income!r}")


def annual_tax(cfg: PlanConfig, scenario: ScenarioDefinition, p1_working: bool, p2_working: bool) -> float:
    tax = 0.0
    if p1_working:
        tax += partner1_tax(cfg, scenario.partner1_annual_revenue)
    if p2_working:
        # partner 2 is always employed
        tax += compute_paye_tax(cfg.partner2_gross_annual)
    return tax


def working_status(cfg: PlanConfig, scenario: ScenarioDefinition, age: int, year: int) -> tuple[bool, bool]:
    # Config overrides beat the scenario's own ages
    p1_until = cfg.partner1_works_until_age if cfg.partner1_works_until_age is not None else scenario.partner1_works_until_age
    p2_until = cfg.partner2_works_until_age if cfg.partner2_works_until_age is not None else scenario.partner2_works_until_age

    p2_age = age - (cfg.partner1_birth_year - cfg.partner2_birth_year)
    on_break = (scenario.partner2_break_years > 0
                and scenario.partner2_break_start_year <= year < scenario.partner2_break_start_year + scenario.partner2_break_years)

    return age < p1_until, (p2_age < p2_until and not on_break)


def run_scenario_to_exhaustion(snapshot: HouseholdSnapshot, cfg: PlanConfig,
                               scenario: ScenarioDefinition, assumptions: AssumptionSet) -> ScenarioResult:
    """
    Year-by-year wealth projection for one scenario under one assumption set, from
    partner 1's current age to END_AGE, stopping early once liquid and pension
    assets are both exhausted.
    """
    start_age = snapshot.date.year - cfg.partner1_birth_year
    growth = 1 + assumptions.real_return_rate

    liquid = snapshot.simulated_liquid
    pension = snapshot.pensions
    house = snapshot.house_equity

    target = fi_target(cfg)
    exit_value = compute_investment_exit_net(cfg).additional_value

    projections = []
    money_lasts_to = END_AGE
    fi_age = 0

    for age in range(start_age, END_AGE + 1):
        year = cfg.partner1_birth_year + age
        p1_working, p2_working = working_status(cfg, scenario, age, year)

        gross = 0.0
        if p1_working:
            gross += scenario.partner1_annual_revenue
        if p2_working:
            gross += cfg.partner2_gross_annual
        taxes = annual_tax(cfg, scenario, p1_working, p2_working)
        net_income = gross - taxes

        spend = year_expenses(cfg, scenario, assumptions, year, age - start_age)
        if spend.upgrade_equity is not None:
            house = spend.upgrade_equity

        inherited = inheritance_due(cfg, assumptions, age)
        if inherited:
            liquid += cfg.inheritance_amount
        if exit_due(cfg, assumptions, age):
            liquid += exit_value

        net_cashflow = net_income - spend.total

        pension *= growth
        liquid *= growth
        liquid += net_cashflow

        liquid, pension = tap_pension(liquid, pension, age)

        # property is indexed with inflation only, it never takes cashflow
        house *= 1 + assumptions.inflation_rate

        total = liquid + pension + house
        if fi_age == 0 and total >= target:
            fi_age = age

        projections.append(YearlyProjection(
            year=year,
            partner1_age=age,
            total_net_worth=total,
            liquid_assets=liquid,
            pensions=pension,
            house_equity=house,
            gross_income=gross,
            taxes=taxes,
            net_income=net_income,
            expenses=spend.total,
            net_cashflow=net_cashflow,
            is_working=p1_working or p2_working,
            is_school_fees=spend.school_fees_active,
            is_retired=not p1_working and not p2_working,
            inheritance_received=inherited,
        ))

        if liquid <= 0 and pension <= 0:
            money_lasts_to = age
            logger.debug("%s/%s: money runs out at %d", scenario.id, assumptions.id, age)
            break

    return ScenarioResult(
        scenario_id=scenario.id,
        assumption_id=assumptions.id,
        money_lasts_to_age=money_lasts_to,
        time_to_fi=fi_age - start_age if fi_age > 0 else NEVER_FI_YEARS,
        earliest_stop_work_age=fi_age,
        projections=tuple(projections),
    )


simulate = run_scenario_to_exhaustion

# Inputs are frozen dataclasses, so their content is the cache key.
run_scenario_cached = lru_cache(maxsize=4096)(run_scenario_to_exhaustion)


def projections_frame(result: ScenarioResult) -> pd.DataFrame:
    df = pd.DataFrame([asdict(p) for p in result.projections])
    if df.empty:
        return df
    return df.set_index("partner1_age")
