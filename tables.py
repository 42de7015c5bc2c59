import logging
from datetime import date
from typing import Optional

from config import END_AGE, SURPLUS_TARGET
from models import (
    AssumptionSet, CashflowTableRow, HouseholdSnapshot, MinimumIncomeRow, PlanConfig,
    ScenarioCostTableRow, ScenarioDefinition,
)
from returns_presets import NO_WINDFALLS_ID, WITH_WINDFALLS_ID, active_assumptions, get_assumption
from scenarios import BASELINE_ID, build_scenarios, compare
from solvers import (
    find_minimum_income, find_minimum_income_for_fi_target, find_minimum_income_for_surplus,
    paye_equivalent_result,
)

logger = logging.getLogger(__name__)


def _scenarios_or_default(cfg: PlanConfig, scenarios: Optional[list], plan_year: int) -> list[ScenarioDefinition]:
    if scenarios:
        return list(scenarios)
    return build_scenarios(cfg, plan_year)


def calculate_cashflow_table(snapshot: HouseholdSnapshot, cfg: PlanConfig,
                             scenarios: Optional[list[ScenarioDefinition]] = None,
                             assumptions: Optional[list[AssumptionSet]] = None,
                             plan_year: Optional[int] = None) -> list[CashflowTableRow]:
    """Age the money lasts to, for every scenario under every assumption set."""
    year = plan_year if plan_year is not None else snapshot.date.year
    to_run = _scenarios_or_default(cfg, scenarios, year)
    sets = assumptions if assumptions is not None else active_assumptions(cfg)

    # one row per scenario object; ids are labels only and may repeat
    rows = [
        CashflowTableRow(
            scenario_id=s.id,
            scenario_name=s.name,
            results={a_id: r.money_lasts_to_age for a_id, r in compare(snapshot, cfg, s, sets).items()},
        )
        for s in to_run
    ]
    logger.info("cashflow table: %d scenarios x %d assumption sets", len(to_run), len(sets))
    return rows


def _working_years(until_age: int, birth_year: int, plan_year: int) -> int:
    return max(until_age - (plan_year - birth_year), 0)


def scenario_extra_cost(cfg: PlanConfig, scenario: ScenarioDefinition, baseline: Optional[ScenarioDefinition],
                        plan_year: int) -> float:
    extra = 0.0

    # Partner 1 earning years lost against the baseline
    if baseline is not None:
        base_years = _working_years(baseline.partner1_works_until_age, cfg.partner1_birth_year, plan_year)
        years = _working_years(scenario.partner1_works_until_age, cfg.partner1_birth_year, plan_year)
        if years < base_years:
            extra += (base_years - years) * scenario.partner1_annual_revenue

    # Partner 2: explicit break, or an earlier stop than the baseline
    if scenario.partner2_break_years > 0:
        extra += scenario.partner2_break_years * cfg.partner2_gross_annual
    elif baseline is not None and scenario.partner2_works_until_age < baseline.partner2_works_until_age:
        base_years = _working_years(baseline.partner2_works_until_age, cfg.partner2_birth_year, plan_year)
        years = _working_years(scenario.partner2_works_until_age, cfg.partner2_birth_year, plan_year)
        extra += max(base_years - years, 0) * cfg.partner2_gross_annual

    if scenario.include_house_upgrade:
        extra += cfg.house_upgrade_budget

    if scenario.include_university:
        extra += len(cfg.children_birth_years) * cfg.university_years * cfg.university_annual_cost

    return extra


def calculate_scenario_cost_table(cfg: PlanConfig, scenarios: Optional[list[ScenarioDefinition]] = None,
                                  plan_year: Optional[int] = None) -> list[ScenarioCostTableRow]:
    """Extra lifetime cost of each scenario relative to the first (baseline) one. No simulation."""
    if plan_year is None:
        plan_year = date.today().year
    to_run = _scenarios_or_default(cfg, scenarios, plan_year)
    baseline = to_run[0] if to_run else None
    logger.info("scenario cost table: %d scenarios", len(to_run))
    return [
        ScenarioCostTableRow(
            scenario_id=s.id,
            scenario_name=s.name,
            extra_cost=scenario_extra_cost(cfg, s, baseline, plan_year),
            is_baseline=s.id == BASELINE_ID,
        )
        for s in to_run
    ]


def _threshold_row(threshold: str, label: str, description: str, solve) -> MinimumIncomeRow:
    """solve(assumptions, partner2_working) -> SolverResult"""
    cells = {}
    for suffix, assumption_id in (("", NO_WINDFALLS_ID), ("_with_windfalls", WITH_WINDFALLS_ID)):
        a = get_assumption(assumption_id)
        working = solve(a, True)
        cells["partner2_working" + suffix] = working
        cells["partner2_break" + suffix] = solve(a, False)
        cells["paye_alternative" + suffix] = paye_equivalent_result(working)
    return MinimumIncomeRow(threshold=threshold, label=label, description=description, **cells)


def calculate_minimum_income_table(snapshot: HouseholdSnapshot, cfg: PlanConfig) -> list[MinimumIncomeRow]:
    """
    Three thresholds, each solved with partner 2 working / on indefinite break and
    without / with both windfalls, plus the PAYE salary matching the working figure.
    """
    retirement_age = cfg.partner1_retirement_age
    rows = [
        _threshold_row(
            "coastfi", "CoastFI", "Zero real change in net worth",
            lambda a, p2: find_minimum_income(snapshot, cfg, a, p2, END_AGE),
        ),
        _threshold_row(
            "surplus", "Surplus", f"+£{SURPLUS_TARGET // 1000}k real growth per year",
            lambda a, p2: find_minimum_income_for_surplus(snapshot, cfg, a, p2, SURPLUS_TARGET),
        ),
        _threshold_row(
            "achieve_fi", "Achieve FI", f"Hit FI target by age {retirement_age}",
            lambda a, p2: find_minimum_income_for_fi_target(snapshot, cfg, a, p2),
        ),
    ]
    logger.info("minimum income table built")
    return rows
