"""
Minimum-income searches: invert the scenario runner by bisecting partner 1's revenue.

Every search assumes more revenue never hurts the outcome (not verified), narrows
an integer bracket to SOLVER_STEP and rounds the answer up to the next SOLVER_STEP.
An answer at the bracket's top comes back flagged `hits_cap` so callers can show it
as "more than" rather than an exact figure.
"""

import logging
import math
from typing import Callable

from config import (
    SOLVER_STEP, INCOME_SEARCH_CAP, FI_INCOME_SEARCH_CAP, PAYE_EQUIVALENT_TOLERANCE,
    PAYE_EQUIVALENT_MULTIPLE, END_AGE, SURPLUS_TARGET,
)
from extraction import compute_optimal_extraction
from models import AssumptionSet, HouseholdSnapshot, PlanConfig, ScenarioResult, SolverResult
from scenarios import trial_scenario
from simulation import run_scenario_cached
from tax_uk import paye_net
from taxes import solve_gross_for_net

logger = logging.getLogger(__name__)


def round_up_to_step(value: float, step: float = SOLVER_STEP) -> float:
    return math.ceil(value / step) * step


def _capped(value: float, cap: int) -> SolverResult:
    hits = value >= cap
    if hits:
        logger.info("minimum income search hit its £%d cap", cap)
    return SolverResult(value=value, hits_cap=hits)


def _search(predicate: Callable[[ScenarioResult], bool], snapshot: HouseholdSnapshot, cfg: PlanConfig,
            assumptions: AssumptionSet, partner2_working: bool, cap: int) -> SolverResult:
    plan_year = snapshot.date.year
    low, high = 0, cap
    while high - low > SOLVER_STEP:
        mid = (low + high) // 2
        result = run_scenario_cached(snapshot, cfg, trial_scenario(cfg, mid, partner2_working, plan_year), assumptions)
        ok = predicate(result)
        logger.debug("trial %s revenue=%d -> %s", assumptions.id, mid, ok)
        if ok:
            high = mid
        else:
            low = mid
    return _capped(round_up_to_step(high), cap)


def find_minimum_income(snapshot: HouseholdSnapshot, cfg: PlanConfig, assumptions: AssumptionSet,
                        partner2_working: bool, target_age: int = END_AGE) -> SolverResult:
    """Lowest revenue at which the money lasts to target_age."""
    return _search(lambda r: r.money_lasts_to_age >= target_age,
                   snapshot, cfg, assumptions, partner2_working, INCOME_SEARCH_CAP)


def average_early_growth(result: ScenarioResult) -> float:
    """Mean yearly net-worth change over the first three projected years."""
    first = result.projections[0].total_net_worth
    third = result.projections[2].total_net_worth
    return (third - first) / 2


def find_minimum_income_for_surplus(snapshot: HouseholdSnapshot, cfg: PlanConfig, assumptions: AssumptionSet,
                                    partner2_working: bool, target_surplus: float = SURPLUS_TARGET) -> SolverResult:
    """Lowest revenue at which net worth grows by target_surplus a year early on."""
    def grows_enough(r: ScenarioResult) -> bool:
        # fewer than three years means it ran out almost at once
        return len(r.projections) >= 3 and average_early_growth(r) >= target_surplus

    return _search(grows_enough, snapshot, cfg, assumptions, partner2_working, INCOME_SEARCH_CAP)


def find_minimum_income_for_fi_target(snapshot: HouseholdSnapshot, cfg: PlanConfig, assumptions: AssumptionSet,
                                      partner2_working: bool) -> SolverResult:
    """Lowest revenue at which the FI target is reached by partner 1's retirement age."""
    retirement_age = cfg.partner1_retirement_age

    def reaches_fi(r: ScenarioResult) -> bool:
        return 0 < r.earliest_stop_work_age <= retirement_age

    zero = run_scenario_cached(snapshot, cfg, trial_scenario(cfg, 0, partner2_working, snapshot.date.year, "trial-zero"),
                               assumptions)
    if reaches_fi(zero):
        return SolverResult(value=0, hits_cap=False)

    return _search(reaches_fi, snapshot, cfg, assumptions, partner2_working, FI_INCOME_SEARCH_CAP)


def paye_equivalent(business_revenue: float) -> float:
    """PAYE salary taking home what business_revenue does via optimal extraction."""
    target_net = compute_optimal_extraction(business_revenue).net_income
    gross = solve_gross_for_net(target_net, paye_net, PAYE_EQUIVALENT_TOLERANCE,
                                low=0.0, high=business_revenue * PAYE_EQUIVALENT_MULTIPLE)
    return round_up_to_step(gross)


def paye_equivalent_result(revenue: SolverResult) -> SolverResult:
    return SolverResult(value=paye_equivalent(revenue.value), hits_cap=revenue.hits_cap)
