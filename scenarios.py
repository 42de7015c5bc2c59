from dataclasses import asdict

from config import DEFAULT_WORK_UNTIL_AGE, INDEFINITE_BREAK_YEARS
from models import AssumptionSet, HouseholdSnapshot, PlanConfig, ScenarioDefinition, ScenarioResult
from simulation import run_scenario_cached

BASELINE_ID = "baseline"


def clone_scenario(scenario: ScenarioDefinition, **overrides) -> ScenarioDefinition:
    base = asdict(scenario)
    base.update(overrides)
    return ScenarioDefinition(**base)


# ---------- Inclusion rules ----------
def has_children(cfg: PlanConfig) -> bool:
    return len(cfg.children_birth_years) > 0


def partner_break_applies(cfg: PlanConfig) -> bool:
    """Only meaningful if partner 2 has a salary to give up."""
    return cfg.partner2_gross_annual > 0


def house_upgrade_applies(cfg: PlanConfig) -> bool:
    return cfg.house_upgrade_budget > 0 and cfg.house_upgrade_budget != cfg.current_house_value


def university_applies(cfg: PlanConfig) -> bool:
    return has_children(cfg)


def early_retirement_applies(cfg: PlanConfig) -> bool:
    return True


# ---------- Builders ----------
def baseline_scenario(cfg: PlanConfig) -> ScenarioDefinition:
    p1_age = cfg.partner1_retirement_age
    if cfg.partner2_gross_annual > 0:
        p2_age = cfg.partner2_works_until_age if cfg.partner2_works_until_age is not None else DEFAULT_WORK_UNTIL_AGE
    else:
        p2_age = 0
    return ScenarioDefinition(
        id=BASELINE_ID,
        name="Baseline (as entered)",
        short_name="Baseline",
        partner1_works_until_age=p1_age,
        partner2_works_until_age=p2_age,
        partner1_annual_revenue=cfg.partner1_revenue,
        include_university=has_children(cfg),
    )


def build_scenarios(cfg: PlanConfig, plan_year: int) -> list[ScenarioDefinition]:
    """Baseline plus the variants that are economically meaningful for this household."""
    base = baseline_scenario(cfg)
    current_age = plan_year - cfg.partner1_birth_year
    scenarios = [base]

    if partner_break_applies(cfg):
        scenarios.append(clone_scenario(
            base,
            id="partner2-break",
            name=f"{cfg.partner2_name} takes 1 year off",
            short_name="Partner break",
            partner2_break_years=1,
            partner2_break_start_year=plan_year + 1,
        ))

    if early_retirement_applies(cfg):
        scenarios.append(clone_scenario(
            base,
            id="earlier-retire",
            name=f"{cfg.partner1_name} retires 5 years earlier",
            short_name="Early retire",
            partner1_works_until_age=max(base.partner1_works_until_age - 5, current_age + 1),
        ))

    if house_upgrade_applies(cfg):
        scenarios.append(clone_scenario(
            base,
            id="house-upgrade",
            name="House move / upgrade",
            short_name="House move",
            include_house_upgrade=True,
            house_upgrade_year=plan_year + 2,
        ))

    if university_applies(cfg):
        scenarios.append(clone_scenario(
            base,
            id="education-supported",
            name="Pay all university costs",
            short_name="University",
            include_university=True,
        ))

    if cfg.enabled_scenario_ids:
        enabled = set(cfg.enabled_scenario_ids) | {BASELINE_ID}
        scenarios = [s for s in scenarios if s.id in enabled]
    return scenarios


def trial_scenario(cfg: PlanConfig, revenue: float, partner2_working: bool, plan_year: int,
                   scenario_id: str = "trial") -> ScenarioDefinition:
    """
    Bare scenario the solvers vary partner 1's revenue on. Partner 2 off work is
    modelled as a break long enough to outlast the plan, not as a separate flag.
    """
    if partner2_working:
        p2_age = cfg.partner2_works_until_age if cfg.partner2_works_until_age is not None else DEFAULT_WORK_UNTIL_AGE
    else:
        p2_age = 0
    return ScenarioDefinition(
        id=scenario_id,
        name=scenario_id,
        short_name=scenario_id,
        partner1_works_until_age=cfg.partner1_retirement_age,
        partner2_works_until_age=p2_age,
        partner1_annual_revenue=revenue,
        partner2_break_years=0 if partner2_working else INDEFINITE_BREAK_YEARS,
        partner2_break_start_year=plan_year + 1,
    )


def compare(snapshot: HouseholdSnapshot, cfg: PlanConfig, scenario: ScenarioDefinition,
            assumption_sets: list[AssumptionSet]) -> dict[str, ScenarioResult]:
    """
    returns: dict assumption id -> result for this one scenario
    """
    return {a.id: run_scenario_cached(snapshot, cfg, scenario, a) for a in assumption_sets}
