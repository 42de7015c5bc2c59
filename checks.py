from models import (
    AssumptionSet, BusinessIncome, EmployedIncome, HouseholdSnapshot, PlanConfig, ScenarioDefinition,
)

MAX_CHILDREN = 4
_BALANCES = (
    "current_accounts", "savings_accounts", "isas", "pensions", "taxable_accounts",
    "house_equity", "business_assets", "investment_assets",
)
_FLOWS = (
    "business_revenue_ytd", "partner2_income_ytd", "personal_expenses_ytd",
    "business_expenses_ytd", "total_expenses_ytd",
)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_snapshot(snapshot: HouseholdSnapshot) -> None:
    for name in _BALANCES + _FLOWS + ("total",):
        _require(_is_number(getattr(snapshot, name)), f"Snapshot {name} must be a number.")
    _require(snapshot.pensions >= 0, "Pension balance cannot be negative.")
    for name in _FLOWS:
        _require(getattr(snapshot, name) >= 0, f"Snapshot {name} cannot be negative.")


def validate_config(cfg: PlanConfig) -> None:
    _require(cfg.partner1_birth_year > 1900, "Partner 1 birth year looks wrong.")
    _require(cfg.partner2_birth_year > 1900, "Partner 2 birth year looks wrong.")
    _require(len(cfg.children_birth_years) <= MAX_CHILDREN, f"At most {MAX_CHILDREN} children are supported.")
    _require(isinstance(cfg.partner1_income, (BusinessIncome, EmployedIncome)),
             "Partner 1 income must be business revenue or an employed salary.")
    _require(cfg.partner1_revenue >= 0, "Partner 1 income cannot be negative.")
    _require(cfg.partner2_gross_annual >= 0, "Partner 2 salary cannot be negative.")
    _require(cfg.personal_expenses_monthly >= 0, "Personal expenses cannot be negative.")
    _require(cfg.business_expenses_monthly >= 0, "Business expenses cannot be negative.")
    _require(cfg.annual_school_fee_per_child >= 0, "School fees cannot be negative.")
    _require(cfg.fi_target_mode in {"multiplier", "amount"}, "FI target mode must be 'multiplier' or 'amount'.")
    if cfg.fi_target_mode == "amount":
        _require(cfg.fi_target_amount is not None and cfg.fi_target_amount > 0, "FI target amount must be positive.")
    else:
        _require(cfg.fi_target_multiple > 0, "FI target multiple must be positive.")
    _require(cfg.inheritance_amount >= 0, "Inheritance cannot be negative.")
    _require(cfg.investment_exit_gross >= 0, "Investment exit proceeds cannot be negative.")
    _require(cfg.investment_cost_basis >= 0, "Investment cost basis cannot be negative.")
    _require(cfg.house_upgrade_budget >= 0, "House budget cannot be negative.")
    _require(cfg.current_house_value >= 0, "Current house value cannot be negative.")
    _require(cfg.university_annual_cost >= 0, "University cost cannot be negative.")
    _require(cfg.university_years >= 0, "University years cannot be negative.")


def validate_assumptions(assumptions: AssumptionSet) -> None:
    for name in ("real_return_rate", "inflation_rate", "school_fee_inflation"):
        _require(_is_number(getattr(assumptions, name)), f"Assumption {name} must be a number.")
    _require(assumptions.real_return_rate >= 0, "Real return cannot be negative.")
    _require(assumptions.inflation_rate >= 0, "Inflation cannot be negative.")
    _require(assumptions.school_fee_inflation >= 0, "School fee inflation cannot be negative.")


def validate_scenario(scenario: ScenarioDefinition) -> None:
    for name in ("partner1_annual_revenue", "partner2_break_years", "partner1_works_until_age",
                 "partner2_works_until_age"):
        _require(_is_number(getattr(scenario, name)), f"Scenario {name} must be a number.")
    _require(scenario.partner1_annual_revenue >= 0, "Scenario revenue cannot be negative.")
    _require(scenario.partner2_break_years >= 0, "Break years cannot be negative.")
    _require(scenario.partner1_works_until_age >= 0, "Work-until age cannot be negative.")
    _require(scenario.partner2_works_until_age >= 0, "Work-until age cannot be negative.")


def validate_inputs(snapshot: HouseholdSnapshot, cfg: PlanConfig) -> None:
    validate_snapshot(snapshot)
    validate_config(cfg)
