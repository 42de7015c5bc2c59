"""
Plain data records exchanged with the surrounding application.

Everything here is a frozen dataclass: inputs are passed by value into every
calculation and nothing in the engine mutates them. Tuples stand in for lists
so the records stay hashable (the runner is memoised on its inputs).
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional, Tuple, Union

from config import DEFAULTS, DEFAULT_WORK_UNTIL_AGE


# ---------- Inputs ----------
@dataclass(frozen=True)
class HouseholdSnapshot:
    date: date

    # Balances
    current_accounts: float = 0.0
    savings_accounts: float = 0.0
    isas: float = 0.0
    pensions: float = 0.0
    taxable_accounts: float = 0.0   # GIA
    house_equity: float = 0.0
    business_assets: float = 0.0
    investment_assets: float = 0.0
    total: float = 0.0

    # Year-to-date flows
    business_revenue_ytd: float = 0.0
    partner2_income_ytd: float = 0.0
    personal_expenses_ytd: float = 0.0
    business_expenses_ytd: float = 0.0
    total_expenses_ytd: float = 0.0

    @property
    def liquid_assets(self) -> float:
        """Cash, savings and wrappers; excludes business, pension and property."""
        return self.isas + self.taxable_accounts + self.current_accounts + self.savings_accounts

    @property
    def business_total(self) -> float:
        return self.business_assets + self.investment_assets

    @property
    def simulated_liquid(self) -> float:
        """Everything the runner treats as spendable before pension access."""
        return self.liquid_assets + self.business_total


@dataclass(frozen=True)
class BusinessIncome:
    """Partner 1 trades through a Ltd company; revenue is extracted as salary + dividends."""
    revenue: float

    mode = "business"


@dataclass(frozen=True)
class EmployedIncome:
    """Partner 1 is on PAYE."""
    salary: float

    mode = "employed"


PartnerIncome = Union[BusinessIncome, EmployedIncome]


def income_amount(income: PartnerIncome) -> float:
    if isinstance(income, BusinessIncome):
        return income.revenue
    if isinstance(income, EmployedIncome):
        return income.salary
    raise TypeError(f"Unknown income variant: {income!r}")


@dataclass(frozen=True)
class PlanConfig:
    partner1_birth_year: int
    partner2_birth_year: int
    children_birth_years: Tuple[int, ...] = ()   # up to four

    partner1_income: PartnerIncome = EmployedIncome(DEFAULTS["partner1_employed_salary"])
    partner2_gross_annual: float = DEFAULTS["partner2_gross_annual"]
    partner2_net_annual: float = DEFAULTS["partner2_net_annual"]

    personal_expenses_monthly: float = DEFAULTS["personal_expenses_monthly"]
    business_expenses_monthly: float = DEFAULTS["business_expenses_monthly"]

    school_fees_enabled: bool = False
    annual_school_fee_per_child: float = DEFAULTS["annual_school_fee_per_child"]

    fi_target_mode: str = DEFAULTS["fi_target_mode"]      # "multiplier" | "amount"
    fi_target_multiple: float = DEFAULTS["fi_target_multiple"]
    fi_target_amount: Optional[float] = DEFAULTS["fi_target_amount"]

    # Global overrides, applied to every scenario
    partner1_works_until_age: Optional[int] = None
    partner2_works_until_age: Optional[int] = None

    inheritance_amount: float = DEFAULTS["inheritance_amount"]
    inheritance_partner1_age: int = DEFAULTS["inheritance_partner1_age"]

    investment_exit_gross: float = DEFAULTS["investment_exit_gross"]
    investment_cost_basis: float = DEFAULTS["investment_cost_basis"]
    investment_exit_partner1_age: int = DEFAULTS["investment_exit_partner1_age"]

    house_upgrade_enabled: bool = False
    house_upgrade_budget: float = DEFAULTS["house_upgrade_budget"]
    current_house_value: float = DEFAULTS["current_house_value"]

    university_enabled: bool = False
    university_annual_cost: float = DEFAULTS["university_annual_cost"]
    university_years: int = DEFAULTS["university_years"]

    enabled_scenario_ids: Tuple[str, ...] = ()
    partner1_name: str = DEFAULTS["partner1_name"]
    partner2_name: str = DEFAULTS["partner2_name"]

    @property
    def partner1_revenue(self) -> float:
        return income_amount(self.partner1_income)

    @property
    def partner1_retirement_age(self) -> int:
        return self.partner1_works_until_age if self.partner1_works_until_age is not None else DEFAULT_WORK_UNTIL_AGE


def update_config(cfg: PlanConfig, **changes) -> PlanConfig:
    """Merge a partial update into a copy; the original is left untouched."""
    if "children_birth_years" in changes:
        changes["children_birth_years"] = tuple(changes["children_birth_years"])
    if "enabled_scenario_ids" in changes:
        changes["enabled_scenario_ids"] = tuple(changes["enabled_scenario_ids"])
    return replace(cfg, **changes)


@dataclass(frozen=True)
class AssumptionSet:
    id: str
    name: str
    real_return_rate: float
    inflation_rate: float
    school_fee_inflation: float
    include_inheritance: bool = False
    include_investment_exit: bool = False


@dataclass(frozen=True)
class ScenarioDefinition:
    id: str
    name: str
    short_name: str
    partner1_works_until_age: int
    partner2_works_until_age: int
    partner1_annual_revenue: float
    partner2_break_years: int = 0
    partner2_break_start_year: int = 0
    include_house_upgrade: bool = False
    house_upgrade_year: int = 0
    include_university: bool = False


# ---------- Outputs ----------
@dataclass(frozen=True)
class YearlyProjection:
    year: int
    partner1_age: int

    total_net_worth: float
    liquid_assets: float
    pensions: float
    house_equity: float

    gross_income: float
    taxes: float
    net_income: float
    expenses: float
    net_cashflow: float

    is_working: bool
    is_school_fees: bool
    is_retired: bool
    inheritance_received: bool


@dataclass(frozen=True)
class ScenarioResult:
    scenario_id: str
    assumption_id: str
    money_lasts_to_age: int
    time_to_fi: int
    earliest_stop_work_age: int        # age FI first reached, 0 if never
    projections: Tuple[YearlyProjection, ...] = ()


@dataclass(frozen=True)
class HeadlineMetrics:
    net_worth: float
    net_worth_change: float
    net_worth_change_percent: float
    fi_target: float
    fi_progress: float
    time_to_fi: float
    runway: int
    liquid_assets: float
    pension_assets: float
    business_assets: float
    property_equity: float


@dataclass(frozen=True)
class CashflowTableRow:
    scenario_id: str
    scenario_name: str
    results: dict = field(default_factory=dict)   # assumption id -> money lasts to age


@dataclass(frozen=True)
class ScenarioCostTableRow:
    scenario_id: str
    scenario_name: str
    extra_cost: float
    is_baseline: bool


@dataclass(frozen=True)
class SolverResult:
    value: float
    hits_cap: bool = False


@dataclass(frozen=True)
class MinimumIncomeRow:
    threshold: str                     # "coastfi" | "surplus" | "achieve_fi"
    label: str
    description: str

    partner2_working: SolverResult
    partner2_break: SolverResult
    paye_alternative: SolverResult

    partner2_working_with_windfalls: SolverResult
    partner2_break_with_windfalls: SolverResult
    paye_alternative_with_windfalls: SolverResult


# ---------- Defaults ----------
def default_config(plan_year: int) -> PlanConfig:
    """Generic household built from DEFAULTS, ages expressed relative to plan_year."""
    d = DEFAULTS
    if d["partner1_income_mode"] == "business":
        income = BusinessIncome(d["partner1_business_revenue"])
    else:
        income = EmployedIncome(d["partner1_employed_salary"])
    return PlanConfig(
        partner1_birth_year=plan_year - d["partner1_age"],
        partner2_birth_year=plan_year - d["partner2_age"],
        children_birth_years=tuple(plan_year - a for a in d["children_ages"]),
        partner1_income=income,
    )


def demo_snapshot() -> HouseholdSnapshot:
    raw = dict(DEFAULTS["demo_snapshot"])
    raw["date"] = date.fromisoformat(raw["date"])
    return HouseholdSnapshot(**raw)
