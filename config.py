APP_NAME = "Fortress: FI Planner"

# 2024/25 baseline (UK). Single tax year, not indexed.
BASE_PERSONAL_ALLOWANCE = 12_570
BASE_PA_TAPER_START = 100_000
BASE_BASIC_RATE_BAND = 37_700        # taxable income
BASE_HIGHER_RATE_LIMIT = 125_140     # taxable income

BASE_NI_PRIMARY_THRESHOLD = 12_570
BASE_NI_UPPER_EARNINGS_LIMIT = 50_270
BASE_NI_MAIN_RATE = 0.12
BASE_NI_ADDITIONAL_RATE = 0.02
BASE_NI_SECONDARY_THRESHOLD = 9_100
BASE_EMPLOYER_NI_RATE = 0.138

BASE_CT_SMALL_PROFITS_RATE = 0.19
BASE_CT_MAIN_RATE = 0.25
BASE_CT_LOWER_LIMIT = 50_000
BASE_CT_UPPER_LIMIT = 250_000
BASE_CT_RELIEF_FRACTION = 0.015

BASE_DIVIDEND_ALLOWANCE = 500
BASE_DIVIDEND_RATES = (0.0875, 0.3375, 0.3935)

DIRECTOR_SALARY = 12_570             # fixed salary/dividend split heuristic
EXIT_CORPORATION_TAX_RATE = 0.25

# Engine
END_AGE = 100
PENSION_ACCESS_AGE = 57
DEFAULT_WORK_UNTIL_AGE = 60
SCHOOL_AGE_RANGE = (4, 18)           # inclusive
UNIVERSITY_START_AGE = 18
UPGRADE_EQUITY_SHARE = 0.7           # equity held right after a house upgrade
NEVER_FI_YEARS = 99

# Solvers
SOLVER_STEP = 5_000
INCOME_SEARCH_CAP = 500_000
FI_INCOME_SEARCH_CAP = 1_000_000
GROSS_FOR_NET_TOLERANCE = 100
PAYE_EQUIVALENT_TOLERANCE = 1_000
PAYE_EQUIVALENT_MULTIPLE = 1.5
INDEFINITE_BREAK_YEARS = 50
SURPLUS_TARGET = 50_000

# Headline (quick estimate, not the full simulation)
HEADLINE_RETURN = 0.05
HEADLINE_BUSINESS_TAX_RATE = 0.30
HEADLINE_MAX_YEARS = 50

# Default household (today's money)
DEFAULTS = {
    "partner1_name": "Partner 1",
    "partner2_name": "Partner 2",
    "partner1_age": 40,
    "partner2_age": 39,
    "children_ages": (7, 3),

    # Income
    "partner1_income_mode": "employed",
    "partner1_business_revenue": 150_000,
    "partner1_employed_salary": 60_000,
    "partner2_gross_annual": 50_000,
    "partner2_net_annual": 39_000,

    # Spending (monthly)
    "personal_expenses_monthly": 5_000,
    "business_expenses_monthly": 1_000,
    "annual_school_fee_per_child": 18_000,

    # Goals
    "fi_target_mode": "multiplier",
    "fi_target_multiple": 25,         # 25x expenses = 4% SWR
    "fi_target_amount": 4_500_000,

    # Windfalls
    "inheritance_amount": 0,
    "inheritance_partner1_age": 50,
    "investment_exit_gross": 0,
    "investment_cost_basis": 0,
    "investment_exit_partner1_age": 45,

    # Big-ticket items
    "house_upgrade_budget": 1_500_000,
    "current_house_value": 950_000,
    "university_annual_cost": 65_000,
    "university_years": 4,

    # Demo snapshot (2 Dec 2025)
    "demo_snapshot": {
        "date": "2025-12-02",
        "current_accounts": 19_248,
        "savings_accounts": 62_518,
        "isas": 614_271,
        "pensions": 885_576,
        "taxable_accounts": 513_808,
        "house_equity": 474_514,
        "business_assets": 166_140,
        "investment_assets": 999_599,
        "total": 3_735_674,
        "business_revenue_ytd": 526_259,
        "partner2_income_ytd": 50_400,
        "personal_expenses_ytd": 126_515,
        "business_expenses_ytd": 42_829,
        "total_expenses_ytd": 169_344,
    },
}
