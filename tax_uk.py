from dataclasses import replace

from config import (
    BASE_PERSONAL_ALLOWANCE, BASE_PA_TAPER_START, BASE_BASIC_RATE_BAND, BASE_HIGHER_RATE_LIMIT,
    BASE_NI_PRIMARY_THRESHOLD, BASE_NI_UPPER_EARNINGS_LIMIT, BASE_NI_MAIN_RATE, BASE_NI_ADDITIONAL_RATE,
    BASE_NI_SECONDARY_THRESHOLD, BASE_EMPLOYER_NI_RATE, GROSS_FOR_NET_TOLERANCE,
)
from taxes import Band, TaxSystem, tax_due, solve_gross_for_net

# 2024/25, rUK. Income-tax bands are measured on taxable income (after the allowance).
INCOME_TAX = TaxSystem(
    name="UK income tax",
    allowance=BASE_PERSONAL_ALLOWANCE,
    taper_start=BASE_PA_TAPER_START,
    bands=[
        Band(BASE_BASIC_RATE_BAND, 0.20),
        Band(BASE_HIGHER_RATE_LIMIT, 0.40),
    ],
    top_rate=0.45,
    notes="Allowance tapers £1 per £2 over £100k, gone by £125,140.",
)

# Class 1 NI is charged on gross pay, not taxable income.
EMPLOYEE_NI = TaxSystem(
    name="UK employee NI",
    bands=[
        Band(BASE_NI_PRIMARY_THRESHOLD, 0.0),
        Band(BASE_NI_UPPER_EARNINGS_LIMIT, BASE_NI_MAIN_RATE),
    ],
    top_rate=BASE_NI_ADDITIONAL_RATE,
)

EMPLOYER_NI = TaxSystem(
    name="UK employer NI",
    bands=[Band(BASE_NI_SECONDARY_THRESHOLD, 0.0)],
    top_rate=BASE_EMPLOYER_NI_RATE,
)

# Residential, not a first home
STAMP_DUTY = TaxSystem(
    name="UK SDLT",
    bands=[
        Band(250_000, 0.0),
        Band(925_000, 0.05),
        Band(1_500_000, 0.10),
    ],
    top_rate=0.12,
)


def income_tax(gross: float) -> float:
    return tax_due(gross, INCOME_TAX)


def employee_ni(gross: float) -> float:
    return tax_due(gross, EMPLOYEE_NI)


def employer_ni(salary: float) -> float:
    return tax_due(salary, EMPLOYER_NI)


def compute_paye_tax(gross: float) -> float:
    """Income tax plus employee NI on an employed salary."""
    return income_tax(gross) + employee_ni(gross)


def paye_net(gross: float) -> float:
    return gross - compute_paye_tax(gross)


def compute_gross_from_net(target_net: float) -> float:
    """PAYE gross salary that takes home at least target_net (to within £100)."""
    return solve_gross_for_net(target_net, paye_net, GROSS_FOR_NET_TOLERANCE)


def compute_stamp_duty(price: float) -> float:
    return tax_due(price, STAMP_DUTY)


def partner2_salary_from_net(cfg, net_annual: float):
    """Net is the source of truth: store it and derive the matching gross."""
    return replace(cfg, partner2_net_annual=net_annual, partner2_gross_annual=compute_gross_from_net(net_annual))
