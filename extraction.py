"""
Ltd-company director extraction: fixed salary at the NI/allowance threshold, the
rest of the post-corporation-tax profit paid out as dividends.

The salary is not searched for. £12,570 is the usual adviser heuristic and every
minimum-income answer downstream depends on it staying put.
"""

from dataclasses import dataclass

from config import (
    DIRECTOR_SALARY, BASE_CT_SMALL_PROFITS_RATE, BASE_CT_MAIN_RATE, BASE_CT_LOWER_LIMIT,
    BASE_CT_UPPER_LIMIT, BASE_CT_RELIEF_FRACTION, BASE_DIVIDEND_ALLOWANCE, BASE_DIVIDEND_RATES,
    BASE_BASIC_RATE_BAND, BASE_HIGHER_RATE_LIMIT, GROSS_FOR_NET_TOLERANCE,
)
from tax_uk import income_tax, employee_ni, employer_ni
from taxes import Band, TaxSystem, tax_due, solve_gross_for_net

# Dividends are assumed to start in the basic band (salary has used the allowance),
# so the bands are not stacked on top of salary.
DIVIDEND_TAX = TaxSystem(
    name="UK dividend tax",
    allowance=BASE_DIVIDEND_ALLOWANCE,
    bands=[
        Band(BASE_BASIC_RATE_BAND, BASE_DIVIDEND_RATES[0]),
        Band(BASE_HIGHER_RATE_LIMIT, BASE_DIVIDEND_RATES[1]),
    ],
    top_rate=BASE_DIVIDEND_RATES[2],
)


@dataclass(frozen=True)
class ExtractionResult:
    salary: float
    dividends: float
    corporation_tax: float
    income_tax: float
    national_insurance: float   # employee + employer
    dividend_tax: float
    total_tax: float
    net_income: float
    effective_rate: float


def corporation_tax(profits: float) -> float:
    """Small profits rate, main rate, and marginal relief in between."""
    if profits <= 0:
        return 0.0
    if profits <= BASE_CT_LOWER_LIMIT:
        return profits * BASE_CT_SMALL_PROFITS_RATE
    if profits >= BASE_CT_UPPER_LIMIT:
        return profits * BASE_CT_MAIN_RATE
    relief = ((BASE_CT_UPPER_LIMIT - profits) * (profits - BASE_CT_LOWER_LIMIT)
              / (BASE_CT_UPPER_LIMIT - BASE_CT_LOWER_LIMIT) * BASE_CT_RELIEF_FRACTION)
    return profits * BASE_CT_MAIN_RATE - relief


def dividend_tax(dividends: float) -> float:
    return tax_due(dividends, DIVIDEND_TAX)


def compute_optimal_extraction(gross_revenue: float) -> ExtractionResult:
    salary = DIRECTOR_SALARY
    er_ni = employer_ni(salary)
    profits = max(0.0, gross_revenue - salary - er_ni)

    ct = corporation_tax(profits)
    dividends = profits - ct

    it = income_tax(salary)
    ee_ni = employee_ni(salary)
    div_tax = dividend_tax(dividends)

    total = ct + it + ee_ni + er_ni + div_tax
    return ExtractionResult(
        salary=salary,
        dividends=dividends,
        corporation_tax=ct,
        income_tax=it,
        national_insurance=ee_ni + er_ni,
        dividend_tax=div_tax,
        total_tax=total,
        net_income=gross_revenue - total,
        effective_rate=total / gross_revenue if gross_revenue > 0 else 0.0,
    )


def extraction_net(gross_revenue: float) -> float:
    return compute_optimal_extraction(gross_revenue).net_income


def gross_for_net_extraction(target_net: float) -> float:
    """Company revenue needed for the director to take home at least target_net."""
    return solve_gross_for_net(target_net, extraction_net, GROSS_FOR_NET_TOLERANCE)
