"""
Glance-level figures straight from the snapshot, without running the simulator.

These deliberately use a different method from the scenario runner: expenses come
from annualised YTD figures rather than the configured baseline, tax is a rough
estimate, and time-to-FI is a closed-form annuity rather than a year loop. Expect
them to disagree with the cashflow table somewhat.
"""

import math
from typing import Optional

from config import END_AGE, HEADLINE_BUSINESS_TAX_RATE, HEADLINE_MAX_YEARS, HEADLINE_RETURN, NEVER_FI_YEARS
from costs import annualize_ytd
from models import BusinessIncome, HeadlineMetrics, HouseholdSnapshot, PlanConfig
from tax_uk import compute_paye_tax


def headline_fi_target(snapshot: HouseholdSnapshot, cfg: PlanConfig) -> float:
    if cfg.fi_target_mode == "amount" and cfg.fi_target_amount:
        return cfg.fi_target_amount
    return annualize_ytd(snapshot.total_expenses_ytd, snapshot.date) * cfg.fi_target_multiple


def current_annual_savings(snapshot: HouseholdSnapshot, cfg: PlanConfig) -> float:
    if snapshot.partner2_income_ytd:
        partner2 = annualize_ytd(snapshot.partner2_income_ytd, snapshot.date)
    else:
        partner2 = cfg.partner2_net_annual

    partner1 = annualize_ytd(snapshot.business_revenue_ytd, snapshot.date)
    expenses = annualize_ytd(snapshot.total_expenses_ytd, snapshot.date)

    if isinstance(cfg.partner1_income, BusinessIncome):
        taxes = partner1 * HEADLINE_BUSINESS_TAX_RATE
    else:
        taxes = compute_paye_tax(partner1)

    return partner1 + partner2 - taxes - expenses


def future_value(present: float, annual_saving: float, rate: float, years: float) -> float:
    """FV = PV(1+r)^n + PMT((1+r)^n - 1)/r, linear in n when r is 0."""
    if rate == 0:
        return present + annual_saving * years
    growth = (1 + rate) ** years
    return present * growth + annual_saving * (growth - 1) / rate


def years_to_target(current: float, target: float, annual_saving: float, rate: float) -> float:
    if current >= target:
        return 0
    if annual_saving <= 0 and rate <= 0:
        return NEVER_FI_YEARS

    low, high = 0.0, float(HEADLINE_MAX_YEARS)
    while high - low > 0.1:
        mid = (low + high) / 2
        if future_value(current, annual_saving, rate, mid) >= target:
            high = mid
        else:
            low = mid
    return math.ceil(high)


def runway(assets: float, annual_expenses: float, rate: float) -> int:
    """Years until assets run dry if earning stopped today."""
    if annual_expenses <= 0:
        return END_AGE

    remaining = assets
    years = 0
    while remaining > 0 and years < END_AGE:
        remaining = remaining * (1 + rate) - annual_expenses
        years += 1
    return years


def calculate_headline_metrics(snapshot: HouseholdSnapshot, previous: Optional[HouseholdSnapshot],
                               cfg: PlanConfig) -> HeadlineMetrics:
    net_worth = snapshot.total
    previous_net_worth = previous.total if previous is not None else net_worth

    liquid = snapshot.liquid_assets
    business = snapshot.business_total
    pension = snapshot.pensions
    property_equity = snapshot.house_equity

    target = headline_fi_target(snapshot, cfg)
    investable = liquid + business

    # only the liquid side needs to grow; pension and house already count
    time_to_fi = years_to_target(investable, target - pension - property_equity,
                                 current_annual_savings(snapshot, cfg), HEADLINE_RETURN)
    annual_expenses = annualize_ytd(snapshot.total_expenses_ytd, snapshot.date)

    change = net_worth - previous_net_worth
    return HeadlineMetrics(
        net_worth=net_worth,
        net_worth_change=change,
        net_worth_change_percent=change / previous_net_worth * 100 if previous_net_worth > 0 else 0.0,
        fi_target=target,
        fi_progress=net_worth / target if target > 0 else 0.0,
        time_to_fi=time_to_fi,
        runway=runway(investable, annual_expenses, HEADLINE_RETURN),
        liquid_assets=liquid,
        pension_assets=pension,
        business_assets=business,
        property_equity=property_equity,
    )
