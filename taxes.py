"""
Banded marginal-rate schedules.

Every UK charge the engine needs (income tax, employee/employer NI, dividend tax,
stamp duty) is an allowance followed by cumulative bands and a top rate, so they
all share one evaluator. Amounts are a single tax year's figures, not indexed.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional


@dataclass(frozen=True)
class Band:
    up_to: float  # cumulative upper threshold of the band (measured after the allowance)
    rate: float   # marginal rate, e.g., 0.20 for 20%


@dataclass(frozen=True)
class TaxSystem:
    name: str
    allowance: float = 0.0             # tax-free amount deducted before bands
    taper_start: Optional[float] = None  # UK-style allowance taper threshold
    bands: List[Band] = field(default_factory=list)  # must be sorted by up_to
    top_rate: float = 0.0              # rate above last band
    notes: str = ""


def effective_allowance(gross: float, sys: TaxSystem) -> float:
    allowance = sys.allowance
    if sys.taper_start is not None and gross > sys.taper_start:
        # lose £1 of allowance per £2 above threshold
        allowance = max(0.0, allowance - (gross - sys.taper_start) / 2.0)
    return allowance


def tax_on_taxable(taxable: float, sys: TaxSystem) -> float:
    """Apply the bands to an amount that has already had the allowance removed."""
    if taxable <= 0:
        return 0.0
    tax = 0.0
    last = 0.0
    for band in sys.bands:
        if taxable <= band.up_to:
            return tax + (taxable - last) * band.rate
        tax += (band.up_to - last) * band.rate
        last = band.up_to
    # above last band
    return tax + (taxable - last) * sys.top_rate


def tax_due(gross: float, sys: TaxSystem) -> float:
    if gross <= 0:
        return 0.0
    taxable = max(0.0, gross - effective_allowance(gross, sys))
    return tax_on_taxable(taxable, sys)


def net_from_gross(gross: float, sys: TaxSystem) -> float:
    return gross - tax_due(gross, sys)


def solve_gross_for_net(net_target: float, net_fn: Callable[[float], float],
                        tolerance: float, low: float = None, high: float = None) -> float:
    """
    Bisection on gross in [net_target, 2 * net_target] (or the given bounds) until
    the bracket is narrower than tolerance. Returns the upper end rounded up, so the
    answer always yields at least the target net.
    """
    if net_target <= 0:
        return 0.0
    lo = net_target if low is None else low
    hi = net_target * 2.0 if high is None else high
    while hi - lo > tolerance:
        mid = (lo + hi) / 2.0
        if net_fn(mid) >= net_target:
            hi = mid
        else:
            lo = mid
    return math.ceil(hi)
