from dataclasses import dataclass

from config import EXIT_CORPORATION_TAX_RATE
from models import AssumptionSet, PlanConfig


@dataclass(frozen=True)
class InvestmentExit:
    gross_proceeds: float
    gain: float
    corporation_tax: float
    net_proceeds: float
    additional_value: float


def compute_investment_exit_net(cfg: PlanConfig) -> InvestmentExit:
    """
    Net proceeds of the investment exit after corporation tax on the gain.

    The holding already sits in the snapshot at cost basis, so only the excess of net
    proceeds over cost basis is new money at exit (additional_value).
    """
    gross = cfg.investment_exit_gross
    gain = gross - cfg.investment_cost_basis
    ct = gain * EXIT_CORPORATION_TAX_RATE
    net = gross - ct
    return InvestmentExit(
        gross_proceeds=gross,
        gain=gain,
        corporation_tax=ct,
        net_proceeds=net,
        additional_value=net - cfg.investment_cost_basis,
    )


def inheritance_due(cfg: PlanConfig, assumptions: AssumptionSet, age: int) -> bool:
    return assumptions.include_inheritance and age == cfg.inheritance_partner1_age


def exit_due(cfg: PlanConfig, assumptions: AssumptionSet, age: int) -> bool:
    return assumptions.include_investment_exit and age == cfg.investment_exit_partner1_age
