# Macro assumption sets. Returns are *real* (after inflation); house equity is indexed
# with general inflation and school fees with their own rate.

from models import AssumptionSet, PlanConfig

NO_WINDFALLS_ID = "5-none"
WITH_WINDFALLS_ID = "5-both"

_WINDFALL_VARIANTS = [
    ("none", "No Windfalls", False, False),
    ("inh", "+ Inheritance", True, False),
    ("invest", "+ Investment", False, True),
    ("both", "+ Both", True, True),
]


def _catalogue(rates=(0.03, 0.05), inflation=0.025, school_fee_inflation=0.05):
    out = []
    for rate in rates:
        pct = f"{rate * 100:g}"
        for suffix, label, inh, exit_ in _WINDFALL_VARIANTS:
            out.append(AssumptionSet(
                id=f"{pct}-{suffix}",
                name=f"{pct}% {label}",
                real_return_rate=rate,
                inflation_rate=inflation,
                school_fee_inflation=school_fee_inflation,
                include_inheritance=inh,
                include_investment_exit=exit_,
            ))
    return tuple(out)


PRESETS = _catalogue()


def get_assumption(assumption_id: str) -> AssumptionSet:
    for a in PRESETS:
        if a.id == assumption_id:
            return a
    raise KeyError(f"Unknown assumption set: {assumption_id}")


def is_satisfiable(assumptions: AssumptionSet, cfg: PlanConfig) -> bool:
    """A windfall assumption only makes sense if the windfall is actually configured."""
    if assumptions.include_inheritance and not cfg.inheritance_amount > 0:
        return False
    if assumptions.include_investment_exit and not cfg.investment_exit_gross > 0:
        return False
    return True


def active_assumptions(cfg: PlanConfig, presets=PRESETS) -> list[AssumptionSet]:
    return [a for a in presets if is_satisfiable(a, cfg)]
