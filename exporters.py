# exporters.py
import json
import re
from dataclasses import asdict, fields
from datetime import date, datetime

import numpy as np
import pandas as pd
from dateutil import parser as date_parser

from checks import validate_assumptions, validate_config, validate_scenario, validate_snapshot
from models import (
    AssumptionSet, BusinessIncome, CashflowTableRow, EmployedIncome, HeadlineMetrics, HouseholdSnapshot,
    MinimumIncomeRow, PlanConfig, ScenarioCostTableRow, ScenarioDefinition,
)

# Pasted from the net-worth spreadsheet, in this column order
NET_WORTH_COLUMNS = (
    "date", "current_accounts", "savings_accounts", "isas", "pensions", "taxable_accounts",
    "house_equity", "business_assets", "investment_assets", "total",
)
_MIN_INCOME_CELLS = (
    "partner2_working", "partner2_break", "paye_alternative",
    "partner2_working_with_windfalls", "partner2_break_with_windfalls", "paye_alternative_with_windfalls",
)


def _json_default(o):
    # numpy arrays & scalars, dates
    if isinstance(o, np.ndarray):
        return o.tolist()
    if isinstance(o, (np.float32, np.float64, np.int32, np.int64, np.bool_)):
        return o.item()
    if isinstance(o, (date, datetime)):
        return o.isoformat()
    # Let json raise for anything else unexpected
    raise TypeError(f"Object of type {o.__class__.__name__} is not JSON serializable")


# ---------- Config ----------
def income_to_dict(income) -> dict:
    if isinstance(income, BusinessIncome):
        return {"mode": "business", "revenue": income.revenue}
    if isinstance(income, EmployedIncome):
        return {"mode": "employed", "salary": income.salary}
    raise TypeError(f"Unknown income variant: {income!r}")


def income_from_dict(raw: dict):
    if not isinstance(raw, dict):
        raise ValueError(f"Partner 1 income must be an object with a mode, got {raw!r}")
    mode = raw.get("mode")
    try:
        if mode == "business":
            return BusinessIncome(float(raw["revenue"]))
        if mode == "employed":
            return EmployedIncome(float(raw["salary"]))
    except KeyError as exc:
        raise ValueError(f"Partner 1 {mode} income needs a {exc.args[0]!r} amount") from exc
    except TypeError as exc:
        raise ValueError(f"Partner 1 {mode} income amount must be a number") from exc
    raise ValueError(f"Partner 1 income mode must be 'business' or 'employed', got {mode!r}")


def config_to_dict(cfg: PlanConfig) -> dict:
    out = {f.name: getattr(cfg, f.name) for f in fields(cfg)}
    out["partner1_income"] = income_to_dict(cfg.partner1_income)
    out["children_birth_years"] = list(cfg.children_birth_years)
    out["enabled_scenario_ids"] = list(cfg.enabled_scenario_ids)
    return out


def _build(cls, data: dict, what: str):
    """Construct a record, reporting missing or unexpected fields as ValueError."""
    try:
        return cls(**data)
    except TypeError as exc:
        raise ValueError(f"Invalid {what}: {exc}") from exc


def config_from_dict(raw: dict) -> PlanConfig:
    if not isinstance(raw, dict):
        raise ValueError("Config must be a JSON object")
    known = {f.name for f in fields(PlanConfig)}
    unknown = set(raw) - known
    if unknown:
        raise ValueError(f"Unknown config fields: {', '.join(sorted(unknown))}")
    data = dict(raw)
    if "partner1_income" in data:
        data["partner1_income"] = income_from_dict(data["partner1_income"])
    data["children_birth_years"] = tuple(data.get("children_birth_years", ()))
    data["enabled_scenario_ids"] = tuple(data.get("enabled_scenario_ids", ()))
    return _build(PlanConfig, data, "config")


def export_config(cfg: PlanConfig) -> tuple[str, bytes]:
    blob = json.dumps(config_to_dict(cfg), indent=2, default=_json_default)
    return "config.json", blob.encode()


def load_config(path) -> PlanConfig:
    with open(path, "r", encoding="utf-8") as f:
        cfg = config_from_dict(json.load(f))
    validate_config(cfg)
    return cfg


# ---------- Snapshot ----------
def snapshot_from_dict(raw: dict) -> HouseholdSnapshot:
    if not isinstance(raw, dict):
        raise ValueError("Snapshot must be a JSON object")
    data = dict(raw)
    when = data.get("date")
    if isinstance(when, str):
        try:
            data["date"] = date_parser.isoparse(when).date()
        except ValueError as exc:
            raise ValueError(f"Unreadable snapshot date: {when!r}") from exc
    return _build(HouseholdSnapshot, data, "snapshot")


def export_snapshot(snapshot: HouseholdSnapshot) -> tuple[str, bytes]:
    blob = json.dumps(asdict(snapshot), indent=2, default=_json_default)
    return f"snapshot_{snapshot.date.isoformat()}.json", blob.encode()


def load_snapshot(path) -> HouseholdSnapshot:
    with open(path, "r", encoding="utf-8") as f:
        snapshot = snapshot_from_dict(json.load(f))
    validate_snapshot(snapshot)
    return snapshot


# ---------- Scenarios / assumption sets ----------
def _load_list(path, cls, what: str, validate) -> list:
    """A JSON list of objects, each built into cls and validated."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list) or not raw:
        raise ValueError(f"Expected a non-empty JSON list of {what}s in {path}")
    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValueError(f"Each {what} must be a JSON object, got {entry!r}")
        item = _build(cls, entry, what)
        validate(item)
        items.append(item)
    return items


def load_scenarios(path) -> list[ScenarioDefinition]:
    return _load_list(path, ScenarioDefinition, "scenario", validate_scenario)


def load_assumptions(path) -> list[AssumptionSet]:
    return _load_list(path, AssumptionSet, "assumption set", validate_assumptions)


def _parse_amount(text: str) -> float:
    cleaned = re.sub(r"[£$,\s]", "", text or "")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def parse_net_worth_row(text: str, business_revenue_ytd: float = 0.0, partner2_income_ytd: float = 0.0,
                        personal_expenses_ytd: float = 0.0, business_expenses_ytd: float = 0.0) -> HouseholdSnapshot:
    """
    Build a snapshot from one spreadsheet row:
    Date | Current | Savings | ISAs | Pensions | Taxable | House | Business | Investment | Total
    Tab-, comma- or pipe-separated; dates are day-first.
    """
    line = text.strip().splitlines()[0] if text.strip() else ""
    # amounts may carry thousands commas, so commas only separate when nothing else does
    if "\t" in line:
        parts = line.split("\t")
    elif "|" in line:
        parts = line.split("|")
    else:
        parts = line.split(",")
    if len(parts) < len(NET_WORTH_COLUMNS):
        raise ValueError(f"Expected {len(NET_WORTH_COLUMNS)} columns, got {len(parts)}")

    try:
        when = date_parser.parse(parts[0].strip(), dayfirst=True).date()
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Unreadable snapshot date: {parts[0]!r}") from exc

    amounts = {name: _parse_amount(p) for name, p in zip(NET_WORTH_COLUMNS[1:], parts[1:])}
    snapshot = HouseholdSnapshot(
        date=when,
        business_revenue_ytd=business_revenue_ytd,
        partner2_income_ytd=partner2_income_ytd,
        personal_expenses_ytd=personal_expenses_ytd,
        business_expenses_ytd=business_expenses_ytd,
        total_expenses_ytd=personal_expenses_ytd + business_expenses_ytd,
        **amounts,
    )
    validate_snapshot(snapshot)
    return snapshot


# ---------- Tables ----------
def headline_frame(metrics: HeadlineMetrics) -> pd.DataFrame:
    return pd.DataFrame({"metric": list(asdict(metrics)), "value": list(asdict(metrics).values())})


def cashflow_frame(rows: list[CashflowTableRow]) -> pd.DataFrame:
    """One row per scenario, one column per assumption set (money lasts to age)."""
    records = [{"scenario_id": r.scenario_id, "scenario": r.scenario_name, **r.results} for r in rows]
    return pd.DataFrame(records).set_index("scenario_id") if records else pd.DataFrame()


def scenario_cost_frame(rows: list[ScenarioCostTableRow]) -> pd.DataFrame:
    return pd.DataFrame([asdict(r) for r in rows])


def minimum_income_frame(rows: list[MinimumIncomeRow]) -> pd.DataFrame:
    records = []
    for r in rows:
        rec = {"threshold": r.threshold, "label": r.label, "description": r.description}
        for cell in _MIN_INCOME_CELLS:
            result = getattr(r, cell)
            rec[cell] = result.value
            rec[cell + "_hits_cap"] = result.hits_cap
        records.append(rec)
    return pd.DataFrame(records)


def format_min_income(value: float, hits_cap: bool) -> str:
    if hits_cap:
        return f"> £{value / 1_000_000:g}m" if value >= 1_000_000 else f"> £{value / 1000:,.0f}k"
    return f"£{value / 1000:,.0f}k"


def format_age(age: int, cap: int = 100) -> str:
    return f"{cap}+" if age >= cap else str(age)


def export_table(df: pd.DataFrame, name: str) -> tuple[str, bytes]:
    return f"{name}.csv", df.to_csv(index=not isinstance(df.index, pd.RangeIndex)).encode()
