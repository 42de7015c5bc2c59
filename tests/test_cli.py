import io
import json
from dataclasses import asdict

from cli import main
from exporters import export_config
from models import update_config


def test_costs_table_for_demo_household():
    out = io.StringIO()
    assert main(["--table", "costs"], out=out) == 0
    text = out.getvalue()
    assert "== costs ==" in text
    assert "education-supported" in text


def test_headline_csv(tmp_path):
    out = io.StringIO()
    assert main(["--table", "headline", "--csv-dir", str(tmp_path)], out=out) == 0
    written = (tmp_path / "headline.csv").read_text()
    assert written.splitlines()[0] == "metric,value"
    assert "net_worth" in written


def test_config_file(tmp_path, cfg):
    path = tmp_path / "config.json"
    path.write_bytes(export_config(update_config(cfg, partner2_gross_annual=0))[1])
    out = io.StringIO()
    assert main(["--config", str(path), "--table", "costs"], out=out) == 0
    assert "partner2-break" not in out.getvalue()


def test_bad_config_exits_with_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"partner1_birth_year": 1985, "partner2_birth_year": 1986, "fi_target_mode": "x"}))
    assert main(["--config", str(path)], out=io.StringIO()) == 2


def test_missing_snapshot_exits_with_error(tmp_path):
    assert main(["--snapshot", str(tmp_path / "nope.json")], out=io.StringIO()) == 2


def test_incomplete_config_exits_with_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"partner2_birth_year": 1986}))
    assert main(["--config", str(path)], out=io.StringIO()) == 2


def test_business_income_without_revenue_exits_with_error(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"partner1_birth_year": 1985, "partner2_birth_year": 1986,
                                "partner1_income": {"mode": "business"}}))
    assert main(["--config", str(path)], out=io.StringIO()) == 2


def test_snapshot_without_date_exits_with_error(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({"isas": 1000.0}))
    assert main(["--snapshot", str(path)], out=io.StringIO()) == 2


def test_scenarios_file_drives_cost_table(tmp_path, baseline):
    path = tmp_path / "scenarios.json"
    moved = dict(asdict(baseline), id="move-house", name="Move house", include_house_upgrade=True)
    path.write_text(json.dumps([asdict(baseline), moved]))
    out = io.StringIO()
    assert main(["--scenarios", str(path), "--table", "costs"], out=out) == 0
    text = out.getvalue()
    assert "move-house" in text
    assert "earlier-retire" not in text


def test_negative_scenario_revenue_exits_with_error(tmp_path, baseline):
    path = tmp_path / "scenarios.json"
    path.write_text(json.dumps([dict(asdict(baseline), partner1_annual_revenue=-5)]))
    assert main(["--scenarios", str(path), "--table", "costs"], out=io.StringIO()) == 2


def test_negative_return_exits_with_error(tmp_path, five_none):
    path = tmp_path / "assumptions.json"
    path.write_text(json.dumps([dict(asdict(five_none), real_return_rate=-0.02)]))
    assert main(["--assumptions", str(path), "--table", "cashflow"], out=io.StringIO()) == 2
