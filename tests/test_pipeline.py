"""
Tests for reskilling/pipelines and reskilling/main.py.

What we test
------------
build_tables():
  - Every derivation lands on the context under its result name.

build_report():
  - Markdown carries the KPI table, program rows, budget, role and priority score sections.
  - Without occupations the budget section explains the missing optimization.

run():
  - Loads CSV tables from --data-dir and prints the report to stdout.
  - A missing table exits with status 1.
  - An out-of-range --budget-cut is rejected by the argument parser.
  - A valid --budget-cut wins over an invalid RESKILLING_BUDGET_CUT.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from reskilling.config.constants import CASES_TABLE, EVENTS_TABLE, OCCUPATIONS_TABLE
from reskilling.config.settings import Settings
from reskilling.main import run
from reskilling.models.schema import Context
from reskilling.pipelines.build_report import build_report
from reskilling.pipelines.build_tables import build_tables

from conftest import make_occupations


def _settings(data_dir: Path, cut: float = 20) -> Settings:
    return Settings(
        base_dir=data_dir,
        data_dir=data_dir,
        budget_cut_percentage=cut,
        top_roles_limit=10,
        insight_limit=3,
        log_level="WARNING",
    )


@pytest.fixture
def ctx(tmp_path, cases, events, occupations) -> Context:
    context = Context(
        settings=_settings(tmp_path),
        data={"cases": cases, "events": events, "occupations": occupations},
    )
    build_tables(context)
    return context


def test_build_tables_results(ctx):
    expected = {
        "cases_with_events",
        "program_effectiveness",
        "reskilling_success_factors",
        "skill_category_stats",
        "budget_model",
        "programs_to_prioritize",
        "programs_to_reduce",
        "prioritization",
        "top_priority_roles",
        "priority_chart",
        "top_risk_occupations",
    }
    assert expected <= set(ctx.results)
    assert ctx.get("budget_model").cut_percentage == 20


def test_build_tables_leaves_inputs_untouched(tmp_path, cases, events, occupations):
    before = cases.copy()
    context = Context(settings=_settings(tmp_path), data={"cases": cases, "events": events, "occupations": occupations})
    build_tables(context)
    pd.testing.assert_frame_equal(cases, before)


def test_report_sections(ctx):
    report = build_report(ctx)
    assert report.startswith("# Workforce Reskilling Report")
    assert "## Executive KPI Summary" in report
    assert "| Completion rate | 60.0% |" in report
    assert "## Training Effectiveness by Program" in report
    assert "## Skill Categories" in report
    assert "### Training Capacity After Reallocation" in report
    assert "A 20% budget cut would reduce training capacity by approximately 25.0%" in report
    assert "- A (ROI: 0.50)" in report
    assert "### Top High Priority Roles" in report
    assert "Occupation 7" in report
    assert "| High Priority | 2 |" in report
    assert "| Medium Priority | 1 |" in report
    assert "### Priority Scores (Top 5)" in report
    assert "| Bookkeeping, Account... | 75.6 | 90.0% | High Priority |" in report


def test_report_without_occupations(tmp_path, cases, events):
    context = Context(
        settings=_settings(tmp_path),
        data={"cases": cases, "events": events, "occupations": make_occupations([])},
    )
    build_tables(context)
    report = build_report(context)
    assert "Budget optimization needs at least one program and one occupation." in report
    assert "No occupation falls in the High Priority quadrant." in report


# ── CLI ────────────────────────────────────────────────────────────────────────

def _write_tables(data_dir: Path, cases: pd.DataFrame, events: pd.DataFrame, occupations: pd.DataFrame) -> None:
    occupations.to_csv(data_dir / f"{OCCUPATIONS_TABLE}.csv", index=False)
    cases.to_csv(data_dir / f"{CASES_TABLE}.csv", index=False)
    events.to_csv(data_dir / f"{EVENTS_TABLE}.csv", index=False)


def test_run_prints_report(tmp_path, capsys, cases, events, occupations):
    _write_tables(tmp_path, cases, events, occupations)
    code = run(["--data-dir", str(tmp_path), "--budget-cut", "30", "--log-level", "WARNING"])

    assert code == 0
    out = capsys.readouterr().out
    assert "# Workforce Reskilling Report" in out
    assert "A 30% budget cut" in out


def test_run_missing_table(tmp_path, capsys):
    code = run(["--data-dir", str(tmp_path), "--log-level", "WARNING"])
    assert code == 1
    assert capsys.readouterr().out == ""


def test_run_rejects_out_of_range_cut(tmp_path):
    with pytest.raises(SystemExit) as exc:
        run(["--data-dir", str(tmp_path), "--budget-cut", "75"])
    assert exc.value.code == 2


def test_run_flag_overrides_invalid_environment_cut(tmp_path, capsys, monkeypatch, cases, events, occupations):
    monkeypatch.setenv("RESKILLING_BUDGET_CUT", "abc")
    _write_tables(tmp_path, cases, events, occupations)
    code = run(["--data-dir", str(tmp_path), "--budget-cut", "30", "--log-level", "WARNING"])

    assert code == 0
    assert "A 30% budget cut" in capsys.readouterr().out


def test_run_invalid_environment_cut(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("RESKILLING_BUDGET_CUT", "abc")
    assert run(["--data-dir", str(tmp_path)]) == 2
    assert "RESKILLING_BUDGET_CUT" in capsys.readouterr().err
