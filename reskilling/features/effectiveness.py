from __future__ import annotations

import pandas as pd
import numpy as np

from reskilling.config.constants import SUCCESS_STATUSES, UNKNOWN_PROGRAM
from reskilling.models.schema import CasesWithEvents, ProgramEffectiveness, empty_frame

PROGRAM_COLUMNS = [
    "program",
    "totalCases",
    "completed",
    "certified",
    "totalEvents",
    "successEvents",
    "completionRate",
    "certificationRate",
    "successRate",
]


def rate(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Percentage of ``numerator`` over ``denominator``; 0 where the denominator is 0."""
    return (numerator / denominator.replace(0, np.nan) * 100).fillna(0.0).astype(float)


def scalar_rate(numerator: float, denominator: float) -> float:
    return float(numerator) / denominator * 100 if denominator else 0.0


def _case_flags(cases: pd.DataFrame) -> pd.DataFrame:
    flags = cases[["case_id", "training_program"]].copy()
    flags["isCompleted"] = cases["completion_date"].notna()
    flags["isCertified"] = cases["certification_earned"].fillna(False).astype(bool)
    return flags


def _event_flags(events: pd.DataFrame) -> pd.Series:
    return events["completion_status"].isin(SUCCESS_STATUSES).fillna(False).astype(bool)


def compute_program_effectiveness(cases_with_events: CasesWithEvents) -> ProgramEffectiveness:
    cases = _case_flags(cases_with_events.cases)
    events = cases_with_events.events[["case_id"]].copy()
    events["isSuccess"] = _event_flags(cases_with_events.events)

    total_cases = len(cases)
    overall = dict(
        total_cases=total_cases,
        completion_rate=scalar_rate(cases["isCompleted"].sum(), total_cases),
        certification_rate=scalar_rate(cases["isCertified"].sum(), total_cases),
        success_rate=scalar_rate(events["isSuccess"].sum(), len(events)),
    )

    grouped = cases.dropna(subset=["training_program"])
    if grouped.empty:
        return ProgramEffectiveness(programs=empty_frame(PROGRAM_COLUMNS), **overall)

    programs = grouped.groupby("training_program", sort=False).agg(
        totalCases=("case_id", "size"),
        completed=("isCompleted", "sum"),
        certified=("isCertified", "sum"),
    )

    program_events = events.merge(grouped[["case_id", "training_program"]], on="case_id", how="inner")
    event_stats = program_events.groupby("training_program", sort=False).agg(
        totalEvents=("isSuccess", "size"),
        successEvents=("isSuccess", "sum"),
    )

    programs = programs.join(event_stats, how="left")
    programs[["totalEvents", "successEvents"]] = programs[["totalEvents", "successEvents"]].fillna(0).astype(int)

    programs["completionRate"] = rate(programs["completed"], programs["totalCases"])
    programs["certificationRate"] = rate(programs["certified"], programs["totalCases"])
    programs["successRate"] = rate(programs["successEvents"], programs["totalEvents"])

    programs = programs.reset_index().rename(columns={"training_program": "program"})
    return ProgramEffectiveness(programs=programs[PROGRAM_COLUMNS], **overall)


def compute_reskilling_success_factors(cases_with_events: CasesWithEvents) -> pd.DataFrame:
    """Completion and certification rates per program, best completion first.

    Unlike ``compute_program_effectiveness`` this keeps cases without a program
    under an "Unknown" bucket.
    """
    cases = _case_flags(cases_with_events.cases)
    if cases.empty:
        return empty_frame(["factor", "totalCases", "successRate", "certificationRate"])

    cases["training_program"] = cases["training_program"].fillna(UNKNOWN_PROGRAM)
    factors = cases.groupby("training_program", sort=False).agg(
        totalCases=("case_id", "size"),
        completed=("isCompleted", "sum"),
        certified=("isCertified", "sum"),
    ).reset_index().rename(columns={"training_program": "factor"})

    factors["successRate"] = rate(factors["completed"], factors["totalCases"])
    factors["certificationRate"] = rate(factors["certified"], factors["totalCases"])
    factors = factors.sort_values("successRate", ascending=False, kind="stable").reset_index(drop=True)
    return factors[["factor", "totalCases", "successRate", "certificationRate"]]
