"""
Shared pytest fixtures for the reskilling analytics test suite.

Provides:
  - ``make_cases`` / ``make_events`` / ``make_occupations``: build frames from
    plain row dicts and run them through the loader normalizers, so every test
    sees the same column schema the pipeline sees.
  - ``cases`` / ``events`` / ``occupations``: a small mixed dataset with three
    programs, a case without a program, dangling events and an occupation
    without an automation probability.
  - ``cases_with_events``: the joined form of the sample dataset.
"""

from __future__ import annotations

import pandas as pd
import pytest

from reskilling.features.joiner import join_cases_with_events
from reskilling.io.loaders import normalize_cases, normalize_events, normalize_occupations
from reskilling.models.schema import CasesWithEvents


def make_cases(rows: list[dict]) -> pd.DataFrame:
    return normalize_cases(pd.DataFrame(rows))


def make_events(rows: list[dict]) -> pd.DataFrame:
    return normalize_events(pd.DataFrame(rows))


def make_occupations(rows: list[dict]) -> pd.DataFrame:
    return normalize_occupations(pd.DataFrame(rows))


# ── Sample dataset ─────────────────────────────────────────────────────────────

@pytest.fixture
def cases() -> pd.DataFrame:
    return make_cases(
        [
            {"case_id": 1, "training_program": "A", "certification_earned": True, "completion_date": "2023-02-01"},
            {"case_id": 2, "training_program": "A", "certification_earned": False, "completion_date": None},
            {"case_id": 3, "training_program": "B", "certification_earned": True, "completion_date": "2023-03-01"},
            {"case_id": 4, "training_program": "C", "certification_earned": None, "completion_date": None},
            {"case_id": 5, "training_program": None, "certification_earned": True, "completion_date": "2023-04-01"},
        ]
    )


@pytest.fixture
def events() -> pd.DataFrame:
    return make_events(
        [
            {"event_id": 10, "case_id": 1, "completion_status": "completed", "score": "85", "skill_category": "Data"},
            {"event_id": 11, "case_id": 1, "completion_status": "failed", "score": "abc", "skill_category": "Data"},
            {"event_id": 12, "case_id": 3, "completion_status": "passed", "score": "90", "skill_category": "Cloud"},
            {"event_id": 13, "case_id": 3, "completion_status": "completed", "score": None, "skill_category": None},
            {"event_id": 14, "case_id": 99, "completion_status": "completed", "score": "70", "skill_category": "Data"},
            {"event_id": 15, "case_id": None, "completion_status": "passed", "score": "60", "skill_category": "Data"},
            {"event_id": 16, "case_id": 5, "completion_status": "failed", "score": "40", "skill_category": "Cloud"},
        ]
    )


@pytest.fixture
def occupations() -> pd.DataFrame:
    return make_occupations(
        [
            {"soc_code": 100, "job_title": "Data Entry Clerk", "automation_probability": 0.8},
            {"soc_code": 2, "job_title": "Bookkeeping, Accounting and Auditing Clerks", "automation_probability": 0.9},
            {"soc_code": 3, "job_title": "Registered Nurse", "automation_probability": 0.3},
            {"soc_code": 5, "job_title": "Chief Executive", "automation_probability": 0.2},
            {"soc_code": 6, "job_title": "Unrated Role", "automation_probability": None},
            {"soc_code": 7, "job_title": None, "automation_probability": 0.6},
        ]
    )


@pytest.fixture
def cases_with_events(cases: pd.DataFrame, events: pd.DataFrame) -> CasesWithEvents:
    return join_cases_with_events(cases, events)
