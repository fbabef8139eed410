from __future__ import annotations

from dataclasses import dataclass, field
import pandas as pd
from typing import Dict

from reskilling.config.settings import Settings


# Column name -> kind. Kinds drive coercion in reskilling.io.loaders.
CASE_COLUMNS: Dict[str, str] = {
    "case_id": "id",
    "employee_id": "id",
    "training_program": "text",
    "certification_earned": "bool",
    "completion_date": "date",
    "start_date": "date",
    "perceived_skill_improvement": "number",
    "training_feedback_score": "number",
}

EVENT_COLUMNS: Dict[str, str] = {
    "event_id": "id",
    "case_id": "id",
    "activity": "text",
    "actor": "text",
    "completion_status": "text",
    "score": "text",
    "skill_category": "text",
    "timestamp": "date",
}

OCCUPATION_COLUMNS: Dict[str, str] = {
    "soc_code": "id",
    "job_title": "text",
    "automation_probability": "number",
}


def empty_frame(columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype="object") for col in columns})


@dataclass(frozen=True)
class CasesWithEvents:
    """Cases with the events that reference them.

    ``events`` only ever holds rows whose ``case_id`` matches a case in
    ``cases``; the joiner drops everything else.
    """

    cases: pd.DataFrame
    events: pd.DataFrame

    def __len__(self) -> int:
        return len(self.cases)

    def events_for(self, case_id: int) -> pd.DataFrame:
        return self.events[self.events["case_id"].eq(case_id).fillna(False).astype(bool)]

    def event_counts(self) -> pd.Series:
        counts = self.events.groupby("case_id").size()
        return self.cases["case_id"].map(counts).fillna(0).astype(int).rename("eventCount")


@dataclass(frozen=True)
class ProgramEffectiveness:
    programs: pd.DataFrame
    total_cases: int
    completion_rate: float
    certification_rate: float
    success_rate: float


@dataclass(frozen=True)
class CurrentBudget:
    program_spending: pd.DataFrame
    total_budget: float
    total_participants: int


@dataclass(frozen=True)
class OptimizedBudget:
    program_allocation: pd.DataFrame
    new_total_budget: float
    total_participants_remaining: int
    total_participants_reduction: int
    percent_reduction: float
    unallocated_budget: float


@dataclass(frozen=True)
class BudgetModel:
    cut_percentage: float
    current: CurrentBudget
    optimized: OptimizedBudget | None
    comparison: pd.DataFrame


@dataclass
class Context:
    settings: Settings
    data: Dict[str, pd.DataFrame]
    results: Dict[str, object] = field(default_factory=dict)

    def add_result(self, name: str, result: object) -> None:
        self.results[name] = result

    def get(self, name: str) -> object:
        return self.results[name]
