from __future__ import annotations

import pandas as pd

from reskilling.config.constants import UNCATEGORIZED
from reskilling.features.effectiveness import rate
from reskilling.models.schema import CasesWithEvents, empty_frame

SKILL_COLUMNS = [
    "category",
    "totalEvents",
    "completed",
    "passed",
    "failed",
    "scoredEvents",
    "avgScore",
    "successRate",
]


LEADING_NUMBER = r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"


def parse_scores(scores: pd.Series) -> pd.Series:
    """Read the leading number of each score, so "85%" is 85 and "7.5/10" is 7.5.

    Scores without a leading number become NaN and drop out of the mean.
    """
    leading = scores.astype("string").str.extract(LEADING_NUMBER, expand=False)
    return pd.to_numeric(leading.fillna("").astype(object), errors="coerce").astype(float)


def compute_skill_category_stats(cases_with_events: CasesWithEvents) -> pd.DataFrame:
    events = cases_with_events.events
    if events.empty:
        return empty_frame(SKILL_COLUMNS)

    status = events["completion_status"]
    frame = pd.DataFrame(
        {
            "category": events["skill_category"].fillna(UNCATEGORIZED),
            "isCompleted": status.eq("completed").fillna(False).astype(bool),
            "isPassed": status.eq("passed").fillna(False).astype(bool),
            "isFailed": status.eq("failed").fillna(False).astype(bool),
            "score": parse_scores(events["score"]),
        }
    )

    stats = frame.groupby("category", sort=False).agg(
        totalEvents=("category", "size"),
        completed=("isCompleted", "sum"),
        passed=("isPassed", "sum"),
        failed=("isFailed", "sum"),
        scoredEvents=("score", "count"),
        avgScore=("score", "mean"),
    ).reset_index()

    stats["avgScore"] = stats["avgScore"].fillna(0.0)
    stats["successRate"] = rate(stats["completed"] + stats["passed"], stats["totalEvents"])
    stats = stats.sort_values("successRate", ascending=False, kind="stable").reset_index(drop=True)
    return stats[SKILL_COLUMNS]
