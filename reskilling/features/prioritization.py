from __future__ import annotations

import pandas as pd
import numpy as np

from reskilling.config.constants import (
    EASE_BASE,
    EASE_MODULUS,
    EASE_MULTIPLIER,
    EASE_THRESHOLD,
    EASE_WEIGHT,
    HIGH_PRIORITY,
    LOW_PRIORITY,
    LOWEST_PRIORITY,
    MEDIUM_PRIORITY,
    RISK_THRESHOLD,
    RISK_WEIGHT,
)
from reskilling.io.writers import safe_label
from reskilling.models.schema import CasesWithEvents, empty_frame

PRIORITY_COLUMNS = ["id", "name", "automationRisk", "reskillingEase", "priorityScore", "quadrant"]


def reskilling_ease(soc_code: int) -> int:
    """Deterministic stand-in for how easily a role can be reskilled (20-79)."""
    return EASE_BASE + (int(soc_code) * EASE_MULTIPLIER) % EASE_MODULUS


def occupation_name(soc_code: int, job_title: object) -> str:
    return safe_label(job_title, None, default=f"Occupation {soc_code}")


def assign_quadrant(probability: pd.Series, ease: pd.Series) -> pd.Series:
    high_risk = probability > RISK_THRESHOLD
    easy = ease > EASE_THRESHOLD
    quadrant = np.select(
        [high_risk & easy, high_risk & ~easy, ~high_risk & easy],
        [HIGH_PRIORITY, MEDIUM_PRIORITY, LOW_PRIORITY],
        default=LOWEST_PRIORITY,
    )
    return pd.Series(quadrant, index=probability.index, dtype=object)


def compute_prioritization(
    occupations: pd.DataFrame,
    cases_with_events: CasesWithEvents | None = None,
) -> pd.DataFrame:
    """Rank occupations by automation risk blended with reskilling ease.

    Occupations without an automation probability are left out. Case data is
    accepted so the ranking can be refreshed alongside the other derivations,
    but it does not move any score.
    """
    rated = occupations.dropna(subset=["automation_probability"])
    if rated.empty:
        return empty_frame(PRIORITY_COLUMNS)

    probability = rated["automation_probability"].astype(float)
    soc_codes = rated["soc_code"].astype(int)

    priorities = pd.DataFrame(
        {
            "id": soc_codes,
            "name": [occupation_name(soc, title) for soc, title in zip(soc_codes, rated["job_title"])],
            "automationRisk": probability * 100,
            "reskillingEase": soc_codes.map(reskilling_ease).astype(int),
        },
        index=rated.index,
    )
    priorities["priorityScore"] = priorities["automationRisk"] * RISK_WEIGHT + priorities["reskillingEase"] * EASE_WEIGHT
    priorities["quadrant"] = assign_quadrant(probability, priorities["reskillingEase"])

    priorities = priorities.sort_values("priorityScore", ascending=False, kind="stable").reset_index(drop=True)
    return priorities[PRIORITY_COLUMNS]


def top_priority_roles(prioritization: pd.DataFrame, limit: int = 10) -> pd.DataFrame:
    high = prioritization[prioritization["quadrant"] == HIGH_PRIORITY]
    return high.head(limit).reset_index(drop=True)


def priority_chart(prioritization: pd.DataFrame, limit: int = 10, max_name_length: int = 20) -> pd.DataFrame:
    chart = prioritization.head(limit)[["name", "priorityScore", "automationRisk", "quadrant"]].copy()
    chart["name"] = chart["name"].map(
        lambda name: f"{name[:max_name_length]}..." if len(name) > max_name_length else name
    )
    return chart.rename(columns={"priorityScore": "score", "automationRisk": "risk"}).reset_index(drop=True)


def top_risk_occupations(occupations: pd.DataFrame, limit: int = 10) -> pd.DataFrame:
    rated = occupations.dropna(subset=["automation_probability"])
    if rated.empty:
        return empty_frame(["id", "name", "risk"])

    leaders = pd.DataFrame(
        {
            "id": rated["soc_code"].astype(int),
            "name": [occupation_name(soc, title) for soc, title in zip(rated["soc_code"], rated["job_title"])],
            "risk": rated["automation_probability"].astype(float),
        }
    )
    leaders = leaders.sort_values("risk", ascending=False, kind="stable").head(limit)
    return leaders.reset_index(drop=True)
