from __future__ import annotations

import logging

import pandas as pd
import numpy as np

from reskilling.config.constants import (
    ALLOCATION_WEIGHT,
    COST_BASE,
    COST_MODULUS,
    COST_NORMALIZER,
    COST_STEP,
)
from reskilling.features.effectiveness import rate
from reskilling.models.schema import (
    BudgetModel,
    CasesWithEvents,
    CurrentBudget,
    OptimizedBudget,
    empty_frame,
)

logger = logging.getLogger(__name__)

SPENDING_COLUMNS = ["program", "participants", "costPerParticipant", "totalCost", "percentOfBudget"]
ALLOCATION_COLUMNS = SPENDING_COLUMNS + [
    "successRate",
    "roi",
    "newBudget",
    "newParticipants",
    "change",
    "newPercentOfBudget",
]
COMPARISON_COLUMNS = ["program", "current", "optimized", "change"]


def program_costs(cases: pd.DataFrame) -> dict[str, int]:
    """Synthetic cost per participant, keyed by program in first-seen order."""
    programs = cases["training_program"].dropna().unique()
    return {str(program): COST_BASE + (index * COST_STEP) % COST_MODULUS for index, program in enumerate(programs)}


def current_budget(cases: pd.DataFrame) -> CurrentBudget:
    costs = program_costs(cases)
    programs = cases["training_program"].dropna()
    if programs.empty:
        return CurrentBudget(program_spending=empty_frame(SPENDING_COLUMNS), total_budget=0.0, total_participants=0)

    counts = programs.groupby(programs, sort=False).size()
    spending = pd.DataFrame(
        {
            "program": counts.index.astype(str),
            "participants": counts.to_numpy(dtype=int),
        }
    )
    spending["costPerParticipant"] = spending["program"].map(costs).astype(int)
    spending["totalCost"] = (spending["costPerParticipant"] * spending["participants"]).astype(float)

    total_budget = float(spending["totalCost"].sum())
    spending["percentOfBudget"] = rate(spending["totalCost"], pd.Series(total_budget, index=spending.index))
    spending = spending.sort_values("totalCost", ascending=False, kind="stable").reset_index(drop=True)

    return CurrentBudget(
        program_spending=spending[SPENDING_COLUMNS],
        total_budget=total_budget,
        total_participants=int(spending["participants"].sum()),
    )


def _certification_rates(cases: pd.DataFrame) -> pd.Series:
    with_program = cases.dropna(subset=["training_program"])
    certified = with_program["certification_earned"].fillna(False).astype(bool)
    grouped = certified.groupby(with_program["training_program"].astype(str), sort=False)
    return grouped.sum() / grouped.size()


def optimize_budget(current: CurrentBudget, cases: pd.DataFrame, cut_percentage: float) -> OptimizedBudget | None:
    """Re-spread a reduced budget across programs in proportion to ROI.

    ROI is the certification rate per thousand spent on a participant. Each
    program receives ``ALLOCATION_WEIGHT`` times its ROI share of the reduced
    budget, capped at what it costs today. Money freed by the cap is reported
    as ``unallocated_budget`` and is not handed to other programs.
    """
    spending = current.program_spending
    if spending.empty:
        return None

    new_total_budget = current.total_budget * (1 - cut_percentage / 100)

    allocation = spending.copy()
    success = allocation["program"].map(_certification_rates(cases)).fillna(0.0).astype(float)
    allocation["successRate"] = success * 100
    allocation["roi"] = success / (allocation["costPerParticipant"] / COST_NORMALIZER)
    allocation = allocation.sort_values("roi", ascending=False, kind="stable").reset_index(drop=True)

    roi_total = float(allocation["roi"].sum())
    if roi_total > 0:
        weighted = new_total_budget * (allocation["roi"] / roi_total) * ALLOCATION_WEIGHT
    else:
        weighted = pd.Series(0.0, index=allocation.index)
    allocation["newBudget"] = np.minimum(allocation["totalCost"], weighted)

    allocation["newParticipants"] = np.floor(allocation["newBudget"] / allocation["costPerParticipant"]).astype(int)
    allocation["change"] = rate(allocation["newBudget"] - allocation["totalCost"], allocation["totalCost"])
    allocation["newPercentOfBudget"] = rate(allocation["newBudget"], pd.Series(new_total_budget, index=allocation.index))
    allocation = allocation.sort_values("newBudget", ascending=False, kind="stable").reset_index(drop=True)

    remaining = int(allocation["newParticipants"].sum())
    reduction = current.total_participants - remaining
    unallocated = new_total_budget - float(allocation["newBudget"].sum())
    logger.debug("Budget cut %.0f%% leaves %.2f unallocated", cut_percentage, unallocated)

    return OptimizedBudget(
        program_allocation=allocation[ALLOCATION_COLUMNS],
        new_total_budget=new_total_budget,
        total_participants_remaining=remaining,
        total_participants_reduction=reduction,
        percent_reduction=float(reduction) / current.total_participants * 100 if current.total_participants else 0.0,
        unallocated_budget=unallocated,
    )


def budget_comparison(current: CurrentBudget, optimized: OptimizedBudget | None) -> pd.DataFrame:
    if optimized is None or current.program_spending.empty:
        return empty_frame(COMPARISON_COLUMNS)

    new_budget = optimized.program_allocation.set_index("program")["newBudget"]
    comparison = current.program_spending[["program", "totalCost"]].rename(columns={"totalCost": "current"})
    comparison["optimized"] = comparison["program"].map(new_budget)
    comparison["change"] = rate(comparison["optimized"] - comparison["current"], comparison["current"])
    comparison.loc[comparison["optimized"].isna(), "change"] = -100.0
    comparison["optimized"] = comparison["optimized"].fillna(0.0)
    return comparison[COMPARISON_COLUMNS].reset_index(drop=True)


def key_insights(optimized: OptimizedBudget | None, limit: int = 3) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Programs to prioritize and programs to reduce, by reallocated budget."""
    if optimized is None or optimized.program_allocation.empty:
        empty = empty_frame(["program", "roi", "newBudget"])
        return empty, empty.copy()

    allocation = optimized.program_allocation[["program", "roi", "newBudget"]]
    prioritize = allocation.head(limit).reset_index(drop=True)
    reduce = allocation.tail(limit).iloc[::-1].reset_index(drop=True)
    return prioritize, reduce


def compute_budget_model(
    cases_with_events: CasesWithEvents,
    occupations: pd.DataFrame,
    cut_percentage: float,
) -> BudgetModel:
    cases = cases_with_events.cases
    current = current_budget(cases)

    optimized = None
    if not current.program_spending.empty and not occupations.empty:
        optimized = optimize_budget(current, cases, cut_percentage)
    else:
        logger.info("Skipping budget optimization: %d programs, %d occupations", len(current.program_spending), len(occupations))

    return BudgetModel(
        cut_percentage=cut_percentage,
        current=current,
        optimized=optimized,
        comparison=budget_comparison(current, optimized),
    )
