from __future__ import annotations

import logging

from reskilling.models.schema import Context
from reskilling.features.joiner import join_cases_with_events
from reskilling.features.effectiveness import (
    compute_program_effectiveness,
    compute_reskilling_success_factors,
)
from reskilling.features.skills import compute_skill_category_stats
from reskilling.features.budget import compute_budget_model, key_insights
from reskilling.features.prioritization import (
    compute_prioritization,
    priority_chart,
    top_priority_roles,
    top_risk_occupations,
)

logger = logging.getLogger(__name__)


def build_tables(ctx: Context) -> None:
    settings = ctx.settings
    data = ctx.data

    occupations = data["occupations"]
    cases = data["cases"]
    events = data["events"]

    cases_with_events = join_cases_with_events(cases, events)
    ctx.add_result("cases_with_events", cases_with_events)
    logger.info("Joined %d events onto %d cases", len(cases_with_events.events), len(cases_with_events))

    # Training effectiveness
    effectiveness = compute_program_effectiveness(cases_with_events)
    ctx.add_result("program_effectiveness", effectiveness)
    ctx.add_result("reskilling_success_factors", compute_reskilling_success_factors(cases_with_events))
    ctx.add_result("skill_category_stats", compute_skill_category_stats(cases_with_events))

    # Budget
    budget = compute_budget_model(cases_with_events, occupations, settings.budget_cut_percentage)
    prioritize, reduce = key_insights(budget.optimized, limit=settings.insight_limit)
    ctx.add_result("budget_model", budget)
    ctx.add_result("programs_to_prioritize", prioritize)
    ctx.add_result("programs_to_reduce", reduce)

    # Roles
    prioritization = compute_prioritization(occupations, cases_with_events)
    ctx.add_result("prioritization", prioritization)
    ctx.add_result("top_priority_roles", top_priority_roles(prioritization, limit=settings.top_roles_limit))
    ctx.add_result("priority_chart", priority_chart(prioritization, limit=settings.top_roles_limit))
    ctx.add_result("top_risk_occupations", top_risk_occupations(occupations, limit=settings.top_roles_limit))

    logger.info(
        "Built %d program rows, %d skill categories, %d prioritized roles",
        len(effectiveness.programs),
        len(ctx.results["skill_category_stats"]),
        len(prioritization),
    )
