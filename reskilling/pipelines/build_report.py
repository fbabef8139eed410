from __future__ import annotations

import pandas as pd

from reskilling.config.constants import QUADRANTS
from reskilling.models.schema import BudgetModel, Context, ProgramEffectiveness
from reskilling.io.writers import md_table, fmt_pct, fmt_num, fmt_int, fmt_money, safe_label


def _program_rows(effectiveness: ProgramEffectiveness) -> list[list[str]]:
    return [
        [
            safe_label(row["program"], None),
            fmt_int(row["totalCases"]),
            fmt_pct(row["completionRate"]),
            fmt_pct(row["certificationRate"]),
            fmt_pct(row["successRate"]),
        ]
        for _, row in effectiveness.programs.iterrows()
    ]


def _budget_section(budget: BudgetModel, prioritize: pd.DataFrame, reduce: pd.DataFrame) -> list[str]:
    lines: list[str] = []
    current = budget.current
    lines.append("## Budget Analysis")
    lines.append(
        f"Current training spend is {fmt_money(current.total_budget)} across {fmt_int(current.total_participants)} participants."
    )
    lines.append("")

    if not current.program_spending.empty:
        rows = [
            [
                row["program"],
                fmt_int(row["participants"]),
                fmt_money(row["costPerParticipant"]),
                fmt_money(row["totalCost"]),
                fmt_pct(row["percentOfBudget"]),
            ]
            for _, row in current.program_spending.iterrows()
        ]
        lines.append("### Current Spending by Program")
        lines.append(md_table(["Program", "Participants", "Cost / Participant", "Total Cost", "Share"], rows))
        lines.append("")

    optimized = budget.optimized
    if optimized is None:
        lines.append("Budget optimization needs at least one program and one occupation.")
        lines.append("")
        return lines

    lines.append("### Impact Summary")
    lines.append(
        f"A {fmt_num(float(budget.cut_percentage))}% budget cut would reduce training capacity by approximately "
        f"{fmt_pct(optimized.percent_reduction)}, affecting {fmt_int(optimized.total_participants_reduction)} potential participants. "
        f"The reduced budget is {fmt_money(optimized.new_total_budget)}, of which {fmt_money(optimized.unallocated_budget)} stays unallocated."
    )
    lines.append("")

    rows = [
        [
            row["program"],
            fmt_pct(row["successRate"]),
            f"{row['roi']:.2f}",
            fmt_money(row["totalCost"]),
            fmt_money(row["newBudget"]),
            fmt_int(row["newParticipants"]),
            fmt_pct(row["change"]),
        ]
        for _, row in optimized.program_allocation.iterrows()
    ]
    lines.append("### Training Capacity After Reallocation")
    lines.append(md_table(["Program", "Success Rate", "ROI", "Current", "Optimized", "New Capacity", "Change"], rows))
    lines.append("")

    lines.append("### Programs to Prioritize")
    for _, row in prioritize.iterrows():
        lines.append(f"- {row['program']} (ROI: {row['roi']:.2f})")
    lines.append("")
    lines.append("### Programs to Reduce")
    for _, row in reduce.iterrows():
        lines.append(f"- {row['program']} (ROI: {row['roi']:.2f})")
    lines.append("")
    return lines


def build_report(ctx: Context) -> str:
    r = ctx.results

    effectiveness: ProgramEffectiveness = ctx.get("program_effectiveness")
    success_factors = r.get("reskilling_success_factors", pd.DataFrame())
    skill_stats = r.get("skill_category_stats", pd.DataFrame())
    budget: BudgetModel = ctx.get("budget_model")
    prioritize = r.get("programs_to_prioritize", pd.DataFrame())
    reduce = r.get("programs_to_reduce", pd.DataFrame())
    prioritization = r.get("prioritization", pd.DataFrame())
    top_roles = r.get("top_priority_roles", pd.DataFrame())
    chart = r.get("priority_chart", pd.DataFrame())
    top_risk = r.get("top_risk_occupations", pd.DataFrame())

    lines: list[str] = []
    lines.append("# Workforce Reskilling Report")
    lines.append("")

    lines.append("## Executive KPI Summary")
    kpi_rows = [
        ["Training cases", fmt_int(effectiveness.total_cases)],
        ["Completion rate", fmt_pct(effectiveness.completion_rate)],
        ["Certification rate", fmt_pct(effectiveness.certification_rate)],
        ["Event success rate", fmt_pct(effectiveness.success_rate)],
        ["Occupations ranked", fmt_int(len(prioritization))],
        ["High priority roles", fmt_int(len(top_roles))],
    ]
    lines.append(md_table(["Metric", "Value"], kpi_rows))
    lines.append("")

    lines.append("## Training Effectiveness by Program")
    if effectiveness.programs.empty:
        lines.append("No cases carry a training program.")
    else:
        lines.append(md_table(["Program", "Cases", "Completion", "Certification", "Event Success"], _program_rows(effectiveness)))
    lines.append("")

    if not success_factors.empty:
        rows = [
            [safe_label(row["factor"], None), fmt_pct(row["successRate"]), fmt_pct(row["certificationRate"])]
            for _, row in success_factors.iterrows()
        ]
        lines.append("## Reskilling Success Factors")
        lines.append(md_table(["Program", "Completion", "Certification"], rows))
        lines.append("")

    if not skill_stats.empty:
        rows = [
            [
                row["category"],
                fmt_int(row["totalEvents"]),
                fmt_int(row["completed"]),
                fmt_int(row["passed"]),
                fmt_int(row["failed"]),
                fmt_num(float(row["avgScore"])),
                fmt_pct(row["successRate"]),
            ]
            for _, row in skill_stats.iterrows()
        ]
        lines.append("## Skill Categories")
        lines.append(md_table(["Category", "Events", "Completed", "Passed", "Failed", "Avg Score", "Success"], rows))
        lines.append("")

    lines.extend(_budget_section(budget, prioritize, reduce))

    lines.append("## Role Prioritization")
    if top_roles.empty:
        lines.append("No occupation falls in the High Priority quadrant.")
    else:
        rows = [
            [row["name"], fmt_pct(row["automationRisk"]), fmt_int(row["reskillingEase"]), f"{row['priorityScore']:.1f}"]
            for _, row in top_roles.iterrows()
        ]
        lines.append("### Top High Priority Roles")
        lines.append(md_table(["Role", "Automation Risk", "Reskilling Ease", "Priority Score"], rows))
    lines.append("")

    if not prioritization.empty:
        counts = prioritization["quadrant"].value_counts()
        lines.append("### Roles per Quadrant")
        lines.append(md_table(["Quadrant", "Roles"], [[q, fmt_int(counts.get(q, 0))] for q in QUADRANTS]))
        lines.append("")

    if not chart.empty:
        rows = [
            [row["name"], f"{row['score']:.1f}", fmt_pct(row["risk"]), row["quadrant"]]
            for _, row in chart.iterrows()
        ]
        lines.append(f"### Priority Scores (Top {len(chart)})")
        lines.append(md_table(["Role", "Priority Score", "Automation Risk", "Quadrant"], rows))
        lines.append("")

    if not prioritization.empty:

        rows = [
            [row["name"], fmt_pct(row["automationRisk"]), fmt_int(row["reskillingEase"]), f"{row['priorityScore']:.1f}", row["quadrant"]]
            for _, row in prioritization.head(20).iterrows()
        ]
        lines.append("### Prioritization Matrix (Top 20)")
        lines.append(md_table(["Role", "Automation Risk", "Reskilling Ease", "Priority Score", "Quadrant"], rows))
        lines.append("")

    if not top_risk.empty:
        rows = [[row["name"], fmt_pct(row["risk"] * 100)] for _, row in top_risk.iterrows()]
        lines.append("## Highest Automation Risk")
        lines.append(md_table(["Occupation", "Automation Probability"], rows))
        lines.append("")

    lines.append("## Glossary")
    lines.append("- Case: one employee's reskilling or training record.")
    lines.append("- ROI: certification rate per thousand spent on a participant, used only to weight budget allocation.")
    lines.append("- Reskilling Ease: a synthetic placeholder score, not a learned model.")
    lines.append("")

    return "\n".join(lines)
