from __future__ import annotations

import pandas as pd


def md_table(headers: list[str], rows: list[list[str]]) -> str:
    lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
    for row in rows:
        lines.append("| " + " | ".join(row) + " |")
    return "\n".join(lines)


def fmt_pct(value: float | int | None) -> str:
    # Rates in this package are already on a 0-100 scale.
    if value is None or pd.isna(value):
        return "n/a"
    return f"{value:.1f}%"


def fmt_num(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    if isinstance(value, float) and value.is_integer():
        return f"{int(value)}"
    return f"{value:,.2f}" if isinstance(value, float) else str(value)


def fmt_int(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"{int(value):,}"


def fmt_money(value: float | int | None) -> str:
    if value is None or pd.isna(value):
        return "n/a"
    return f"£{value:,.0f}"


def safe_label(primary: object, fallback: object, default: str = "Unknown") -> str:
    def _clean(val: object) -> str | None:
        if not isinstance(val, str):
            return None
        # Normalize common messy whitespace/encoding artifacts from exports.
        # - NBSP (\u00a0) -> space
        # - "Â" (\u00c2) can appear when NBSP is mis-decoded in upstream exports
        val = val.replace("\u00c2", "").replace("\u00a0", " ").strip()
        val = " ".join(val.split())
        if not val or val.lower() in {"nan", "none"}:
            return None
        return val

    primary_clean = _clean(primary)
    if primary_clean:
        return primary_clean
    fallback_clean = _clean(fallback)
    if fallback_clean:
        return fallback_clean
    return default
