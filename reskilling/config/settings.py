from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from reskilling.config.constants import BUDGET_CUT_MAX, BUDGET_CUT_MIN


def _load_env(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip().lstrip("\ufeff")
        value = value.strip().strip("\"").strip("'")
        if key and key not in os.environ:
            os.environ[key] = value


def _env_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def validate_budget_cut(value: float) -> float:
    if not BUDGET_CUT_MIN <= value <= BUDGET_CUT_MAX:
        raise ValueError(f"Budget cut must be between {BUDGET_CUT_MIN} and {BUDGET_CUT_MAX} percent, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    base_dir: Path
    data_dir: Path
    budget_cut_percentage: float
    top_roles_limit: int
    insight_limit: int
    log_level: str


def get_settings(budget_cut: float | None = None) -> Settings:
    """Build settings from the environment.

    An explicit ``budget_cut`` wins over ``RESKILLING_BUDGET_CUT``, which is then never read.
    """
    base_dir = Path(__file__).resolve().parents[2]
    _load_env(base_dir / ".env")
    data_dir = os.getenv("RESKILLING_DATA_DIR")
    if budget_cut is None:
        budget_cut = _env_float("RESKILLING_BUDGET_CUT", "20")

    return Settings(
        base_dir=base_dir,
        data_dir=Path(data_dir) if data_dir else base_dir / "db",
        budget_cut_percentage=validate_budget_cut(budget_cut),
        top_roles_limit=int(os.getenv("RESKILLING_TOP_ROLES", "10")),
        insight_limit=int(os.getenv("RESKILLING_INSIGHT_LIMIT", "3")),
        log_level=os.getenv("RESKILLING_LOG_LEVEL", "INFO").upper(),
    )
