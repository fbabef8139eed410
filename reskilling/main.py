from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

import pandas as pd

from reskilling.config.constants import BUDGET_CUT_MAX, BUDGET_CUT_MIN
from reskilling.config.settings import Settings, get_settings, validate_budget_cut
from reskilling.io.loaders import SOURCES, DataLoadError, load_source
from reskilling.models.schema import Context
from reskilling.pipelines.build_tables import build_tables
from reskilling.pipelines.build_report import build_report

logger = logging.getLogger(__name__)


async def load_data(data_dir: Path) -> dict[str, pd.DataFrame]:
    frames = await asyncio.gather(*(asyncio.to_thread(load_source, data_dir, name) for name in SOURCES))
    return dict(zip(SOURCES, frames))


async def main(settings: Settings) -> str:
    data = await load_data(settings.data_dir)
    ctx = Context(settings=settings, data=data)

    build_tables(ctx)
    return build_report(ctx)


def _budget_cut(value: str) -> float:
    try:
        return validate_budget_cut(float(value))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reskilling-analysis",
        description="Derive training effectiveness, budget reallocation and role priorities from reskilling records.",
    )
    parser.add_argument("--data-dir", type=Path, help="Directory holding the occupation, case and event tables.")
    parser.add_argument(
        "--budget-cut",
        type=_budget_cut,
        help=f"Budget cut percentage ({BUDGET_CUT_MIN}-{BUDGET_CUT_MAX}).",
    )
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG or WARNING.")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings(budget_cut=args.budget_cut)
    except ValueError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    overrides = {}
    if args.data_dir is not None:
        overrides["data_dir"] = args.data_dir
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    settings = dataclasses.replace(settings, **overrides)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        report = asyncio.run(main(settings))
    except DataLoadError as exc:
        logger.error("%s", exc)
        return 1

    print(report)
    logger.info("Reskilling analytics completed.")
    return 0


if __name__ == "__main__":
    sys.exit(run())
