from __future__ import annotations

import logging

import pandas as pd

from reskilling.models.schema import CasesWithEvents

logger = logging.getLogger(__name__)


def join_cases_with_events(cases: pd.DataFrame, events: pd.DataFrame) -> CasesWithEvents:
    case_ids = set(cases["case_id"].dropna().tolist())
    matched = events["case_id"].isin(case_ids).fillna(False).astype(bool)

    dropped = int((~matched).sum())
    if dropped:
        logger.debug("Dropping %d events without a matching case", dropped)

    return CasesWithEvents(
        cases=cases.reset_index(drop=True),
        events=events[matched].reset_index(drop=True),
    )
