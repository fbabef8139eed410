from __future__ import annotations

# Source tables, named as in the backing store.
OCCUPATIONS_TABLE = "Job_Risk"
CASES_TABLE = "Employee_Reskilling_cases"
EVENTS_TABLE = "WorkforceReskilling_events"

SUCCESS_STATUSES = ["completed", "passed"]
UNCATEGORIZED = "Uncategorized"
UNKNOWN_PROGRAM = "Unknown"

TRUE_WORDS = ["true", "t", "yes", "y", "1"]
FALSE_WORDS = ["false", "f", "no", "n", "0"]

# Synthetic unit cost: COST_BASE + (index * COST_STEP) % COST_MODULUS
COST_BASE = 1000
COST_STEP = 1000
COST_MODULUS = 4001
COST_NORMALIZER = 1000
ALLOCATION_WEIGHT = 1.5

BUDGET_CUT_MIN = 10
BUDGET_CUT_MAX = 50

# Synthetic reskilling ease: EASE_BASE + (soc_code * EASE_MULTIPLIER) % EASE_MODULUS
EASE_BASE = 20
EASE_MULTIPLIER = 17
EASE_MODULUS = 60

RISK_WEIGHT = 0.6
EASE_WEIGHT = 0.4
RISK_THRESHOLD = 0.5
EASE_THRESHOLD = 50

HIGH_PRIORITY = "High Priority"
MEDIUM_PRIORITY = "Medium Priority"
LOW_PRIORITY = "Low Priority"
LOWEST_PRIORITY = "Lowest Priority"
QUADRANTS = [HIGH_PRIORITY, MEDIUM_PRIORITY, LOW_PRIORITY, LOWEST_PRIORITY]
