"""Constants for SalesPulse.

This module centralizes the policy thresholds and weights used by the
analytics engine and the task store.
"""

from salespulse.models.task import TaskPriority, TaskStatus


# Performance grade thresholds (average ROI)
GRADE_EXCELLENT_ABOVE = 500
GRADE_GOOD_FROM = 200

# Priority weights used for ranking; anything unrecognized weighs 1
PRIORITY_WEIGHTS = {
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}
DEFAULT_PRIORITY_WEIGHT = 1

# Probability-style weights for the revenue pipeline
PIPELINE_STATUS_WEIGHTS = {
    TaskStatus.TODO.value: 0.1,
    TaskStatus.IN_PROGRESS.value: 0.5,
    TaskStatus.DONE.value: 1.0,
}

# Task store auto-correction defaults
MIN_TIME_TAKEN_DEFAULT = 1.0
DEFAULT_REVENUE = 0.0

# Analytics defaults
DEFAULT_FORECAST_HORIZON_WEEKS = 4
ROI_DECIMALS = 2

# Ingestion defaults
DEFAULT_SEED_TASK_COUNT = 50
NORMALIZE_BACKDATE_DAYS = 1
NORMALIZE_COMPLETION_OFFSET_HOURS = 24
