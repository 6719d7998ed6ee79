"""
Recurring transactions — fuzzy grouping, interval classification, projection.
"""

from .detector import (
    FREQUENCIES,
    RecurringPattern,
    are_similar,
    detect_frequency,
    detect_recurring_transactions,
    group_by_similar_description,
    normalize_description,
    patterns_to_dataframe,
    predict_next_occurrence,
    project_future_transactions,
)

__all__ = [
    "FREQUENCIES",
    "RecurringPattern",
    "are_similar",
    "detect_frequency",
    "detect_recurring_transactions",
    "group_by_similar_description",
    "normalize_description",
    "patterns_to_dataframe",
    "predict_next_occurrence",
    "project_future_transactions",
]
