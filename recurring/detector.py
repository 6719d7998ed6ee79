"""
Recurring transaction detection over noisy bank descriptions and dates.

  1. normalize descriptions ("NETFLIX.COM 8842" → "netflixcom")
  2. group by word-set overlap (|A ∩ B| / |A ∪ B| > 0.6) against existing group keys
  3. per group with >= 3 members: day gaps → mean gap → frequency class,
     confidence = max(0, 1 - std(gaps) / mean(gaps))
  4. average signed amount and next expected date

Groups failing any statistical test are dropped silently.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from dateutil.relativedelta import relativedelta

from core.config import DetectionConfig
from core.schema import Transaction
from core.utils import add_months

logger = logging.getLogger(__name__)

Frequency = Literal["weekly", "biweekly", "monthly", "quarterly", "yearly"]

# (frequency, expected gap in days, tolerance in days) — checked in this order
FREQUENCY_WINDOWS: Tuple[Tuple[Frequency, float, float], ...] = (
    ("weekly", 7, 2),
    ("biweekly", 14, 3),
    ("monthly", 30, 5),
    ("quarterly", 90, 15),
    ("yearly", 365, 30),
)
FREQUENCIES: Tuple[str, ...] = tuple(f for f, _, _ in FREQUENCY_WINDOWS)

_PERIODS: Dict[str, relativedelta] = {
    "weekly": relativedelta(weeks=1),
    "biweekly": relativedelta(weeks=2),
    "monthly": relativedelta(months=1),
    "quarterly": relativedelta(months=3),
    "yearly": relativedelta(months=12),
}

_DIGITS = re.compile(r"\d+")
_NON_LETTERS = re.compile(r"[^a-z\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class RecurringPattern:
    description: str  # normalized group key
    frequency: Frequency
    average_amount: float  # signed: income and expenses alike
    transactions: Tuple[Transaction, ...]  # chronological
    confidence: float  # [0, 1]
    next_occurrence: date


TransactionLike = Union[Transaction, dict]


def normalize_description(desc: str) -> str:
    """Lowercase, drop digits and anything but letters/spaces, collapse whitespace."""
    out = desc.lower()
    out = _DIGITS.sub("", out)
    out = _NON_LETTERS.sub("", out)
    return _WHITESPACE.sub(" ", out).strip()


def are_similar(desc1: str, desc2: str, threshold: float = 0.6) -> bool:
    """Word-set overlap strictly above `threshold`; empty descriptions never match."""
    words1 = set(desc1.split())
    words2 = set(desc2.split())

    if not words1 or not words2:
        return False

    similarity = len(words1 & words2) / len(words1 | words2)
    return similarity > threshold


def group_by_similar_description(
    transactions: Iterable[TransactionLike],
    *,
    threshold: float = 0.6,
) -> Dict[str, List[Transaction]]:
    """
    Assign each transaction to the first existing group whose key is similar,
    else start a new group keyed by its own normalized description.
    """
    groups: Dict[str, List[Transaction]] = {}

    for txn in _coerce_transactions(transactions):
        normalized = normalize_description(txn.description)
        if not normalized:
            continue

        for key in groups:
            if are_similar(normalized, key, threshold):
                groups[key].append(txn)
                break
        else:
            groups[normalized] = [txn]

    return groups


def detect_frequency(intervals: Sequence[float]) -> Optional[Frequency]:
    """Classify the mean gap (days) into a frequency, or None if nothing fits."""
    if len(intervals) == 0:
        return None
    avg = float(np.mean(intervals))

    for frequency, expected, tolerance in FREQUENCY_WINDOWS:
        if abs(avg - expected) <= tolerance:
            return frequency
    return None


def predict_next_occurrence(last_date: date, frequency: Frequency) -> date:
    if frequency not in _PERIODS:
        raise ValueError(f"Unknown frequency {frequency!r}. Available: {list(FREQUENCIES)}")
    return last_date + _PERIODS[frequency]


def detect_recurring_transactions(
    transactions: Iterable[TransactionLike],
    *,
    config: Optional[DetectionConfig] = None,
) -> List[RecurringPattern]:
    """Detect recurring patterns, sorted by confidence (highest first)."""
    cfg = config or DetectionConfig()
    groups = group_by_similar_description(transactions, threshold=cfg.similarity_threshold)

    patterns: List[RecurringPattern] = []
    for description, txns in groups.items():
        if len(txns) < cfg.min_occurrences:
            continue

        ordered = sorted(txns, key=lambda t: t.date)
        intervals = np.array(
            [(b.date - a.date).days for a, b in zip(ordered, ordered[1:])],
            dtype=float,
        )

        avg_interval = float(np.mean(intervals))
        if not math.isfinite(avg_interval) or avg_interval == 0:
            logger.debug("Group %r rejected: degenerate mean interval", description)
            continue

        frequency = detect_frequency(intervals)
        if frequency is None:
            logger.debug("Group %r rejected: no frequency matches its intervals", description)
            continue

        confidence = max(0.0, 1.0 - float(np.std(intervals)) / avg_interval)
        if not math.isfinite(confidence) or confidence < cfg.min_confidence:
            logger.debug("Group %r rejected: confidence %.3f", description, confidence)
            continue

        patterns.append(RecurringPattern(
            description=description,
            frequency=frequency,
            average_amount=float(np.mean([t.amount for t in ordered])),
            transactions=tuple(ordered),
            confidence=confidence,
            next_occurrence=predict_next_occurrence(ordered[-1].date, frequency),
        ))

    return sorted(patterns, key=lambda p: p.confidence, reverse=True)


def project_future_transactions(
    patterns: Iterable[RecurringPattern],
    months_ahead: int = 6,
    *,
    as_of: Optional[date] = None,
) -> List[Transaction]:
    """
    Emit synthetic transactions for every pattern from its next occurrence up to
    `as_of + months_ahead` calendar months (inclusive). Grouped per pattern.
    """
    end_date = add_months(as_of or date.today(), months_ahead)

    projected: List[Transaction] = []
    for pattern in patterns:
        template = pattern.transactions[0]
        current = pattern.next_occurrence

        while current <= end_date:
            projected.append(Transaction(
                id=f"projected-{pattern.description}-{current.isoformat()}",
                date=current,
                description=f"{pattern.description} (projected)",
                amount=pattern.average_amount,
                account_id=template.account_id,
                category_id=template.category_id,
            ))
            current = predict_next_occurrence(current, pattern.frequency)

    return projected


def patterns_to_dataframe(patterns: Sequence[RecurringPattern]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "description": p.description,
                "frequency": p.frequency,
                "average_amount": p.average_amount,
                "occurrences": len(p.transactions),
                "confidence": p.confidence,
                "next_occurrence": p.next_occurrence,
            }
            for p in patterns
        ],
        columns=["description", "frequency", "average_amount", "occurrences", "confidence", "next_occurrence"],
    )


def _coerce_transactions(transactions: Iterable[TransactionLike]) -> List[Transaction]:
    return [t if isinstance(t, Transaction) else Transaction.model_validate(t) for t in transactions]
