"""
Caller-facing input records.

The surrounding application hands over plain dicts (already parsed and
validated by its forms / CSV import); these models only coerce types so the
engines can rely on `datetime.date` and floats.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Transaction(BaseModel):
    """Signed ledger entry: positive = inflow, negative = outflow."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    date: dt.date
    description: str
    amount: float
    account_id: str
    category_id: Optional[str] = None


class Debt(BaseModel):
    """
    A liability to be paid down.

    `balance` may arrive with the liability sign convention (negative);
    the payoff engine always works on abs(balance).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    balance: float
    interest_rate: float = 0.0  # annual, in percent (18 = 18% APR)
    minimum_payment: float = 0.0

    @property
    def amount_owed(self) -> float:
        return abs(self.balance)
