"""
Multi-debt payoff simulator — avalanche / snowball with payment cascading.

Each month:
  1. extra pool = caller's extra payment + minimums freed by already-retired debts
  2. debts are visited in priority order; every debt still owing gets its own
     minimum, and the first one encountered also takes the whole pool
  3. a payment larger than balance + interest is capped and the excess goes back
     into the pool for the NEXT debt in the same month
  4. balance = max(0, balance + interest - payment)

Priority order:
  avalanche — highest interest rate first
  snowball  — smallest balance first

The loop stops when every balance is 0 or after config.max_months months;
truncated schedules keep their last (non-zero) balance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Literal, Optional, Union

import pandas as pd

from core.config import PayoffConfig
from core.schema import Debt
from core.utils import add_months

logger = logging.getLogger(__name__)

Strategy = Literal["avalanche", "snowball"]
STRATEGIES = ("avalanche", "snowball")


@dataclass(frozen=True)
class PaymentEntry:
    """One month of one debt's schedule."""
    month: int  # 1-based
    date: date
    payment: float
    principal: float
    interest: float
    balance: float  # balance after this payment


@dataclass
class DebtSchedule:
    debt_id: str
    debt_name: str
    payments: List[PaymentEntry] = field(default_factory=list)
    total_interest: float = 0.0
    payoff_date: Optional[date] = None  # None if the month ceiling was hit first


@dataclass
class PayoffResult:
    strategy: Strategy
    debts: List[DebtSchedule]  # in priority order
    total_months: int
    total_interest: float
    total_paid: float

    def schedule_for(self, debt_id: str) -> DebtSchedule:
        for s in self.debts:
            if s.debt_id == debt_id:
                return s
        raise KeyError(f"No schedule for debt {debt_id!r}")

    def to_dataframe(self) -> pd.DataFrame:
        """Long-format schedule: one row per debt per month."""
        rows = []
        for s in self.debts:
            for p in s.payments:
                rows.append({
                    "debt_id": s.debt_id,
                    "debt_name": s.debt_name,
                    "month": p.month,
                    "date": p.date,
                    "payment": p.payment,
                    "principal": p.principal,
                    "interest": p.interest,
                    "balance": p.balance,
                })
        return pd.DataFrame(
            rows,
            columns=["debt_id", "debt_name", "month", "date", "payment", "principal", "interest", "balance"],
        )


@dataclass
class StrategyComparison:
    avalanche: PayoffResult
    snowball: PayoffResult
    interest_savings: float  # snowball interest - avalanche interest
    time_savings: int        # snowball months - avalanche months


DebtLike = Union[Debt, dict]


def _coerce_debts(debts: Iterable[DebtLike]) -> List[Debt]:
    return [d if isinstance(d, Debt) else Debt.model_validate(d) for d in debts]


def order_debts(debts: Iterable[DebtLike], strategy: Strategy) -> List[Debt]:
    """Sort debts into payoff priority (stable for ties)."""
    items = _coerce_debts(debts)
    if strategy == "avalanche":
        return sorted(items, key=lambda d: d.interest_rate or 0.0, reverse=True)
    if strategy == "snowball":
        return sorted(items, key=lambda d: d.amount_owed)
    raise ValueError(f"Unknown payoff strategy {strategy!r}. Available: {list(STRATEGIES)}")


def payoff(
    debts: Iterable[DebtLike],
    extra_payment: float,
    strategy: Strategy,
    *,
    config: Optional[PayoffConfig] = None,
) -> PayoffResult:
    """
    Simulate paying off every debt under the given strategy.

    Parameters
    ----------
    debts : iterable of Debt (or dicts accepted by Debt)
    extra_payment : float
        Monthly amount on top of all minimums (>= 0)
    strategy : "avalanche" | "snowball"
    config : PayoffConfig, optional
        Month ceiling and the date payment dates are stamped from
    """
    cfg = config or PayoffConfig()
    start_date = cfg.start_date or date.today()
    ordered = order_debts(debts, strategy)

    balances = [d.amount_owed for d in ordered]
    minimums = [d.minimum_payment or 0.0 for d in ordered]
    schedules = [DebtSchedule(debt_id=d.id, debt_name=d.name) for d in ordered]

    total_interest = 0.0
    total_paid = 0.0
    month = 0

    while any(b > 0 for b in balances) and month < cfg.max_months:
        month += 1
        payment_date = add_months(start_date, month)

        # freed minimums cascade into the pool
        remaining_extra = extra_payment + sum(
            minimums[i] for i, b in enumerate(balances) if b <= 0
        )

        for i, debt in enumerate(ordered):
            balance = balances[i]
            if balance <= 0:
                continue

            rate = (debt.interest_rate or 0.0) / 100.0 / 12.0
            interest = balance * rate

            payment = minimums[i]
            if remaining_extra > 0:
                payment += remaining_extra
                remaining_extra = 0.0

            # never overpay; the excess moves on to the next debt this month
            max_payment = balance + interest
            if payment >= max_payment:
                remaining_extra += payment - max_payment
                payment = max_payment
                new_balance = 0.0
            else:
                new_balance = max(0.0, balance + interest - payment)

            principal = payment - interest

            schedule = schedules[i]
            schedule.payments.append(PaymentEntry(
                month=month,
                date=payment_date,
                payment=payment,
                principal=principal,
                interest=interest,
                balance=new_balance,
            ))
            schedule.total_interest += interest
            total_interest += interest
            total_paid += payment

            balances[i] = new_balance

            if new_balance == 0 and schedule.payoff_date is None:
                schedule.payoff_date = payment_date
                logger.debug("Debt %s retired in month %d (%s)", debt.id, month, strategy)

    if month >= cfg.max_months and any(b > 0 for b in balances):
        logger.debug("Payoff truncated at %d months with balances outstanding", cfg.max_months)

    total_months = max((len(s.payments) for s in schedules), default=0)

    return PayoffResult(
        strategy=strategy,
        debts=schedules,
        total_months=total_months,
        total_interest=total_interest,
        total_paid=total_paid,
    )


def calculate_avalanche(
    debts: Iterable[DebtLike], extra_payment: float, *, config: Optional[PayoffConfig] = None
) -> PayoffResult:
    """Highest interest rate first."""
    return payoff(debts, extra_payment, "avalanche", config=config)


def calculate_snowball(
    debts: Iterable[DebtLike], extra_payment: float, *, config: Optional[PayoffConfig] = None
) -> PayoffResult:
    """Smallest balance first."""
    return payoff(debts, extra_payment, "snowball", config=config)


def compare_strategies(
    debts: Iterable[DebtLike],
    extra_payment: float,
    *,
    config: Optional[PayoffConfig] = None,
) -> StrategyComparison:
    items = _coerce_debts(debts)
    avalanche = calculate_avalanche(items, extra_payment, config=config)
    snowball = calculate_snowball(items, extra_payment, config=config)

    return StrategyComparison(
        avalanche=avalanche,
        snowball=snowball,
        interest_savings=snowball.total_interest - avalanche.total_interest,
        time_savings=snowball.total_months - avalanche.total_months,
    )
