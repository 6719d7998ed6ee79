"""Pytest fixtures for testing"""

from datetime import date
from typing import Callable, Iterable

import numpy as np
import pytest

from core.schema import Debt, Transaction


@pytest.fixture
def make_debt() -> Callable[..., Debt]:
    """Debt factory; balance uses the liability sign convention like the app does."""

    def _make(name: str, balance: float = -1000, interest_rate: float = 18, minimum_payment: float = 50) -> Debt:
        return Debt(
            id=name.lower().replace(" ", "-"),
            name=name,
            balance=balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
        )

    return _make


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    def _make(description: str, on: str, amount: float = -50, account_id: str = "acc-1") -> Transaction:
        return Transaction(
            id=f"txn-{on}-{description}",
            date=date.fromisoformat(on),
            description=description,
            amount=amount,
            account_id=account_id,
        )

    return _make


@pytest.fixture
def seeded_rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def scripted_uniform() -> Callable[[Iterable[float]], Callable[[], float]]:
    """Turn a fixed sequence into a uniform source for Box–Muller."""

    def _make(values: Iterable[float]) -> Callable[[], float]:
        it = iter(values)
        return lambda: next(it)

    return _make
