"""Unit tests for core records and helpers"""

import json
import logging
from datetime import date

import pydantic
import pytest

from core.logging import CustomJsonFormatter, setup_logging
from core.schema import Debt, Transaction
from core.utils import add_months, round_half_up, round_to_step, whole_years_between


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_transaction_coerces_iso_dates():
    txn = Transaction.model_validate(
        {"date": "2024-03-01", "description": "Rent", "amount": "-1200.50", "account_id": "chk"}
    )
    assert txn.date == date(2024, 3, 1)
    assert txn.amount == -1200.50
    assert txn.category_id is None


def test_records_are_immutable():
    txn = Transaction(date=date(2024, 1, 1), description="x", amount=1, account_id="a")
    with pytest.raises(pydantic.ValidationError):
        txn.amount = 2


def test_debt_amount_owed_ignores_sign():
    assert Debt(id="d", name="Card", balance=-250).amount_owed == 250
    assert Debt(id="d", name="Card", balance=250).amount_owed == 250


def test_round_half_up():
    assert round_half_up(2.5) == 3.0
    assert round_half_up(-2.5) == -3.0
    assert list(round_half_up([0.5, 1.5, 2.5])) == [1.0, 2.0, 3.0]


@pytest.mark.parametrize("value, expected", [(87, 85), (87.5, 90), (2.5, 5), (11.5, 10), (0, 0)])
def test_round_to_step(value, expected):
    assert round_to_step(value, 5) == expected


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 1, 31), 3) == date(2024, 4, 30)


def test_whole_years_between():
    assert whole_years_between(date(1990, 6, 15), date(2026, 6, 14)) == 35
    assert whole_years_between(date(1990, 6, 15), date(2026, 6, 15)) == 36
    assert whole_years_between(date(2026, 1, 1), date(2019, 6, 1)) == -6


def test_setup_logging_emits_json(restore_root_logger, capsys):
    setup_logging("DEBUG")
    root = logging.getLogger()

    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, CustomJsonFormatter)

    logging.getLogger("engine.debt").info("payoff complete", extra={"months": 12})
    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])

    assert record["message"] == "payoff complete"
    assert record["level"] == "INFO"
    assert record["service"] == "household-quant"
    assert record["months"] == 12


def test_setup_logging_plain_text(restore_root_logger, capsys):
    setup_logging("INFO", json=False)
    logging.getLogger("recurring").info("detected %d patterns", 3)

    assert "detected 3 patterns" in capsys.readouterr().out
