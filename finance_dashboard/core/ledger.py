# finance_dashboard/core/ledger.py
from __future__ import annotations

import itertools
import logging
import math
from datetime import date, datetime
from decimal import Decimal
from numbers import Real
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from finance_dashboard.core.models import Transaction, TransactionKind, ValidationError

logger = logging.getLogger(__name__)


def _validate_description(description) -> str:
    text = str(description).strip() if description is not None else ""
    if not text:
        raise ValidationError("description must not be empty")
    return text


def _validate_amount(amount) -> float:
    if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
        raise ValidationError(f"amount must be a number, got {amount!r}")
    try:
        value = float(amount)
    except (OverflowError, ValueError):
        raise ValidationError(f"amount is out of range: {amount!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError(f"amount must be a positive number, got {amount!r}")
    return value


def _coerce_date(value, today: Callable[[], date]) -> date:
    if value is None:
        return today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"date must be YYYY-MM-DD, got {value!r}") from None
    raise ValidationError(f"Unrecognized date: {value!r}")


class Ledger:
    """In-memory, insertion-ordered store of income and expense transactions.

    Every aggregate is computed from the current sequence when asked for, so
    callers simply re-query after each ``add`` or ``remove``.
    """

    def __init__(self, today: Callable[[], date] = date.today):
        self._transactions: List[Transaction] = []
        self._ids = itertools.count(1)
        self._today = today

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def add(self, description, amount, kind, date=None) -> Transaction:
        """Validate and append a new transaction, returning the stored record.

        Raises ``ValidationError`` without touching the ledger when the
        description is blank, the amount is not a finite positive number or
        the kind is neither income nor expense.
        """
        description = _validate_description(description)
        amount = _validate_amount(amount)
        kind = TransactionKind.coerce(kind)
        date = _coerce_date(date, self._today)

        # ids are only consumed once every field is valid
        tx = Transaction(
            id=next(self._ids),
            description=description,
            amount=amount,
            kind=kind,
            date=date,
        )
        self._transactions.append(tx)
        logger.info("Transaction added: %s", tx)
        return tx

    def remove(self, tx_id) -> bool:
        for idx, tx in enumerate(self._transactions):
            if tx.id == tx_id:
                del self._transactions[idx]
                logger.info("Transaction removed: %s", tx_id)
                return True
        logger.debug("No transaction with id %s to remove", tx_id)
        return False

    def get(self, tx_id) -> Optional[Transaction]:
        return next((tx for tx in self._transactions if tx.id == tx_id), None)

    def list(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def _total(self, kind: TransactionKind) -> float:
        return sum((tx.amount for tx in self._transactions if tx.kind is kind), 0.0)

    def total_income(self) -> float:
        return self._total(TransactionKind.INCOME)

    def total_expense(self) -> float:
        return self._total(TransactionKind.EXPENSE)

    def balance(self) -> float:
        return self.total_income() - self.total_expense()

    def expenses_by_category(self) -> Dict[str, float]:
        """Sum expense amounts per description, keyed in first-seen order."""
        totals: Dict[str, float] = {}
        for tx in self._transactions:
            if tx.kind is TransactionKind.EXPENSE:
                totals[tx.description] = totals.get(tx.description, 0.0) + tx.amount
        return totals
