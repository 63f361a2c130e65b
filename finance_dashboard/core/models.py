# finance_dashboard/core/models.py
from dataclasses import dataclass
from datetime import date
from enum import Enum


class ValidationError(ValueError):
    """Raised when a transaction cannot be recorded as given."""


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def coerce(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"kind must be 'income' or 'expense', got {value!r}"
            ) from None


@dataclass(frozen=True)
class Transaction:
    id: int
    description: str
    amount: float
    kind: TransactionKind
    date: date

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "kind": self.kind.value,
            "date": self.date.isoformat(),
        }
