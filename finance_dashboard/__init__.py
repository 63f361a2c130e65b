# finance_dashboard/__init__.py
from finance_dashboard.core.ledger import Ledger
from finance_dashboard.core.models import Transaction, TransactionKind, ValidationError

__all__ = ["Ledger", "Transaction", "TransactionKind", "ValidationError"]
