from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Dict, List, Literal

import pandas as pd

from finance_dashboard.config import DEFAULT_CONFIG, default_config
from finance_dashboard.core.ledger import Ledger
from finance_dashboard.core.models import TransactionKind
from finance_dashboard.utils import currency_formatter

Period = Literal["all", "month"]
PERIODS = ("all", "month")


@dataclass
class Summary:
    income: float
    expense: float
    balance: float
    income_text: str
    expense_text: str
    balance_text: str


@dataclass
class Row:
    id: int
    description: str
    date: str
    kind: str
    amount: float
    amount_text: str
    badge: str


@dataclass
class CategoryChart:
    labels: List[str]
    values: List[float]
    percentages: List[float]
    colors: List[str]
    value_texts: List[str] = field(default_factory=list)
    placeholder: bool = False


@dataclass
class ComparisonChart:
    labels: List[str]
    datasets: List[Dict[str, object]] = field(default_factory=list)


@dataclass
class DashboardView:
    summary: Summary
    rows: List[Row]
    category_chart: CategoryChart
    comparison_chart: ComparisonChart
    empty_message: str | None = None

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _summary(ledger: Ledger, fmt) -> Summary:
    income = ledger.total_income()
    expense = ledger.total_expense()
    balance = ledger.balance()
    return Summary(
        income=income,
        expense=expense,
        balance=balance,
        income_text=fmt(income),
        expense_text=fmt(expense),
        balance_text=fmt(balance),
    )


def _rows(ledger: Ledger, fmt, labels) -> List[Row]:
    rows = []
    for tx in ledger.list():
        sign = "+" if tx.is_income else "-"
        rows.append(
            Row(
                id=tx.id,
                description=tx.description,
                date=tx.date.isoformat(),
                kind=tx.kind.value,
                amount=tx.amount,
                amount_text=f"{sign} {fmt(tx.amount)}",
                badge=labels["income_badge"] if tx.is_income else labels["expense_badge"],
            )
        )
    return rows


def _category_chart(ledger: Ledger, palette: List[str], labels, fmt) -> CategoryChart:
    by_category = ledger.expenses_by_category()
    if not by_category:
        return CategoryChart(
            labels=[labels["empty_chart"]],
            values=[1.0],
            percentages=[100.0],
            colors=palette[:1],
            placeholder=True,
        )
    total = sum(by_category.values())
    names = list(by_category)
    values = [by_category[name] for name in names]
    return CategoryChart(
        labels=names,
        values=values,
        percentages=[round(value / total * 100, 1) for value in values],
        colors=[palette[idx % len(palette)] for idx in range(len(names))],
        value_texts=[fmt(value) for value in values],
    )


def _monthly_totals(ledger: Ledger) -> pd.DataFrame:
    frame = pd.DataFrame(
        [
            {
                "month": tx.date.strftime("%Y-%m"),
                "kind": tx.kind.value,
                "amount": tx.amount,
            }
            for tx in ledger.list()
        ],
        columns=["month", "kind", "amount"],
    )
    pivot = frame.pivot_table(
        index="month", columns="kind", values="amount", aggfunc="sum", fill_value=0.0
    )
    kinds = [TransactionKind.INCOME.value, TransactionKind.EXPENSE.value]
    return pivot.reindex(columns=kinds, fill_value=0.0).sort_index()


def _comparison_chart(ledger: Ledger, period: Period, config) -> ComparisonChart:
    labels = config["labels"]
    if period == "month" and len(ledger):
        totals = _monthly_totals(ledger)
        periods = [
            datetime.strptime(key, "%Y-%m").strftime("%B %Y") for key in totals.index
        ]
        income = [float(v) for v in totals[TransactionKind.INCOME.value]]
        expense = [float(v) for v in totals[TransactionKind.EXPENSE.value]]
    else:
        periods = [config["period_label"]]
        income = [ledger.total_income()]
        expense = [ledger.total_expense()]
    return ComparisonChart(
        labels=periods,
        datasets=[
            {"label": labels["income"], "kind": "income", "data": income},
            {"label": labels["expense"], "kind": "expense", "data": expense},
        ],
    )


def build_dashboard(ledger: Ledger, config=None, period: Period = "all") -> DashboardView:
    """Recompute every dashboard view from the ledger's current state.

    Nothing is cached; call it again after each ``add``/``remove``.
    ``period`` controls the comparison chart: ``"all"`` yields a single bucket
    named by ``period_label``, ``"month"`` yields one bucket per calendar month.
    """
    if period not in PERIODS:
        raise ValueError(f"period must be one of {', '.join(PERIODS)}")
    cfg = config or default_config()
    fmt = currency_formatter(cfg)
    labels = cfg["labels"]
    palette = list(cfg.get("palette") or DEFAULT_CONFIG["palette"])
    rows = _rows(ledger, fmt, labels)
    return DashboardView(
        summary=_summary(ledger, fmt),
        rows=rows,
        category_chart=_category_chart(ledger, palette, labels, fmt),
        comparison_chart=_comparison_chart(ledger, period, cfg),
        empty_message=None if rows else labels["empty_table"],
    )
