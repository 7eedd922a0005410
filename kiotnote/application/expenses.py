"""Operating expense workflow."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Literal

from kiotnote.domain.costs import OperatingExpense
from kiotnote.domain.repository import RecordRepository
from kiotnote.parser.tokenizer import NumberToken, classify_token
from kiotnote.runtime import JsonRecordStore

ExpenseStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class RecordExpenseRequest:
    """Inputs for the expense workflow. ``amount`` uses the parser's numeral
    shorthand, so "500k" and "1.500.000" are both accepted."""

    title: str
    amount: str
    note: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class RecordExpenseResult:
    """Outcome for the expense workflow."""

    status: ExpenseStatus
    expense: OperatingExpense | None = None
    error: str | None = None


def parse_amount(raw: str) -> Decimal | None:
    """Parse a money amount; None for anything that is not a positive amount."""
    token = classify_token(raw.strip().replace(" ", ""))
    if not isinstance(token, NumberToken) or token.is_percent or token.value <= 0:
        return None
    return token.value


def run_record_expense(request: RecordExpenseRequest, store: RecordRepository | None = None) -> RecordExpenseResult:
    """Validate and save one operating expense."""
    title = request.title.strip()
    if not title:
        return RecordExpenseResult(status="error", error="Expense title is required")

    amount = parse_amount(request.amount)
    if amount is None:
        return RecordExpenseResult(status="error", error=f"Invalid amount: {request.amount!r}")

    store = store or JsonRecordStore()
    expense = OperatingExpense(
        title=title,
        amount=amount,
        created_at=request.created_at or datetime.now(),
        note=request.note or None,
    )
    store.save_expense(expense)
    return RecordExpenseResult(status="ok", expense=expense)
