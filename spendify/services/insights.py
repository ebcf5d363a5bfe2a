"""Expense insights aggregation.

``InsightsAggregator.compute_insights`` validates a request, fetches the owner's raw rows
for an inclusive calendar-day window, drops rows that fail validation and reduces the
rest into an ``InsightsReport``.

Accumulators are insertion-ordered dicts over the timestamp-ascending fetch, so ties in
the category ranking, the dominant payment method and the highest expense all go to the
entry seen first. That order is arbitrary and kept only for reproducibility.
"""

import re
from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from spendify.core.exceptions import ValidationError
from spendify.core.models import (
    CategoryTotal,
    CleanExpense,
    DailyTotal,
    DateWindow,
    HighestExpense,
    InsightsReport,
    RawExpenseRow,
)
from spendify.core.utils import get_logger
from spendify.services.expense_store import ExpenseStore

logger = get_logger("spendify.insights")

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CENTS = Decimal("0.01")
# Larger values are treated as corrupt; cents rounding of their sums must fit the default context.
MAX_AMOUNT = Decimal("1e15")
TOP_CATEGORY_LIMIT = 5
UNKNOWN_METHOD = "Unknown"


def round_money(value: Decimal) -> Decimal:
    """Round a money amount to 2 decimal places, half up."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_date_string(value: object) -> date:
    """Parse a strict ``YYYY-MM-DD`` string naming a real calendar date."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        msg = f'Invalid date format: "{value}". Expected "YYYY-MM-DD".'
        raise ValidationError(msg)
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        msg = f'Invalid date format: "{value}". Expected "YYYY-MM-DD".'
        raise ValidationError(msg) from exc


def resolve_window(start_date: str | None, end_date: str | None) -> DateWindow:
    """Build the inclusive day window, rejecting missing, malformed or inverted dates."""
    if not start_date or not end_date:
        msg = "Both startDate and endDate are required."
        raise ValidationError(msg)
    window = DateWindow(start=parse_date_string(start_date), end=parse_date_string(end_date))
    if window.end_at < window.start_at:
        msg = "endDate must be >= startDate."
        raise ValidationError(msg)
    return window


def count_days(window: DateWindow) -> int:
    """Inclusive number of calendar days covered by ``window``."""
    return (window.end_at - window.start_at) // timedelta(days=1) + 1


def parse_amount(value: object) -> Decimal | None:
    """Return a positive finite Decimal below ``MAX_AMOUNT``, or None when ``value`` is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int | float | str):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite() or amount <= 0 or amount >= MAX_AMOUNT:
        return None
    return amount


def parse_timestamp(value: object) -> datetime | None:
    """Return a datetime for ``value``, or None when it is missing or unparseable."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def clean_expense(row: RawExpenseRow) -> CleanExpense | None:
    """Validate one raw row; rows that fail are dropped, not reported."""
    amount = parse_amount(row.amount)
    if amount is None:
        return None
    occurred_at = parse_timestamp(row.occurred_at)
    if occurred_at is None:
        return None
    category = (row.category_name or "").strip()
    if not category:
        return None
    method = (row.payment_method or "").strip() or UNKNOWN_METHOD
    return CleanExpense(
        owner_id=row.owner_id,
        amount=amount,
        occurred_at=occurred_at,
        category_name=category,
        payment_method=method,
    )


def empty_report(owner_id: str, window: DateWindow) -> InsightsReport:
    """Zeroed report for a valid request with no usable expenses."""
    return InsightsReport(owner_id=owner_id, date_window=window, days_in_window=count_days(window))


def summarize(owner_id: str, window: DateWindow, expenses: list[CleanExpense]) -> InsightsReport:
    """Reduce cleaned expenses (timestamp-ascending) into a report."""
    if not expenses:
        return empty_report(owner_id, window)

    daily: dict[date, Decimal] = {}
    by_category: dict[str, Decimal] = {}
    method_counts: dict[str, int] = {}
    for exp in expenses:
        day = exp.occurred_at.date()
        daily[day] = daily.get(day, Decimal("0")) + exp.amount
        by_category[exp.category_name] = by_category.get(exp.category_name, Decimal("0")) + exp.amount
        method_counts[exp.payment_method] = method_counts.get(exp.payment_method, 0) + 1

    daily_totals = [DailyTotal(date=day, total=round_money(total)) for day, total in sorted(daily.items())]

    total_spent = round_money(sum((exp.amount for exp in expenses), Decimal("0")))
    transaction_count = len(expenses)
    average = round_money(total_spent / transaction_count)

    ranked = sorted(
        (CategoryTotal(name=name, total=round_money(total)) for name, total in by_category.items()),
        key=lambda c: c.total,
        reverse=True,
    )

    # max() keeps the first maximal element, which is the first-seen tie-break.
    dominant = max(method_counts, key=method_counts.get)
    highest = max(expenses, key=lambda e: e.amount)

    return InsightsReport(
        owner_id=owner_id,
        date_window=window,
        total_spent=total_spent,
        transaction_count=transaction_count,
        average_transaction_value=average,
        top_categories=ranked[:TOP_CATEGORY_LIMIT],
        dominant_payment_method=dominant,
        highest_single_expense=HighestExpense(
            category=highest.category_name,
            amount=highest.amount,
            date=highest.occurred_at.date(),
            method=highest.payment_method,
        ),
        days_in_window=count_days(window),
        unique_days_with_activity=len(daily),
        daily_totals=daily_totals,
    )


class InsightsAggregator:
    """Computes expense insights for an owner over a calendar-day window."""

    def __init__(self, store: ExpenseStore) -> None:
        """Initialize the aggregator with the store it reads from."""
        self.store = store

    def compute_insights(self, owner_id: str | None, start_date: str | None, end_date: str | None) -> InsightsReport:
        """Validate the request, fetch rows and summarize them.

        Raises ``ValidationError`` for bad input before touching the store. ``FetchError``
        from the store propagates unchanged.
        """
        if not owner_id or not owner_id.strip():
            msg = "ownerId is required."
            raise ValidationError(msg)
        window = resolve_window(start_date, end_date)
        logger.info(f"Computing insights: owner={owner_id}, window={window.start}..{window.end}")

        rows = self.store.fetch_expenses(owner_id, window.start_at, window.end_at)
        expenses = []
        for idx, row in enumerate(rows):
            cleaned = clean_expense(row)
            if cleaned is None:
                logger.debug(f"Dropped malformed expense row {idx + 1}/{len(rows)}: {row!r}")
                continue
            expenses.append(cleaned)
        logger.info(f"Fetched {len(rows)} rows for owner={owner_id}, kept {len(expenses)}")
        return summarize(owner_id, window, expenses)
