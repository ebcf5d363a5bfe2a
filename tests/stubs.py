"""In-memory stand-ins for the expense store used across the test suite."""

from datetime import datetime

from spendify.core.exceptions import FetchError
from spendify.core.models import RawExpenseRow
from spendify.services.expense_store import ExpenseStore


def raw_row(
    amount: object,
    occurred_at: object,
    category: str | None = "Food",
    method: str | None = "upi",
    owner_id: str = "u1",
) -> RawExpenseRow:
    """Build a raw row the way the SQL store would return it."""
    if isinstance(occurred_at, str) and len(occurred_at) == len("2025-06-01"):
        occurred_at = datetime.fromisoformat(f"{occurred_at}T12:00:00")
    return RawExpenseRow(
        owner_id=owner_id,
        amount=amount,
        occurred_at=occurred_at,
        payment_method=method,
        category_name=category,
    )


class StubStore(ExpenseStore):
    """Returns canned rows (or raises a canned error) and records every call."""

    def __init__(self, rows: list[RawExpenseRow] | None = None, error: str | None = None) -> None:
        """Initialize the stub with rows to return or an error message to raise."""
        self.rows = rows or []
        self.error = error
        self.calls: list[tuple[str, datetime, datetime]] = []

    def fetch_expenses(self, owner_id: str, start: datetime, end: datetime) -> list[RawExpenseRow]:
        """Record the call and return the canned rows."""
        self.calls.append((owner_id, start, end))
        if self.error:
            raise FetchError(self.error)
        return list(self.rows)
