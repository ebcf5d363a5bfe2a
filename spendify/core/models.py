"""Pydantic models for the Spendify insights API.

Raw rows coming back from the expense store are untrusted and kept loosely typed in
``RawExpenseRow``; everything downstream of row cleaning works on ``CleanExpense`` and
the report models below. Report models serialize with camelCase aliases and emit money
values as JSON numbers.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawExpenseRow(BaseModel):
    """An expense row as returned by the store, before validation."""

    owner_id: str | None = None
    amount: Any = None
    occurred_at: Any = None
    payment_method: str | None = None
    category_name: str | None = None


class CleanExpense(BaseModel):
    """A validated expense used in all aggregate computations."""

    owner_id: str | None = None
    amount: Decimal
    occurred_at: datetime
    category_name: str
    payment_method: str = "Unknown"


class DateWindow(CamelModel):
    """Inclusive range of whole calendar days."""

    start: date
    end: date

    @property
    def start_at(self) -> datetime:
        """Timestamp at 00:00:00 of the first day."""
        return datetime.combine(self.start, datetime.min.time())

    @property
    def end_at(self) -> datetime:
        """Timestamp at 23:59:59 of the last day."""
        return datetime(self.end.year, self.end.month, self.end.day, 23, 59, 59)


class CategoryTotal(CamelModel):
    """Summed spending for one category."""

    name: str
    total: Money


class DailyTotal(CamelModel):
    """Summed spending for one calendar day."""

    date: date
    total: Money


class HighestExpense(CamelModel):
    """The single largest expense in the window."""

    category: str
    amount: Money
    date: date
    method: str


class InsightsReport(CamelModel):
    """Summarized analytics for one owner over a date window."""

    owner_id: str
    date_window: DateWindow
    total_spent: Money = Decimal("0")
    transaction_count: int = 0
    average_transaction_value: Money = Decimal("0")
    top_categories: list[CategoryTotal] = []
    dominant_payment_method: str = "N/A"
    highest_single_expense: HighestExpense | None = None
    days_in_window: int
    unique_days_with_activity: int = 0
    daily_totals: list[DailyTotal] = []


class InsightsRequest(CamelModel):
    """Request body for the insights endpoint; presence is checked by the handler."""

    owner_id: str | None = None
    start_date: str | None = None
    end_date: str | None = None
