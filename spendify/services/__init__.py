"""Services package: the expense store collaborator and the insights aggregator."""

from .expense_store import ExpenseStore, SQLExpenseStore  # noqa: F401
from .insights import InsightsAggregator  # noqa: F401
