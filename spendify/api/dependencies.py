"""FastAPI dependencies for DI (settings, expense store, aggregator).

This module provides dependency injection helpers so the insights endpoints can be wired
to a real database in production and to stub stores in tests.
"""

from fastapi import Depends

from spendify.core.db import get_engine
from spendify.core.settings import Settings, get_settings
from spendify.services.expense_store import ExpenseStore, SQLExpenseStore
from spendify.services.insights import InsightsAggregator


def get_store(settings: Settings = Depends(get_settings)) -> ExpenseStore | None:
    """Provide the SQL-backed expense store, or None when no database is configured."""
    if not settings.database_url:
        return None
    return SQLExpenseStore(get_engine(settings.database_url))


def get_aggregator(store: ExpenseStore | None = Depends(get_store)) -> InsightsAggregator | None:
    """Provide an insights aggregator over the configured store, or None without one."""
    if store is None:
        return None
    return InsightsAggregator(store)
