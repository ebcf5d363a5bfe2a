"""Tests for the SQLAlchemy-backed expense store, using in-memory SQLite."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from spendify.core.db import Category, Expense, create_tables, get_session_factory
from spendify.core.exceptions import FetchError
from spendify.services.expense_store import SQLExpenseStore
from spendify.services.insights import InsightsAggregator


def memory_engine() -> Engine:
    """A single-connection in-memory SQLite engine shared across threads."""
    return create_engine("sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False})


@pytest.fixture
def engine() -> Engine:
    """Engine with the schema created and a few expenses seeded."""
    engine = memory_engine()
    create_tables(engine)
    session = get_session_factory(engine)()
    food = Category(name="Food")
    travel = Category(name="Travel", user_id="u1")
    session.add_all([food, travel])
    session.flush()
    session.add_all(
        [
            Expense(user_id="u1", category_id=food.id, amount=Decimal("12.50"), expense_method="upi",
                    created_at=datetime(2025, 6, 2, 9, 0), expense_date=date(2025, 6, 2)),
            Expense(user_id="u1", category_id=travel.id, amount=Decimal("80.00"), expense_method="card",
                    created_at=datetime(2025, 6, 1, 0, 0, 0), expense_date=date(2025, 6, 1)),
            Expense(user_id="u1", category_id=food.id, amount=Decimal("5.25"), expense_method=None,
                    created_at=datetime(2025, 6, 3, 23, 59, 59), expense_date=date(2025, 6, 3)),
            Expense(user_id="u1", category_id=None, amount=Decimal("40.00"), expense_method="cash",
                    created_at=datetime(2025, 6, 2, 12, 0)),
            Expense(user_id="u1", category_id=food.id, amount=Decimal("99.00"), expense_method="cash",
                    created_at=datetime(2025, 6, 4, 0, 0, 0)),
            Expense(user_id="u2", category_id=food.id, amount=Decimal("1000.00"), expense_method="cash",
                    created_at=datetime(2025, 6, 2, 10, 0)),
        ]
    )
    session.commit()
    session.close()
    return engine


def test_fetch_expenses_filters_owner_and_window(engine: Engine) -> None:
    """Only the owner's rows inside the inclusive window come back, ascending by time."""
    rows = SQLExpenseStore(engine).fetch_expenses("u1", datetime(2025, 6, 1), datetime(2025, 6, 3, 23, 59, 59))
    got = [(r.occurred_at, r.amount, r.category_name, r.payment_method) for r in rows]
    expected = [
        (datetime(2025, 6, 1, 0, 0, 0), Decimal("80.00"), "Travel", "card"),
        (datetime(2025, 6, 2, 9, 0), Decimal("12.50"), "Food", "upi"),
        (datetime(2025, 6, 2, 12, 0), Decimal("40.00"), None, "cash"),
        (datetime(2025, 6, 3, 23, 59, 59), Decimal("5.25"), "Food", None),
    ]
    if got != expected:
        msg = f"Expected {expected}, got {got}"
        raise AssertionError(msg)
    if {r.owner_id for r in rows} != {"u1"}:
        msg = "Rows from other owners leaked into the result"
        raise AssertionError(msg)


def test_fetch_error_wraps_database_failures() -> None:
    """A database error is raised as FetchError with the underlying message."""
    store = SQLExpenseStore(memory_engine())  # schema never created
    with pytest.raises(FetchError, match="Error fetching expenses"):
        store.fetch_expenses("u1", datetime(2025, 6, 1), datetime(2025, 6, 1, 23, 59, 59))


def test_aggregator_over_sql_store(engine: Engine) -> None:
    """Uncategorized rows are dropped and the rest are summarized."""
    report = InsightsAggregator(SQLExpenseStore(engine)).compute_insights("u1", "2025-06-01", "2025-06-03")
    if report.transaction_count != 3 or report.total_spent != Decimal("97.75"):
        msg = f"Expected 3 transactions totalling 97.75, got {report.transaction_count} / {report.total_spent}"
        raise AssertionError(msg)
    if [c.name for c in report.top_categories] != ["Travel", "Food"]:
        msg = f"Unexpected categories: {report.top_categories}"
        raise AssertionError(msg)
    if report.highest_single_expense.method != "card" or report.days_in_window != 3:
        msg = f"Unexpected report: {report}"
        raise AssertionError(msg)
