"""Expense store: the read side the insights aggregator depends on.

``ExpenseStore`` is the collaborator contract. ``SQLExpenseStore`` implements it on top of
the ``expenses`` and ``categories`` tables, returning untrusted ``RawExpenseRow`` objects
ordered by timestamp. Store failures are raised as ``FetchError``.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from spendify.core.db import Category, Expense, get_session_factory
from spendify.core.exceptions import FetchError
from spendify.core.models import RawExpenseRow
from spendify.core.utils import get_logger

logger = get_logger("spendify.store")


class ExpenseStore(ABC):
    """Abstract source of raw expense rows."""

    @abstractmethod
    def fetch_expenses(self, owner_id: str, start: datetime, end: datetime) -> list[RawExpenseRow]:
        """Return the owner's rows with ``start <= occurred_at <= end``, ascending by timestamp."""


class SQLExpenseStore(ExpenseStore):
    """ExpenseStore backed by SQLAlchemy."""

    def __init__(self, engine: Engine) -> None:
        """Initialize the store with a SQLAlchemy engine."""
        self.engine = engine
        self.Session = get_session_factory(engine)

    def fetch_expenses(self, owner_id: str, start: datetime, end: datetime) -> list[RawExpenseRow]:
        """Fetch expenses joined with their category name."""
        stmt = (
            select(
                Expense.user_id,
                Expense.amount,
                Expense.created_at,
                Expense.expense_method,
                Category.name.label("category_name"),
            )
            .outerjoin(Category, Expense.category_id == Category.id)
            .where(Expense.user_id == owner_id)
            .where(Expense.created_at >= start)
            .where(Expense.created_at <= end)
            .order_by(Expense.created_at.asc(), Expense.id.asc())
        )
        session = self.Session()
        try:
            rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.exception(f"Expense fetch failed for owner={owner_id}")
            msg = f"Error fetching expenses: {exc}"
            raise FetchError(msg) from exc
        finally:
            session.close()
        return [
            RawExpenseRow(
                owner_id=row.user_id,
                amount=row.amount,
                occurred_at=row.created_at,
                payment_method=row.expense_method,
                category_name=row.category_name,
            )
            for row in rows
        ]
