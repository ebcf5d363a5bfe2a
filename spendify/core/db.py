"""DB models and session helpers for the Spendify expense store."""

from functools import lru_cache

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class Category(Base):
    """An expense category; ``user_id`` is null for global categories."""

    __tablename__ = "categories"
    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    user_id = Column(String, nullable=True, index=True)


class Expense(Base):
    """A single expense owned by a user."""

    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    expense_date = Column(Date, nullable=True)
    expense_method = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=True, index=True)


@lru_cache
def get_engine(database_url: str) -> Engine:
    """Create (once per URL) a SQLAlchemy engine."""
    return create_engine(database_url)


def get_session_factory(engine: Engine) -> sessionmaker:
    """Build a session factory bound to ``engine``."""
    return sessionmaker(autoflush=False, bind=engine)


def create_tables(engine: Engine) -> None:
    """Create the categories and expenses tables if they do not exist."""
    Base.metadata.create_all(engine)
