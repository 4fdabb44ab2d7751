"""Shared pytest fixtures."""

import pytest

from oraclio.db import DatabaseConnection
from oraclio.models.context import BusinessContext


@pytest.fixture
def db_conn(tmp_path):
    """Provide a fresh database connection."""
    db = DatabaseConnection(str(tmp_path / "test.db"))
    yield db
    db.close()


@pytest.fixture
def empty_context():
    return BusinessContext()


@pytest.fixture
def business_context():
    """Context for a user with CRM data."""
    return BusinessContext(
        user_name="Anna Petrova",
        company_name="Wise",
        user_role="Head of Sales",
        sales_data=[{"month": "Current", "revenue": 150000, "customers": 3, "deals": 3, "currency": "RUB"}],
        top_customers=[{"name": "Big deal", "revenue": "100,000 RUB", "growth": "+0%", "plan": "NEW", "users": 1}],
    )
