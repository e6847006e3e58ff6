import pytest

from dashboard_server.cache import ViewCache
from dashboard_server.database import DatabaseClient

from tests.fakes import FakeSupabase


INVOICE_ROWS = [
    {"id": "inv-1", "customer_id": "c1", "amount": 1250, "status": "pending", "date": "2024-03-01"},
    {"id": "inv-2", "customer_id": "c2", "amount": 9900, "status": "paid", "date": "2024-05-12"},
]


@pytest.fixture
def fake_supabase():
    """Supabase fake seeded with two invoices."""
    return FakeSupabase(rows=[dict(row) for row in INVOICE_ROWS])


@pytest.fixture
def db(fake_supabase):
    return DatabaseClient(client=fake_supabase, table="invoices")


@pytest.fixture
def cache():
    return ViewCache()


@pytest.fixture
def valid_form():
    return {"customerId": "c1", "amount": "12.50", "status": "pending"}
