"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient

from mahnung_gateway.api.main import create_app
from mahnung_gateway.api.dependencies import get_fee_table, get_settings
from mahnung_gateway.config import Settings, load_settings
from mahnung_gateway.domain.fee_table import FeeTable, RVG_TABLE
from mahnung_gateway.domain.models import InvoiceSnapshot


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to the statutory values the examples are computed with"""
    return load_settings(
        base_interest_rate=Decimal("0.0362"),
        company_flat_fee=Decimal("40.00"),
        reference_timezone="Europe/Berlin",
        minimum_invoice_age_days=30,
        rvg_table_path=None,
    )


@pytest.fixture
def rvg_table() -> FeeTable:
    """Default RVG table"""
    return RVG_TABLE


@pytest.fixture
def client(settings: Settings, rvg_table: FeeTable) -> TestClient:
    """Create FastAPI test client with pinned settings and table"""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_fee_table] = lambda: rvg_table
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return date(2024, 6, 30)


@pytest.fixture
def overdue_invoice() -> InvoiceSnapshot:
    """Invoice issued 50 days and due 10 days before the `today` fixture"""
    return InvoiceSnapshot(
        total_amount=Decimal("1000.00"),
        invoice_date=date(2024, 5, 11),
        due_date=date(2024, 6, 20),
    )
