"""Pytest fixtures for testing"""

import httpx
import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from lab_gateway.api.main import create_app
from lab_gateway.api.dependencies import get_auth_client, get_transaction_client
from lab_gateway.infrastructure.clients.auth import AuthClient
from lab_gateway.infrastructure.clients.transactions import TransactionClient
from lab_gateway.infrastructure.database.models import Base
from lab_gateway.infrastructure.database.session import get_db
from lab_gateway.domain.models import Transaction, TransactionType
from mock.lab_api.main import app as mock_lab_app


# Test database
TEST_DATABASE_URL = "sqlite:///./test_lab_gateway.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

MOCK_API_BASE = "http://lab-api.test"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def mock_api_transport() -> httpx.ASGITransport:
    """In-process transport to the mock lab API (auth + transaction store)"""
    return httpx.ASGITransport(app=mock_lab_app)


@pytest.fixture
def e2e_client(client: TestClient, mock_api_transport: httpx.ASGITransport) -> TestClient:
    """Test client whose upstream calls go to the mock lab API"""
    overrides = client.app.dependency_overrides
    overrides[get_auth_client] = lambda: AuthClient(base_url=MOCK_API_BASE, transport=mock_api_transport)
    overrides[get_transaction_client] = lambda: TransactionClient(
        base_url=MOCK_API_BASE, transport=mock_api_transport
    )
    return client


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """A month of lab bookkeeping"""
    return [
        Transaction(amount=5000, type=TransactionType.INCOME, category="Sells", date=date(2024, 3, 1)),
        Transaction(amount=1000, type=TransactionType.INCOME, category="Other Income", date=date(2024, 3, 4)),
        Transaction(amount=1200, type=TransactionType.EXPENSE, category="Employee Salary", date=date(2024, 3, 5)),
        Transaction(amount=800, type=TransactionType.EXPENSE, category="Raw Material", date=date(2024, 3, 6)),
        Transaction(amount=500, type=TransactionType.EXPENSE, category="Building Rent", date=date(2024, 3, 10)),
        Transaction(amount=300, type=TransactionType.EXPENSE, category="Office Party", date=date(2024, 3, 12)),
    ]
