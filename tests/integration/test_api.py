"""Integration tests for API endpoints"""

import pytest
from unittest.mock import AsyncMock, patch
from datetime import date, timedelta
from fastapi.testclient import TestClient
from lab_gateway.domain.models import Transaction, TransactionType
from lab_gateway.domain.exceptions import AuthenticationError, AuthServiceError, TransactionAPIError

USER = {"_id": "user_1", "name": "Lab Owner", "email": "owner@lab.test", "password": "secret"}


@pytest.fixture
def store_transactions() -> list[Transaction]:
    """Transaction store response spread over the last few weeks"""
    today = date.today()
    return [
        Transaction(amount=100, type=TransactionType.INCOME, category="Sells", date=today),
        Transaction(amount=40, type=TransactionType.EXPENSE, category="Employee Salary", date=today - timedelta(days=2)),
        Transaction(amount=60, type=TransactionType.EXPENSE, category="Raw Material", date=today - timedelta(days=20)),
    ]


def login(client: TestClient) -> str:
    with patch("lab_gateway.infrastructure.clients.auth.AuthClient.login", new_callable=AsyncMock) as mock_login:
        mock_login.return_value = {**USER, "password": ""}
        response = client.post("/v1/users/login", json={"email": USER["email"], "password": USER["password"]})
    assert response.status_code == 200
    return response.json()["token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Request-ID" in response.headers


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "lab_analytics_reports_total" in response.text
    assert "lab_login_total" in response.text
    assert "lab_transaction_fetch_failures_total" in response.text


@patch("lab_gateway.infrastructure.clients.auth.AuthClient.login")
def test_login_success(mock_login: AsyncMock, client: TestClient):
    """Test POST /v1/users/login opens a session"""
    mock_login.return_value = {**USER, "password": ""}

    response = client.post("/v1/users/login", json={"email": USER["email"], "password": "secret"})

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["expires_at"]
    assert data["user"]["email"] == USER["email"]
    assert data["user"]["password"] == ""
    mock_login.assert_awaited_once_with(USER["email"], "secret")


@patch("lab_gateway.infrastructure.clients.auth.AuthClient.login")
def test_login_rejected(mock_login: AsyncMock, client: TestClient):
    mock_login.side_effect = AuthenticationError("Login rejected: 400")

    response = client.post("/v1/users/login", json={"email": USER["email"], "password": "wrong"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Login failed"


@patch("lab_gateway.infrastructure.clients.auth.AuthClient.login")
def test_login_auth_service_down(mock_login: AsyncMock, client: TestClient):
    mock_login.side_effect = AuthServiceError("Auth API timeout after 5.0s")

    response = client.post("/v1/users/login", json={"email": USER["email"], "password": "secret"})

    assert response.status_code == 503
    assert response.json()["detail"] == "Login failed"


def test_login_validation(client: TestClient):
    response = client.post("/v1/users/login", json={"email": USER["email"]})
    assert response.status_code == 422


def test_me_and_logout(client: TestClient):
    """Test session lifecycle through the API"""
    token = login(client)

    me = client.get("/v1/users/me", headers=auth_header(token))
    assert me.status_code == 200
    assert me.json()["user_id"] == "user_1"
    assert me.json()["user"]["password"] == ""

    logout = client.post("/v1/users/logout", headers=auth_header(token))
    assert logout.status_code == 200
    assert logout.json() == {"status": "logged_out"}

    after = client.get("/v1/users/me", headers=auth_header(token))
    assert after.status_code == 401


def test_analytics_requires_session(client: TestClient):
    assert client.get("/v1/analytics").status_code == 401
    assert client.get("/v1/analytics", headers=auth_header("bogus")).status_code == 401


@patch("lab_gateway.infrastructure.clients.transactions.TransactionClient.get_transactions")
def test_analytics_for_session_user(
    mock_store: AsyncMock,
    client: TestClient,
    store_transactions: list[Transaction],
):
    """Test GET /v1/analytics aggregates the session user's records"""
    mock_store.return_value = store_transactions
    token = login(client)

    response = client.get("/v1/analytics", headers=auth_header(token))

    assert response.status_code == 200
    mock_store.assert_awaited_once_with("user_1")
    summary = response.json()["summary"]
    assert summary["total_transactions"] == 3
    assert summary["income_turnover"] == 100
    assert summary["expense_turnover"] == 100
    assert summary["wages"] == 40
    assert summary["taxes"] == pytest.approx(10)
    assert summary["profit"] == pytest.approx(100 - (100 + 40 + 10))
    assert summary["income_turnover_percent"] == 50
    assert summary["profit_formula"] == "source"


@patch("lab_gateway.infrastructure.clients.transactions.TransactionClient.get_transactions")
def test_analytics_filters(
    mock_store: AsyncMock,
    client: TestClient,
    store_transactions: list[Transaction],
):
    """Test frequency and type filters narrow the aggregated records"""
    mock_store.return_value = store_transactions
    token = login(client)

    response = client.get("/v1/analytics?frequency=7&type=expense", headers=auth_header(token))

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["total_transactions"] == 1
    assert data["summary"]["wages"] == 40
    assert [row["category"] for row in data["expense_by_category"]] == ["Employee Salary"]
    assert data["income_by_category"] == []


@patch("lab_gateway.infrastructure.clients.transactions.TransactionClient.get_transactions")
def test_analytics_invalid_filter(
    mock_store: AsyncMock,
    client: TestClient,
    store_transactions: list[Transaction],
):
    mock_store.return_value = store_transactions
    token = login(client)

    response = client.get("/v1/analytics?frequency=custom", headers=auth_header(token))

    assert response.status_code == 422


@patch("lab_gateway.infrastructure.clients.transactions.TransactionClient.get_transactions")
def test_analytics_store_unavailable(mock_store: AsyncMock, client: TestClient):
    mock_store.side_effect = TransactionAPIError("Transaction API error: 500")
    token = login(client)

    response = client.get("/v1/analytics", headers=auth_header(token))

    assert response.status_code == 503
    assert response.json()["detail"] == "Transaction service unavailable"


def test_compute_posted_transactions(client: TestClient):
    """Test POST /v1/analytics/compute with the sale + salary example"""
    response = client.post(
        "/v1/analytics/compute",
        json={
            "transactions": [
                {"amount": 100, "type": "income", "category": "Sells"},
                {"amount": 40, "type": "expense", "category": "Employee Salary"},
            ]
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["profit"] == pytest.approx(10)
    assert data["category_totals"] == [
        {"category": "Employee Salary", "income_amount": 0, "expense_amount": 40},
        {"category": "Sells", "income_amount": 100, "expense_amount": 0},
    ]


def test_compute_empty(client: TestClient):
    """Test empty input produces a well-formed report"""
    response = client.post("/v1/analytics/compute", json={"transactions": []})

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["has_data"] is False
    assert data["summary"]["income_count_percent"] == 0
    assert data["category_totals"] == []


def test_compute_rejects_negative_amount(client: TestClient):
    response = client.post(
        "/v1/analytics/compute",
        json={"transactions": [{"amount": -1, "type": "income", "category": "Sells"}]},
    )
    assert response.status_code == 422


def test_compute_rejects_infinite_amount(client: TestClient):
    response = client.post(
        "/v1/analytics/compute",
        content='{"transactions": [{"amount": Infinity, "type": "income", "category": "Sells"}]}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422


def test_compute_huge_amounts(client: TestClient):
    """Test amounts near the float limit still produce a report"""
    response = client.post(
        "/v1/analytics/compute",
        json={
            "transactions": [
                {"amount": 1e308, "type": "income", "category": "Sells"},
                {"amount": 1e308, "type": "expense", "category": "Raw Material"},
            ]
        },
    )

    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["income_turnover_percent"] == 50
    assert summary["expense_turnover_percent"] == 50
