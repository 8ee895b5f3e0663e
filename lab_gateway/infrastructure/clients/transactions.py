"""Transaction store HTTP client for fetching a user's transaction records"""

import math
import httpx
from datetime import date
from typing import Any, Dict, List
from lab_gateway.domain.models import Transaction, TransactionType
from lab_gateway.domain.exceptions import TransactionAPIError
from lab_gateway.config import settings


def parse_transaction(txn: Dict[str, Any]) -> Transaction:
    """Build a domain Transaction from a transaction store record"""
    amount = float(txn["amount"])
    if not math.isfinite(amount) or amount < 0:
        raise ValueError(f"invalid amount {amount}")

    raw_date = txn.get("date")
    return Transaction(
        amount=amount,
        type=TransactionType(txn["type"]),
        category=str(txn["category"]),
        # Store dates may carry a time part ("2024-03-01T00:00:00.000Z")
        date=date.fromisoformat(raw_date[:10]) if raw_date else None,
        description=txn.get("description") or "",
        reference=txn.get("reference") or "",
        transaction_id=txn.get("_id") or txn.get("transaction_id"),
    )


class TransactionClient:
    """Client for the external transaction store API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.transactions_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_transactions(self, user_id: str) -> List[Transaction]:
        """
        Fetch all transactions recorded for a user.

        Raises:
            TransactionAPIError: On timeout, HTTP errors, or invalid records
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/api/transactions",
                    params={"user_id": user_id},
                )
                response.raise_for_status()
                data = response.json()

                return [parse_transaction(txn) for txn in data.get("transactions", [])]

            except httpx.TimeoutException as e:
                raise TransactionAPIError(f"Transaction API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise TransactionAPIError(f"Transaction API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise TransactionAPIError(f"Transaction API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                raise TransactionAPIError(f"Invalid transaction data from store: {e}") from e
