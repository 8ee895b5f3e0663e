"""Authentication service HTTP client"""

import httpx
from typing import Any, Dict
from lab_gateway.domain.exceptions import AuthenticationError, AuthServiceError
from lab_gateway.config import settings


class AuthClient:
    """Client for the external user login endpoint"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.auth_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Exchange credentials for the user record. Single attempt, no retry.

        Raises:
            AuthenticationError: Credentials rejected (4xx)
            AuthServiceError: Timeout, 5xx, network failure or non-object body
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/api/users/login",
                    json={"email": email, "password": password},
                )
                response.raise_for_status()
                data = response.json()
            except httpx.TimeoutException as e:
                raise AuthServiceError(f"Auth API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                if e.response.status_code < 500:
                    raise AuthenticationError(f"Login rejected: {e.response.status_code}") from e
                raise AuthServiceError(f"Auth API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise AuthServiceError(f"Auth API unreachable: {e}") from e
            except ValueError as e:
                raise AuthServiceError(f"Invalid response from auth API: {e}") from e

        if not isinstance(data, dict):
            raise AuthServiceError("Invalid response from auth API: expected an object")

        # Never keep the password around, whatever the service echoes back
        return {**data, "password": ""}
