"""Payment provider HTTP client with operation tracking"""

from typing import Any, Dict, Optional

import httpx

from payment_core.config import settings
from payment_core.domain.currency import PaymentProvider
from payment_core.domain.exceptions import PaymentProviderError
from payment_core.infrastructure.observability.logging import payment_logger


def default_base_url(provider: str) -> str:
    if provider == PaymentProvider.PAYSTACK.value:
        return settings.paystack_api_base
    return settings.stripe_api_base


class PaymentProviderClient:
    """
    Thin client for a payment provider's REST API.

    The httpx.AsyncClient is injected so callers own connection pooling and
    tests can use httpx.MockTransport. Every call is wrapped in
    payment_logger.track_operation; failures surface as PaymentProviderError
    carrying the provider's own message, ready for map_payment_error.
    """

    def __init__(
        self,
        provider: str,
        base_url: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.provider = provider
        self.base_url = (base_url or default_base_url(provider)).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.http_client = http_client

    async def post(self, operation: str, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload and return the decoded response body.

        Raises:
            PaymentProviderError: On timeout, network failure, HTTP errors or
                a non-JSON response
        """
        metadata = {"provider": self.provider, "path": path}
        return await payment_logger.track_operation(operation, metadata, lambda: self._send(path, payload))

    async def _send(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.http_client is not None:
            return await self._request(self.http_client, path, payload)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._request(client, path, payload)

    async def _request(self, client: httpx.AsyncClient, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await client.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise PaymentProviderError(
                f"{self.provider} request timeout after {self.timeout}s", provider=self.provider
            ) from e
        except httpx.HTTPStatusError as e:
            raise PaymentProviderError(
                _provider_message(e.response) or f"{self.provider} API error: {e.response.status_code}",
                provider=self.provider,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise PaymentProviderError(f"{self.provider} network error: {e}", provider=self.provider) from e
        except ValueError as e:
            raise PaymentProviderError(f"Invalid response from {self.provider}: {e}", provider=self.provider) from e


def _provider_message(response: httpx.Response) -> Optional[str]:
    """
    Pull the human-readable error out of a provider error body.

    Paystack answers {"status": false, "message": ...}; Stripe nests it as
    {"error": {"message": ...}}.
    """
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if body.get("message"):
        return str(body["message"])
    return None
