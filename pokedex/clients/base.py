from typing import Any

import httpx

from pokedex.exceptions import UpstreamError, UpstreamErrorKind


class UpstreamClient:
    """
    Shared plumbing for the external API clients.

    Every transport failure leaves this class as an UpstreamError, so retry
    and domain logic never inspect httpx exceptions directly.
    """

    SERVICE_NAME = "Upstream API"

    def __init__(self, base_url: str, timeout: float = 5.0):
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _request_json(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()  # Raises for 3xx/4xx/5xx status codes
            return response.json()

        except httpx.HTTPStatusError as e:
            raise UpstreamError.from_status(self.SERVICE_NAME, e.response.status_code) from e

        except httpx.RequestError as e:
            # Timeouts, DNS failures, refused connections: no status to inspect
            raise UpstreamError(
                self.SERVICE_NAME,
                UpstreamErrorKind.NETWORK_ERROR,
                f"{self.SERVICE_NAME} network error: {e}",
            ) from e

        except ValueError as e:
            # Body is not valid JSON
            raise self._invalid_response() from e

    def _invalid_response(self) -> UpstreamError:
        return UpstreamError(
            self.SERVICE_NAME,
            UpstreamErrorKind.INVALID_RESPONSE,
            f"{self.SERVICE_NAME} returned an unexpected response format.",
        )

    async def close(self):
        """Close the HTTP connection pool (call on app shutdown)."""
        await self.client.aclose()
