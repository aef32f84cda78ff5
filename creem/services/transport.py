"""
Creem HTTP Transport

Thin wrapper around httpx.AsyncClient used by the API resources.
Authenticates with the x-api-key header and converts responses to
camelCase. No retries: failures surface as CreemAPIException.
"""

from typing import Any, Dict, Optional

import httpx

from creem.utils.casing import to_camel_case
from creem.utils.exceptions import CreemAPIException
from creem.utils.logging_config import get_logger

logger = get_logger(__name__)


class CreemTransport:
    """Authenticated request function for the Creem REST API"""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        user_agent: str = "creem-sdk-python",
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "User-Agent": self.user_agent,
        }

    async def request(
        self,
        method: str,
        path: str,
        data: Optional[Any] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make an authenticated HTTP request to the Creem API.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path, e.g. /v1/subscriptions
            data: Optional JSON body
            query_params: Optional query parameters; None values are dropped

        Returns:
            Response JSON with camelCase keys, or {} for 204 No Content

        Raises:
            CreemAPIException: On network errors or non-2xx responses
        """
        url = f"{self.base_url}{path}"
        params = None
        if query_params:
            params = {
                key: (str(value).lower() if isinstance(value, bool) else value)
                for key, value in query_params.items()
                if value is not None
            }

        try:
            response = await self._client.request(
                method=method,
                url=url,
                headers=self._get_headers(),
                json=data if data else None,
                params=params,
            )
        except httpx.RequestError as e:
            logger.error(f"Network error calling Creem API: {e}")
            raise CreemAPIException(
                f"Network error: {e}",
                details={"error": str(e), "path": path},
            ) from e

        if response.status_code >= 400:
            error_message = response.reason_phrase
            try:
                error_body = response.json()
                if isinstance(error_body, dict) and error_body.get("message"):
                    error_message = error_body["message"]
            except ValueError:
                # Response wasn't JSON
                pass

            logger.error(
                f"Creem API error: {response.status_code}",
                extra={
                    "status_code": response.status_code,
                    "path": path,
                    "error": error_message,
                },
            )
            raise CreemAPIException(
                str(error_message),
                status_code=response.status_code,
                details={"path": path},
            )

        if response.status_code == 204:
            return {}

        return to_camel_case(response.json())

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it"""
        if self._owns_client:
            await self._client.aclose()
