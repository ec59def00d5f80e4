import httpx
import time
import logging
import re
from typing import Optional, Dict, Any, List, Tuple
from altegio_mcp.config import AltegioConfig
from altegio_mcp.telemetry import record_api_call
logger = logging.getLogger(__name__)

COMPANY_PLACEHOLDER = "{company_id}"

ACCEPT_HEADER = "application/vnd.api.v2+json"


class AltegioAPIError(Exception):
    """Non-success HTTP status returned by the Altegio API."""

    def __init__(self, method: str, path: str, status_code: int, body: str):
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body
        super().__init__(f"Altegio API {method} {path}: {status_code} {body}")


def resolve_path(path: str, company_id: str) -> str:
    """Substitute the company id for the first {company_id} placeholder in a path template."""
    return path.replace(COMPANY_PLACEHOLDER, company_id, 1)


def to_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query(params: Optional[Dict[str, Any]]) -> List[Tuple[str, str]]:
    """
    Turn a parameter mapping into query pairs, keeping the caller's order.
    Entries whose value is None are left out entirely.
    """
    if not params:
        return []
    return [(key, to_query_value(value)) for key, value in params.items() if value is not None]


def unwrap_envelope(payload: Any) -> Any:
    """Return `data` from a {success, data, meta} envelope, or the payload itself when there is no `data` key."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


class AltegioAPIClient:
    def __init__(self,
                 config: AltegioConfig,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self):
        logger.debug("Entering Altegio API client context")
        await self.ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_value, traceback):
        logger.debug("Exiting Altegio API client context")
        await self.close()

    async def ensure_client(self):
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                headers=self._auth_headers(),
                transport=self.transport,
            )

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.partner_token}, User {self.config.user_token}",
            "Accept": ACCEPT_HEADER,
            "Content-Type": "application/json",
        }

    async def _make_request(self, method: str, endpoint: str, params: Optional[Dict[str, Any]] = None, data: Any = None) -> Any:
        path = resolve_path(endpoint, self.config.company_id)
        logger.info(f"Making {method} request to {path}")
        await self.ensure_client()

        # Strip numeric ids and dates so metrics group by endpoint shape
        clean_endpoint = re.sub(r'/[0-9][0-9-]*(?=/|$)', '/{id}', endpoint)

        query = build_query(params)
        start_time = time.time()
        success = False
        try:
            response = await self._client.request(
                method,
                path,
                params=query or None,
                json=data,
            )
            if not response.is_success:
                logger.error(f"HTTP error {response.status_code} for {method} {path}")
                raise AltegioAPIError(method, path, response.status_code, response.text)

            result = unwrap_envelope(response.json())
            success = True
            return result
        finally:
            record_api_call(self.config.company_id, success, clean_endpoint, method, time.time() - start_time)

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request."""
        return await self._make_request('GET', endpoint, params=params)

    async def post(self, endpoint: str, data: Any) -> Any:
        """Make a POST request."""
        return await self._make_request('POST', endpoint, data=data)

    async def put(self, endpoint: str, data: Any) -> Any:
        """Make a PUT request."""
        return await self._make_request('PUT', endpoint, data=data)

    async def delete(self, endpoint: str) -> Any:
        """Make a DELETE request."""
        return await self._make_request('DELETE', endpoint)
