"""
Async REST client for the hosted database.
Reads views and tables through the PostgREST query interface.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a remote query cannot be completed."""

    def __init__(self, table: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{table}: {message}")
        self.table = table
        self.status_code = status_code


class StoreSession(BaseModel):
    """The signed-in viewer, if any."""
    user_id: str
    access_token: Optional[str] = None


def eq(value: Any) -> str:
    return f"eq.{value}"


def in_(values: Sequence[Any]) -> str:
    joined = ",".join(str(v) for v in values)
    return f"in.({joined})"


class RestStore:
    REST_PATH = "/rest/v1"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        session: Optional[StoreSession] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session
        self._transport = transport

    @property
    def user_id(self) -> Optional[str]:
        return self.session.user_id if self.session else None

    def _headers(self) -> Dict[str, str]:
        token = self.api_key
        if self.session and self.session.access_token:
            token = self.session.access_token
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Optional[Dict[str, str]] = None,
        order: Sequence[Tuple[str, bool]] = (),
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Run a read query against a table or view.

        Args:
            table: Table or view name
            columns: Column list for ``select``
            filters: Column -> PostgREST operator expression (see ``eq``/``in_``)
            order: (column, ascending) pairs, applied in sequence
            limit: Maximum number of rows

        Returns:
            Decoded JSON rows

        Raises:
            StoreError: On transport failure, non-2xx status or a non-list body
        """
        params: Dict[str, str] = {"select": columns}
        if filters:
            params.update(filters)
        if order:
            params["order"] = ",".join(
                f"{column}.{'asc' if ascending else 'desc'}" for column, ascending in order
            )
        if limit is not None:
            params["limit"] = str(limit)

        url = f"{self.base_url}{self.REST_PATH}/{table}"

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            ) as client:
                resp = await client.get(url, params=params)
        except httpx.HTTPError as e:
            raise StoreError(table, f"request failed: {e}") from e

        if resp.status_code >= 400:
            raise StoreError(table, f"HTTP {resp.status_code}: {resp.text[:200]}", resp.status_code)

        try:
            rows = resp.json()
        except ValueError as e:
            raise StoreError(table, "invalid JSON body", resp.status_code) from e

        if not isinstance(rows, list):
            raise StoreError(table, "expected a list of rows", resp.status_code)

        logger.debug(f"Fetched {len(rows)} rows from {table}")
        return rows
