"""
PostgREST (Supabase-style) remote gateway.

Holds one httpx client handle. The handle is created by connect() and
dropped by disconnect(); nothing else changes availability.
"""

from typing import Any

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from stocksync.config import get_logger, get_settings
from stocksync.config.settings import RemoteSettings
from stocksync.core.entities.sync import Collection
from stocksync.core.exceptions import (
    RemoteError,
    RemoteErrorReason,
    RemoteUnavailableError,
    SchemaMismatchError,
)
from stocksync.core.interfaces.remote_gateway import IRemoteGateway
from stocksync.infrastructure.remote.mappers import (
    column_for,
    decode_row,
    encode_fields,
    encode_record,
    wrap_array,
)

logger = get_logger(__name__)

# Columns some backends declare as arrays; scalar writes to them are retried wrapped
ARRAY_FALLBACK_COLUMNS: dict[Collection, str] = {
    Collection.PRODUCTS: "id",
    Collection.MOVEMENTS: "prod_id",
}

ARRAY_MISMATCH_MARKER = "malformed array literal"
INVALID_TEXT_REPRESENTATION = "22P02"


class PostgRESTGateway(IRemoteGateway):
    """
    HTTP gateway to a PostgREST API.

    Provides:
    - Explicit connect/disconnect lifecycle with a retried probe
    - Typed error classification (unavailable, schema mismatch, network, request)
    - A single wrapped-array retry on schema mismatch for insert/upsert
    """

    def __init__(
        self,
        settings: RemoteSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or get_settings().remote
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._tables: dict[Collection, str] = {
            Collection.PRODUCTS: self._settings.products_table,
            Collection.MOVEMENTS: self._settings.movements_table,
            Collection.ORDERS: self._settings.orders_table,
        }

    # Lifecycle

    def is_available(self) -> bool:
        return self._client is not None

    async def connect(self) -> bool:
        """Replace the client handle with a fresh, probed one."""
        await self.disconnect()

        if not self._settings.is_configured:
            logger.warning("remote_not_configured")
            return False

        client = httpx.AsyncClient(
            base_url=self._settings.base_url,
            headers={
                "apikey": self._settings.api_key,
                "Authorization": f"Bearer {self._settings.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self._settings.timeout,
            transport=self._transport,
        )

        try:
            probe = self._get_retry_decorator()(self._probe)
            await probe(client)
        except (httpx.HTTPError, RemoteError) as e:
            await client.aclose()
            logger.warning(
                "remote_connect_failed",
                url=self._settings.url,
                error=str(e),
            )
            return False

        self._client = client
        logger.info("remote_connected", url=self._settings.url)
        return True

    async def disconnect(self) -> None:
        if self._client is None:
            return
        client, self._client = self._client, None
        await client.aclose()
        logger.info("remote_disconnected")

    async def _probe(self, client: httpx.AsyncClient) -> None:
        table = self._tables[Collection.PRODUCTS]
        response = await client.get(f"/{table}", params={"select": "id", "limit": "1"})
        self._raise_for_response(response, table)

    def _get_retry_decorator(self) -> Any:
        """Tenacity retry for the connect probe; transport errors only."""
        delay = self._settings.retry_delay
        return retry(
            stop=stop_after_attempt(max(1, self._settings.connect_retries)),
            wait=wait_exponential(multiplier=delay, min=delay, max=delay * 8),
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=self._log_retry,
            reraise=True,
        )

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        logger.warning(
            "remote_connect_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
        )

    # Writes

    async def insert(self, collection: Collection, record: dict[str, Any]) -> None:
        await self._write_with_fallback(collection, encode_record(collection, record), upsert=False)

    async def upsert(self, collection: Collection, record: dict[str, Any]) -> None:
        await self._write_with_fallback(collection, encode_record(collection, record), upsert=True)

    async def update(
        self, collection: Collection, record_id: str | int, fields: dict[str, Any]
    ) -> None:
        await self._request(
            "PATCH",
            collection,
            "update",
            params={"id": f"eq.{record_id}"},
            json=encode_fields(collection, fields),
            headers={"Prefer": "return=minimal"},
        )

    async def delete(self, collection: Collection, record_id: str | int) -> None:
        await self._request(
            "DELETE",
            collection,
            "delete",
            params={"id": f"eq.{record_id}"},
        )

    async def delete_up_to(
        self, collection: Collection, column: str, ceiling: str
    ) -> None:
        await self._request(
            "DELETE",
            collection,
            "delete_up_to",
            params={column_for(collection, column): f"lte.{ceiling}"},
        )

    async def _write_with_fallback(
        self, collection: Collection, row: dict[str, Any], upsert: bool
    ) -> None:
        try:
            await self._post(collection, row, upsert)
        except SchemaMismatchError as e:
            column = ARRAY_FALLBACK_COLUMNS.get(collection)
            if column is None or column not in row:
                raise
            logger.warning(
                "remote_array_fallback",
                table=self._tables[collection],
                column=column,
                error=e.message,
            )
            await self._post(collection, {**row, column: wrap_array(row[column])}, upsert)

    async def _post(
        self, collection: Collection, row: dict[str, Any], upsert: bool
    ) -> None:
        prefer = "return=minimal"
        if upsert:
            prefer = "resolution=merge-duplicates,return=minimal"
        await self._request(
            "POST",
            collection,
            "upsert" if upsert else "insert",
            json=[row],
            headers={"Prefer": prefer},
        )

    # Reads

    async def query(
        self,
        collection: Collection,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"select": "*"}
        for column, value in (filters or {}).items():
            params[column_for(collection, column)] = f"eq.{value}"
        if order_by:
            params["order"] = f"{column_for(collection, order_by)}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)

        response = await self._request("GET", collection, "query", params=params)
        data = response.json()
        if not isinstance(data, list):
            return []
        return [decode_row(collection, row) for row in data]

    # Plumbing

    async def _request(
        self,
        method: str,
        collection: Collection,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        table = self._tables[collection]
        client = self._client
        if client is None:
            raise RemoteUnavailableError(operation, table)

        try:
            response = await client.request(method, f"/{table}", **kwargs)
        except httpx.TransportError as e:
            logger.error("remote_transport_error", table=table, operation=operation, error=str(e))
            raise RemoteError(RemoteErrorReason.NETWORK, str(e) or type(e).__name__, table=table) from e

        self._raise_for_response(response, table)
        logger.debug(
            "remote_call",
            table=table,
            operation=operation,
            status=response.status_code,
        )
        return response

    @staticmethod
    def _raise_for_response(response: httpx.Response, table: str) -> None:
        """Classify a non-2xx response into a typed remote error."""
        if response.is_success:
            return

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        message = str(body.get("message") or response.text[:200] or response.reason_phrase)
        code = body.get("code")
        lowered = message.lower()

        if ARRAY_MISMATCH_MARKER in lowered or (
            code == INVALID_TEXT_REPRESENTATION and "array" in lowered
        ):
            raise SchemaMismatchError(table, message, status_code=response.status_code)

        raise RemoteError(
            RemoteErrorReason.REQUEST_FAILED,
            f"HTTP {response.status_code}: {message}",
            table=table,
            status_code=response.status_code,
        )
