"""Lookup-tables service client (classification values)."""

from __future__ import annotations

import logging
from http import HTTPStatus

import httpx

from tileset_gateway.core.exceptions import TransientError
from tileset_gateway.models.payloads import LookupOption

logger = logging.getLogger("tileset_gateway.clients.lookup_tables")

CLASSIFICATION_TABLE = "classification"


class LookupTablesError(TransientError):
    """The lookup-tables service failed or answered unexpectedly."""

    default_stage = "lookup_tables"
    default_code = "LOOKUP_TABLES_REQUEST_FAILED"


class LookupTablesClient:
    """Async client for the lookup-tables service.

    Args:
        base_url: Service root.
        sub_url: Resource path, e.g. ``"lookup-tables/lookupData"``.
        timeout_s: Per-request timeout in seconds.
        client: Optional shared ``httpx.AsyncClient`` (owned by the caller).
    """

    def __init__(
        self,
        base_url: str,
        sub_url: str,
        *,
        timeout_s: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._root = f"{base_url.rstrip('/')}/{sub_url.strip('/')}"
        self._timeout_s = timeout_s
        self._client = client

    async def get_classifications(self) -> list[str]:
        """Return the valid classification values, in service order.

        Raises:
            LookupTablesError: On network errors or a non-200 answer.
        """
        url = f"{self._root}/{CLASSIFICATION_TABLE}"
        logger.debug("Get classifications from lookup-tables service | url=%s", url)
        try:
            if self._client is not None:
                response = await self._client.get(url, timeout=self._timeout_s)
            else:
                async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                    response = await client.get(url)
        except httpx.HTTPError as exc:
            logger.error("Something went wrong with lookup-tables service | error=%s", exc)
            msg = "there is a problem with lookup-tables"
            raise LookupTablesError(msg) from exc

        if response.status_code != HTTPStatus.OK:
            logger.error(
                "Got unexpected status-code from lookup-tables | status=%d",
                response.status_code,
            )
            msg = "there is a problem with lookup-tables"
            raise LookupTablesError(msg)

        try:
            classifications = [
                LookupOption.model_validate(item).value for item in response.json()
            ]
        except ValueError as exc:
            logger.error("Lookup-tables answered with an unreadable body | error=%s", exc)
            msg = "there is a problem with lookup-tables"
            raise LookupTablesError(msg) from exc
        logger.debug("Got classifications | count=%d", len(classifications))
        return classifications
