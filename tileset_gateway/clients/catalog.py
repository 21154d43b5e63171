"""Catalog service client.

Reads 3D layer records from the catalog REST service:

- ``get_record(id)``           ``GET  {url}/{sub}/{id}``               404 → ``None``
- ``is_product_id_exist(id)``  ``GET  {url}/{sub}/lastVersion/{id}``   200/404 → bool
- ``find_by_product_name(n)``  ``POST {url}/{sub}/find``                → records

Network failures, unexpected status codes and unreadable bodies raise
``CatalogError``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

import httpx

from tileset_gateway.core.exceptions import TransientError
from tileset_gateway.models.payloads import Record3D

logger = logging.getLogger("tileset_gateway.clients.catalog")


class CatalogError(TransientError):
    """The catalog service failed or answered unexpectedly."""

    default_stage = "catalog"
    default_code = "CATALOG_REQUEST_FAILED"


class CatalogClient:
    """Async client for the catalog service.

    Args:
        base_url: Service root, e.g. ``"http://catalog:8080"``.
        sub_url: Resource path, e.g. ``"metadata"``.
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

    async def get_record(self, identifier: str) -> Record3D | None:
        """Fetch a record by identifier, or ``None`` if it does not exist."""
        logger.debug("Get record from catalog | identifier=%s", identifier)
        response = await self._request("GET", f"{self._root}/{identifier}")
        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        self._expect_ok(response, "get record")
        if not response.content:
            return None
        try:
            record = Record3D.model_validate(response.json())
        except ValueError as exc:
            raise self._bad_body(exc) from exc
        logger.debug("Got record from catalog | identifier=%s", record.id)
        return record

    async def is_product_id_exist(self, product_id: str) -> bool:
        """Return ``True`` if the catalog has a version of *product_id*."""
        logger.debug("Find last version of product | product_id=%s", product_id)
        response = await self._request("GET", f"{self._root}/lastVersion/{product_id}")
        if response.status_code == HTTPStatus.OK:
            return True
        if response.status_code == HTTPStatus.NOT_FOUND:
            return False
        logger.error(
            "Got unexpected status-code from catalog | status=%d | product_id=%s",
            response.status_code,
            product_id,
        )
        msg = "Problem with the catalog during validation of productId existence"
        raise CatalogError(msg)

    async def find_by_product_name(self, product_name: str) -> list[Record3D]:
        """Return every record carrying *product_name*."""
        logger.debug("Find records by product name | product_name=%s", product_name)
        response = await self._request(
            "POST",
            f"{self._root}/find",
            json={"productName": product_name},
        )
        self._expect_ok(response, "find by product name")
        try:
            return [Record3D.model_validate(item) for item in response.json() or []]
        except ValueError as exc:
            raise self._bad_body(exc) from exc

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.request(method, url, timeout=self._timeout_s, **kwargs)
            async with httpx.AsyncClient(timeout=self._timeout_s) as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Something went wrong in catalog | url=%s | error=%s", url, exc)
            msg = "there is a problem with catalog"
            raise CatalogError(msg) from exc

    @staticmethod
    def _expect_ok(response: httpx.Response, action: str) -> None:
        if response.status_code != HTTPStatus.OK:
            logger.error(
                "Got unexpected status-code from catalog | action=%s | status=%d",
                action,
                response.status_code,
            )
            msg = f"Problem with the catalog during {action}"
            raise CatalogError(msg)

    @staticmethod
    def _bad_body(exc: ValueError) -> CatalogError:
        logger.error("Catalog answered with an unreadable body | error=%s", exc)
        return CatalogError("Got an unexpected response body from catalog")
