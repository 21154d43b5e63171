"""Azure Blob Storage remote file provider.

Models are uploaded to a blob container with the same relative layout
they have under the mounted volume, so a mounted path maps onto a blob
name by stripping the ``pv_path`` root.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from tileset_gateway.core.constants import BLOB_PROVIDER
from tileset_gateway.providers.base import (
    ProviderNotFoundError,
    ProviderReadError,
    RemoteFileProvider,
)
from tileset_gateway.utils.paths import remove_pv_path_from_model_path

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger("tileset_gateway.providers.blob")


class BlobFileProvider(RemoteFileProvider):
    """Download tileset documents from an Azure Blob container.

    Args:
        blob_service_client: An ``azure.storage.blob.BlobServiceClient``.
        container: Container holding the models.
        pv_path: Mounted root stripped from paths to form blob names.
    """

    def __init__(
        self,
        blob_service_client: BlobServiceClient,
        container: str,
        *,
        pv_path: str,
    ) -> None:
        super().__init__(BLOB_PROVIDER)
        self._client = blob_service_client
        self._container = container
        self._pv_path = pv_path

    def blob_name_for(self, path: str) -> str:
        """Map a mounted path onto its blob name."""
        return remove_pv_path_from_model_path(path, pv_path=self._pv_path).lstrip("/")

    async def get_file(self, path: str) -> bytes:
        blob_name = self.blob_name_for(path)
        logger.debug(
            "Fetching blob | container=%s | blob=%s",
            self._container,
            blob_name,
        )
        return await asyncio.to_thread(self._download, blob_name)

    def _download(self, blob_name: str) -> bytes:
        from azure.core.exceptions import AzureError, ResourceNotFoundError

        try:
            blob_client = self._client.get_blob_client(container=self._container, blob=blob_name)
            return blob_client.download_blob().readall()
        except ResourceNotFoundError as exc:
            msg = f"Blob not found: {self._container}/{blob_name}"
            raise ProviderNotFoundError(self.name, msg, path=blob_name) from exc
        except AzureError as exc:
            logger.error(
                "Problem during get file from blob storage | container=%s | blob=%s | error=%s",
                self._container,
                blob_name,
                exc,
            )
            msg = f"Blob download failed for {self._container}/{blob_name}: {exc}"
            raise ProviderReadError(self.name, msg, path=blob_name, retryable=True) from exc
