"""Mounted-volume file provider.

Serves both roles: the ingestion ``FileProvider`` and the ``nfs`` remote
provider for updates (the mounted path *is* the fetchable path).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from tileset_gateway.core.constants import NFS_PROVIDER
from tileset_gateway.providers.base import (
    FileProvider,
    ProviderNotFoundError,
    ProviderReadError,
    RemoteFileProvider,
)

logger = logging.getLogger("tileset_gateway.providers.local")


class LocalFileProvider(FileProvider, RemoteFileProvider):
    """Read files from the local (mounted) filesystem."""

    def __init__(self, name: str = NFS_PROVIDER) -> None:
        RemoteFileProvider.__init__(self, name)

    async def exists(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).exists)

    async def is_file(self, path: str) -> bool:
        return await asyncio.to_thread(Path(path).is_file)

    async def read_file(self, path: str) -> bytes:
        return await asyncio.to_thread(self._read_bytes, path)

    async def get_file(self, path: str) -> bytes:
        return await self.read_file(path)

    def _read_bytes(self, path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except FileNotFoundError as exc:
            msg = f"File not found: {path}"
            raise ProviderNotFoundError(self.name, msg, path=path) from exc
        except OSError as exc:
            logger.error("Cannot read file | provider=%s | path=%s | error=%s", self.name, path, exc)
            msg = f"Cannot read file {path}: {exc}"
            raise ProviderReadError(self.name, msg, path=path, retryable=True) from exc
