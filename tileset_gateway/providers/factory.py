"""Remote file provider factory — selects the update-flow tileset source.

The factory maintains a registry of known providers.  New providers are
registered by adding an entry to ``_PROVIDER_REGISTRY`` or calling
``register_provider``.

Usage::

    from tileset_gateway.providers.factory import get_remote_provider

    provider = get_remote_provider(config.remote_provider, config)
    content = await provider.get_file(tileset_path)

The provider name comes from ``GatewayConfig.remote_provider``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tileset_gateway.core.constants import BLOB_PROVIDER, NFS_PROVIDER
from tileset_gateway.core.exceptions import ContractError
from tileset_gateway.providers.base import ProviderError, RemoteFileProvider

if TYPE_CHECKING:
    from collections.abc import Callable

    from tileset_gateway.core.config import GatewayConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lazy-import provider registry
# ---------------------------------------------------------------------------

# Each entry maps a provider name to a callable building the provider from
# configuration.  Imports are lazy so azure-storage-blob is only loaded when
# the blob provider is selected.

_PROVIDER_REGISTRY: dict[str, Callable[[GatewayConfig], RemoteFileProvider]] = {}


def _register_builtin_providers() -> None:
    """Register the built-in remote providers."""

    def _nfs(config: GatewayConfig) -> RemoteFileProvider:  # noqa: ARG001
        from tileset_gateway.providers.local import LocalFileProvider

        return LocalFileProvider()

    def _blob(config: GatewayConfig) -> RemoteFileProvider:
        from azure.storage.blob import BlobServiceClient

        from tileset_gateway.providers.blob import BlobFileProvider

        if not config.blob_connection_string:
            msg = "AzureWebJobsStorage environment variable is not set"
            raise ContractError(msg, stage="provider", code="MISSING_CONNECTION_STRING")
        client = BlobServiceClient.from_connection_string(config.blob_connection_string)
        return BlobFileProvider(client, config.blob_container, pv_path=config.pv_path)

    _PROVIDER_REGISTRY[NFS_PROVIDER] = _nfs
    _PROVIDER_REGISTRY[BLOB_PROVIDER] = _blob


def _ensure_registry() -> None:
    """Initialise the provider registry once (idempotent)."""
    if not _PROVIDER_REGISTRY:
        _register_builtin_providers()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_provider(
    name: str,
    builder: Callable[[GatewayConfig], RemoteFileProvider],
) -> None:
    """Register a custom remote provider.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Provider name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _PROVIDER_REGISTRY[name] = builder
    logger.debug("Registered remote provider: %s", name)


def get_remote_provider(name: str, config: GatewayConfig) -> RemoteFileProvider:
    """Create and return a remote file provider.

    Raises:
        ProviderError: If the named provider is not registered.
    """
    _ensure_registry()

    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        msg = f"Invalid config provider received: {name!r} - available values: {available}"
        raise ProviderError(provider=name, message=msg)

    logger.info("Creating remote file provider: %s", name)
    return builder(config)


def list_providers() -> list[str]:
    """Return the names of all registered remote providers."""
    _ensure_registry()
    return sorted(_PROVIDER_REGISTRY)
