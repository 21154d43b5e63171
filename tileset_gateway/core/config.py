"""Gateway configuration loaded from environment variables.

All configuration values have sensible defaults for local development;
deployment settings are the source of truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range or a required string is empty.
    This catches bad configuration at startup instead of mid-request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from tileset_gateway.core.constants import BLOB_PROVIDER, NFS_PROVIDER
from tileset_gateway.core.exceptions import PipelineError


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class GatewayConfig:
    """Immutable gateway configuration.

    Loaded once at startup and handed to the validation pipeline.

    Attributes:
        base_path: Root that client-supplied model paths must live under.
        pv_path: Mounted (physical) root that ``base_path`` maps onto.
        coverage_threshold_pct: Minimum footprint coverage, in percent.
        catalog_url: Catalog service base URL.
        catalog_sub_url: Catalog resource path.
        lookup_tables_url: Lookup-tables service base URL.
        lookup_tables_sub_url: Lookup-tables resource path.
        remote_provider: Tileset source for updates (``nfs`` or ``blob``).
        blob_container: Blob container holding models when ``remote_provider`` is ``blob``.
        blob_connection_string: Azure Storage connection string (empty when unused).
        http_timeout_s: Timeout for REST collaborator calls, in seconds.
    """

    base_path: str = "/data/models"
    pv_path: str = "/mnt/models"
    coverage_threshold_pct: float = 50.0
    catalog_url: str = "http://localhost:8080"
    catalog_sub_url: str = "metadata"
    lookup_tables_url: str = "http://localhost:8081"
    lookup_tables_sub_url: str = "lookup-tables/lookupData"
    remote_provider: str = NFS_PROVIDER
    blob_container: str = "3d-models"
    blob_connection_string: str = ""
    http_timeout_s: float = 10.0

    @classmethod
    def from_env(cls) -> GatewayConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range
                or a required string value is empty.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``VALIDATION_PERCENT=abc``).
        """
        config = cls(
            base_path=os.getenv("PATHS_BASE_PATH", "/data/models"),
            pv_path=os.getenv("PATHS_PV_PATH", "/mnt/models"),
            coverage_threshold_pct=float(os.getenv("VALIDATION_PERCENT", "50")),
            catalog_url=os.getenv("CATALOG_URL", "http://localhost:8080"),
            catalog_sub_url=os.getenv("CATALOG_SUB_URL", "metadata"),
            lookup_tables_url=os.getenv("LOOKUP_TABLES_URL", "http://localhost:8081"),
            lookup_tables_sub_url=os.getenv("LOOKUP_TABLES_SUB_URL", "lookup-tables/lookupData"),
            remote_provider=os.getenv("REMOTE_PROVIDER", NFS_PROVIDER),
            blob_container=os.getenv("BLOB_CONTAINER", "3d-models"),
            blob_connection_string=os.getenv("AzureWebJobsStorage", ""),  # noqa: SIM112
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "10")),
        )
        _validate(config)
        return config


def _validate(config: GatewayConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not config.base_path:
        raise ConfigValidationError("PATHS_BASE_PATH", config.base_path, "must not be empty")

    if not config.pv_path:
        raise ConfigValidationError("PATHS_PV_PATH", config.pv_path, "must not be empty")

    if not 0.0 <= config.coverage_threshold_pct <= 100.0:
        raise ConfigValidationError(
            "VALIDATION_PERCENT",
            config.coverage_threshold_pct,
            "must be between 0 and 100 (percentage)",
        )

    if not config.catalog_url:
        raise ConfigValidationError("CATALOG_URL", config.catalog_url, "must not be empty")

    if not config.lookup_tables_url:
        raise ConfigValidationError(
            "LOOKUP_TABLES_URL",
            config.lookup_tables_url,
            "must not be empty",
        )

    if config.remote_provider not in (NFS_PROVIDER, BLOB_PROVIDER):
        raise ConfigValidationError(
            "REMOTE_PROVIDER",
            config.remote_provider,
            f"must be one of {NFS_PROVIDER!r}, {BLOB_PROVIDER!r}",
        )

    if config.remote_provider == BLOB_PROVIDER and not config.blob_container:
        raise ConfigValidationError(
            "BLOB_CONTAINER",
            config.blob_container,
            "must not be empty when REMOTE_PROVIDER is 'blob'",
        )

    if config.http_timeout_s <= 0:
        raise ConfigValidationError(
            "HTTP_TIMEOUT_S",
            config.http_timeout_s,
            "must be > 0 (seconds)",
        )
