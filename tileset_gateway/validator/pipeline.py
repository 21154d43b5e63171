"""Validation pipeline for model ingestion and metadata updates.

Runs the footprint, tileset and metadata checks in a fixed order and
stops at the first failure.  Every step returns a ``ValidationOutcome``:
an ``Invalid`` is a client-correctable rejection with a deterministic
message, while collaborator failures and geometry faults propagate as
``PipelineError`` subclasses.

Ingestion order:
    model path → model folder → tileset file → dates → resolutions →
    footprint → bounding volume → intersection → product type (warning
    only) → product id → classification

Update order (only supplied fields are checked):
    record → footprint + intersection → dates → resolutions →
    product name → classification

All collaborators are awaited one after the other; the order above is
also the precedence of messages when several checks would fail.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, assert_never

from tileset_gateway.core.constants import PHOTO_REALISTIC_3D
from tileset_gateway.core.exceptions import TilesetFormatError
from tileset_gateway.models.bounding_volume import (
    BoundingVolume,
    BoxVolume,
    RegionVolume,
    SphereVolume,
    UnknownVolume,
    parse_bounding_volume,
)
from tileset_gateway.models.outcome import VALID, Invalid, ValidationOutcome
from tileset_gateway.utils.paths import to_mounted_path
from tileset_gateway.validator.footprint import validate_footprint
from tileset_gateway.validator.geometry_converter import region_to_polygon, sphere_to_polygon
from tileset_gateway.validator.intersection import IntersectionCalculator
from tileset_gateway.validator.link_resolver import resolve_tileset_full_path

if TYPE_CHECKING:
    import httpx

    from tileset_gateway.clients.catalog import CatalogClient
    from tileset_gateway.clients.lookup_tables import LookupTablesClient
    from tileset_gateway.core.config import GatewayConfig
    from tileset_gateway.models.payloads import (
        GeoJsonPolygon,
        IngestionPayload,
        Record3D,
        UpdatePayload,
    )
    from tileset_gateway.providers.base import FileProvider, RemoteFileProvider

logger = logging.getLogger("tileset_gateway.validator.pipeline")

BOX_NOT_SUPPORTED_MESSAGE = "BoundingVolume of box is not supported yet... Please contact 3D team."
BAD_TILESET_FORMAT_MESSAGE = "Bad tileset format. Should be in 3DTiles format"


# ---------------------------------------------------------------------------
# Scalar checks
# ---------------------------------------------------------------------------


def check_model_path(model_path: str, base_path: str) -> ValidationOutcome:
    """The client path must live under the agreed ``base_path``."""
    if base_path in model_path:
        return VALID
    return Invalid(
        "Unknown model path! The model isn't in the agreed folder!, "
        f"sourcePath: {model_path}, basePath: {base_path}"
    )


def check_dates(start: datetime | None, end: datetime | None) -> ValidationOutcome:
    """``start`` must not be later than ``end``.

    A missing side cannot be compared and passes.  Naive timestamps are
    read as UTC so they compare with zone-aware ones.
    """
    if start is None or end is None:
        return VALID
    if _as_utc(start) <= _as_utc(end):
        return VALID
    return Invalid("sourceStartDate should not be later than sourceEndDate")


def check_resolutions(
    min_resolution_meter: float | None,
    max_resolution_meter: float | None,
) -> ValidationOutcome:
    """``min`` must not exceed ``max``; skipped unless both are given."""
    if min_resolution_meter is None or max_resolution_meter is None:
        return VALID
    if min_resolution_meter <= max_resolution_meter:
        return VALID
    return Invalid("minResolutionMeter should not be bigger than maxResolutionMeter")


def check_classification(classification: str | None, options: list[str]) -> ValidationOutcome:
    """*classification* must be one of the lookup-table *options*."""
    if classification in options:
        return VALID
    return Invalid(
        f"classification is not a valid value.. Optional values: {','.join(options)}"
    )


def model_polygon(volume: BoundingVolume) -> GeoJsonPolygon | Invalid:
    """Convert a bounding volume into the model's ground polygon.

    ``box`` and unrecognised volumes are rejected with fixed messages.
    """
    if isinstance(volume, SphereVolume):
        return sphere_to_polygon(volume)
    if isinstance(volume, RegionVolume):
        return region_to_polygon(volume)
    if isinstance(volume, BoxVolume):
        return Invalid(BOX_NOT_SUPPORTED_MESSAGE)
    if isinstance(volume, UnknownVolume):
        logger.debug("Unrecognised bounding volume | detail=%s", volume.detail)
        return Invalid(BAD_TILESET_FORMAT_MESSAGE)
    assert_never(volume)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class ValidationPipeline:
    """Fail-fast validation of ingestion and update requests.

    Args:
        config: Gateway configuration (paths and coverage threshold).
        file_provider: Mounted model volume, read during ingestion.
        remote_provider: Source of existing tilesets during updates.
        catalog: Catalog service client.
        lookup_tables: Lookup-tables service client.
    """

    def __init__(
        self,
        config: GatewayConfig,
        *,
        file_provider: FileProvider,
        remote_provider: RemoteFileProvider,
        catalog: CatalogClient,
        lookup_tables: LookupTablesClient,
    ) -> None:
        self._config = config
        self._files = file_provider
        self._remote = remote_provider
        self._catalog = catalog
        self._lookup_tables = lookup_tables
        self._intersection = IntersectionCalculator(config.coverage_threshold_pct)

    @classmethod
    def from_config(
        cls,
        config: GatewayConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> ValidationPipeline:
        """Wire the default collaborators described by *config*."""
        from tileset_gateway.clients.catalog import CatalogClient
        from tileset_gateway.clients.lookup_tables import LookupTablesClient
        from tileset_gateway.providers.factory import get_remote_provider
        from tileset_gateway.providers.local import LocalFileProvider

        return cls(
            config,
            file_provider=LocalFileProvider(),
            remote_provider=get_remote_provider(config.remote_provider, config),
            catalog=CatalogClient(
                config.catalog_url,
                config.catalog_sub_url,
                timeout_s=config.http_timeout_s,
                client=http_client,
            ),
            lookup_tables=LookupTablesClient(
                config.lookup_tables_url,
                config.lookup_tables_sub_url,
                timeout_s=config.http_timeout_s,
                client=http_client,
            ),
        )

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def validate_ingestion(self, payload: IngestionPayload) -> ValidationOutcome:
        """Validate a new model and its metadata.

        Raises:
            IntersectionError: If the footprint/model geometry is malformed.
            ProviderError: If the model volume cannot be read.
            CatalogError: If the product-id lookup fails.
            LookupTablesError: If the classification lookup fails.
        """
        metadata = payload.metadata
        model = metadata.product_name
        logger.info(
            "Ingestion validation started | model=%s | model_path=%s",
            model,
            payload.model_path,
        )

        outcome = check_model_path(payload.model_path, self._config.base_path)
        if isinstance(outcome, Invalid):
            return self._reject("model_path", model, outcome)

        tileset = await self._load_local_tileset(
            payload.model_path,
            payload.tileset_filename,
            model=model,
        )
        if isinstance(tileset, Invalid):
            return tileset

        outcome = check_dates(metadata.source_date_start, metadata.source_date_end)
        if isinstance(outcome, Invalid):
            return self._reject("dates", model, outcome)
        self._passed("dates", model)

        outcome = check_resolutions(metadata.min_resolution_meter, metadata.max_resolution_meter)
        if isinstance(outcome, Invalid):
            return self._reject("resolutions", model, outcome)
        self._passed("resolutions", model)

        outcome = self._check_footprint(metadata.footprint, model=model)
        if isinstance(outcome, Invalid):
            return outcome

        outcome = self._score_against_tileset(metadata.footprint, tileset, model=model)
        if isinstance(outcome, Invalid):
            return outcome

        if metadata.product_type != PHOTO_REALISTIC_3D:
            logger.warning(
                "Product type is not %s, intersection is advisory | step=product_type | "
                "model=%s | product_type=%s",
                PHOTO_REALISTIC_3D,
                model,
                metadata.product_type,
            )
        self._passed("product_type", model)

        if metadata.product_id is not None:
            if not await self._catalog.is_product_id_exist(metadata.product_id):
                return self._reject(
                    "product_id",
                    model,
                    Invalid(f"Record with productId: {metadata.product_id} doesn't exist!"),
                )
            self._passed("product_id", model)

        outcome = await self._check_classification(metadata.classification, model=model)
        if isinstance(outcome, Invalid):
            return outcome

        logger.info("Ingestion validation passed | model=%s", model)
        return VALID

    async def validate_sources(self, model_path: str, tileset_filename: str) -> ValidationOutcome:
        """Check that a model folder holds a readable 3D-Tiles tileset.

        No metadata checks are performed.
        """
        logger.info(
            "Sources validation started | model_path=%s | tileset=%s",
            model_path,
            tileset_filename,
        )
        tileset = await self._load_local_tileset(model_path, tileset_filename, model=model_path)
        if isinstance(tileset, Invalid):
            return tileset

        polygon = model_polygon(parse_bounding_volume(tileset))
        if isinstance(polygon, Invalid):
            return self._reject("bounding_volume", model_path, polygon)
        self._passed("bounding_volume", model_path)

        logger.info("Sources validation passed | model_path=%s", model_path)
        return VALID

    async def validate_update(self, identifier: str, payload: UpdatePayload) -> ValidationOutcome:
        """Validate the supplied fields of a metadata update.

        Unsupplied sides of date and resolution ranges are taken from the
        existing record.

        Raises:
            LinkFormatError: If the record's links do not point at a tileset.
            TilesetFormatError: If the fetched tileset is not JSON.
            IntersectionError: If the footprint/model geometry is malformed.
            ProviderError: If the tileset cannot be fetched.
            CatalogError: If a catalog call fails.
            LookupTablesError: If the classification lookup fails.
        """
        logger.info("Update validation started | identifier=%s", identifier)
        record = await self._catalog.get_record(identifier)
        if record is None:
            return self._reject(
                "record",
                identifier,
                Invalid(f"Record with identifier: {identifier} doesn't exist!"),
            )
        model = record.product_name or identifier

        if payload.footprint is not None:
            outcome = self._check_footprint(payload.footprint, model=model)
            if isinstance(outcome, Invalid):
                return outcome
            tileset = await self._fetch_record_tileset(record)
            outcome = self._score_against_tileset(payload.footprint, tileset, model=model)
            if isinstance(outcome, Invalid):
                return outcome

        if payload.source_date_start is not None or payload.source_date_end is not None:
            outcome = check_dates(
                payload.source_date_start or record.source_date_start,
                payload.source_date_end or record.source_date_end,
            )
            if isinstance(outcome, Invalid):
                return self._reject("dates", model, outcome)
            self._passed("dates", model)

        if payload.min_resolution_meter is not None or payload.max_resolution_meter is not None:
            outcome = check_resolutions(
                _first_set(payload.min_resolution_meter, record.min_resolution_meter),
                _first_set(payload.max_resolution_meter, record.max_resolution_meter),
            )
            if isinstance(outcome, Invalid):
                return self._reject("resolutions", model, outcome)
            self._passed("resolutions", model)

        if payload.product_name is not None:
            outcome = await self._check_product_name_unique(payload.product_name, record)
            if isinstance(outcome, Invalid):
                return self._reject("product_name", model, outcome)
            self._passed("product_name", model)

        if payload.classification is not None:
            outcome = await self._check_classification(payload.classification, model=model)
            if isinstance(outcome, Invalid):
                return outcome

        logger.info("Update validation passed | identifier=%s | model=%s", identifier, model)
        return VALID

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _load_local_tileset(
        self,
        model_path: str,
        tileset_filename: str,
        *,
        model: str,
    ) -> Any | Invalid:
        """Locate the model folder and parse its tileset document."""
        mounted_path = to_mounted_path(
            model_path,
            base_path=self._config.base_path,
            pv_path=self._config.pv_path,
        )
        if not await self._files.exists(mounted_path):
            return self._reject(
                "model_folder",
                model,
                Invalid(
                    "Unknown model name! The model name isn't in the folder!, "
                    f"modelPath: {model_path}"
                ),
            )
        self._passed("model_folder", model)

        tileset_path = f"{mounted_path.rstrip('/')}/{tileset_filename}"
        if not tileset_filename or not await self._files.is_file(tileset_path):
            return self._reject(
                "tileset",
                model,
                Invalid(
                    "Unknown tileset name! The tileset file wasn't found!, "
                    f"tileset: {tileset_filename} doesn't exist"
                ),
            )
        content = await self._files.read_file(tileset_path)
        try:
            tileset = json.loads(content)
        except ValueError:
            return self._reject(
                "tileset",
                model,
                Invalid(f"{tileset_filename} file that was provided isn't in a valid json format!"),
            )
        self._passed("tileset", model)
        return tileset

    async def _fetch_record_tileset(self, record: Record3D) -> Any:
        """Fetch and parse the tileset of an existing catalog record."""
        tileset_path = resolve_tileset_full_path(
            record.product_source,
            record.links,
            base_path=self._config.base_path,
            pv_path=self._config.pv_path,
        )
        content = await self._remote.get_file(tileset_path)
        try:
            return json.loads(content)
        except ValueError as exc:
            logger.error(
                "Fetched tileset is not JSON | provider=%s | path=%s | error=%s",
                self._remote.name,
                tileset_path,
                exc,
            )
            msg = f"Tileset {tileset_path} isn't in a valid json format"
            raise TilesetFormatError(msg) from exc

    def _check_footprint(self, footprint: Any, *, model: str) -> ValidationOutcome:
        outcome = validate_footprint(footprint)
        if isinstance(outcome, Invalid):
            return self._reject("footprint", model, outcome)
        self._passed("footprint", model)
        return VALID

    def _score_against_tileset(self, footprint: Any, tileset: Any, *, model: str) -> ValidationOutcome:
        """Model polygon from the tileset, then overlap coverage."""
        polygon = model_polygon(parse_bounding_volume(tileset))
        if isinstance(polygon, Invalid):
            return self._reject("bounding_volume", model, polygon)
        self._passed("bounding_volume", model)

        outcome = self._intersection.score(footprint, dict(polygon), model_name=model)
        if isinstance(outcome, Invalid):
            return self._reject("intersection", model, outcome)
        self._passed("intersection", model)
        return VALID

    async def _check_classification(self, classification: str | None, *, model: str) -> ValidationOutcome:
        options = await self._lookup_tables.get_classifications()
        outcome = check_classification(classification, options)
        if isinstance(outcome, Invalid):
            return self._reject("classification", model, outcome)
        self._passed("classification", model)
        return VALID

    async def _check_product_name_unique(self, product_name: str, record: Record3D) -> ValidationOutcome:
        """No other product may already use *product_name*."""
        for found in await self._catalog.find_by_product_name(product_name):
            if found.product_id != record.product_id:
                return Invalid(
                    f"Duplicate productName! productName: {product_name} already exists in catalog"
                )
        return VALID

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    @staticmethod
    def _passed(step: str, model: str) -> None:
        logger.debug("Step passed | step=%s | model=%s", step, model)

    @staticmethod
    def _reject(step: str, model: str, outcome: Invalid) -> Invalid:
        logger.warning(
            "Validation rejected | step=%s | model=%s | reason=%s",
            step,
            model,
            outcome.reason,
        )
        return outcome


def _first_set(value: float | None, fallback: float | None) -> float | None:
    return value if value is not None else fallback
