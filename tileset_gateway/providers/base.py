"""File provider abstract base classes.

Defines the storage contracts the validation pipeline depends on.  The
pipeline never knows (or cares) which concrete storage is behind them.

- ``FileProvider``: the mounted model volume used during ingestion
  (``exists``, ``is_file`` and ``read_file``).
- ``RemoteFileProvider``: where an existing record's tileset is fetched
  from during an update (``get_file``).

All methods are coroutines; blocking implementations hand their work to
a thread with ``asyncio.to_thread``.
"""

from __future__ import annotations

import abc

from tileset_gateway.core.exceptions import PipelineError


class FileProvider(abc.ABC):
    """Read access to the mounted model volume."""

    @abc.abstractmethod
    async def exists(self, path: str) -> bool:
        """Return ``True`` if *path* exists (file or directory)."""

    @abc.abstractmethod
    async def is_file(self, path: str) -> bool:
        """Return ``True`` if *path* is an existing regular file."""

    @abc.abstractmethod
    async def read_file(self, path: str) -> bytes:
        """Return the contents of the file at *path*.

        Raises:
            ProviderNotFoundError: If the file does not exist.
            ProviderReadError: On any other I/O failure.
        """


class RemoteFileProvider(abc.ABC):
    """Fetch access to stored model files, keyed by mounted path."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Return the provider name (e.g. ``"blob"``)."""
        return self._name

    @abc.abstractmethod
    async def get_file(self, path: str) -> bytes:
        """Return the contents of the stored file at *path*.

        Raises:
            ProviderNotFoundError: If the file does not exist.
            ProviderReadError: On transient or permanent storage errors.
        """


# ---------------------------------------------------------------------------
# Provider exceptions
# ---------------------------------------------------------------------------


class ProviderError(PipelineError):
    """Base exception for file provider errors.

    Attributes:
        provider: Name of the provider that raised the error.
        path: The path being accessed.
    """

    default_stage = "provider"
    default_code = "PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        path: str = "",
        retryable: bool = False,
    ) -> None:
        self.provider = provider
        self.path = path
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.provider}] {self.message}"


class ProviderNotFoundError(ProviderError):
    """The requested file does not exist."""

    default_code = "PROVIDER_FILE_NOT_FOUND"


class ProviderReadError(ProviderError):
    """Reading the file failed."""

    default_code = "PROVIDER_READ_FAILED"
