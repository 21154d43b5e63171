"""Model path remapping between the client view and the mounted volume.

Clients submit model paths under the agreed ``base_path`` (often a
Windows share, hence backslashes).  The gateway reads the same files
through ``pv_path``, where that share is mounted.
"""

from __future__ import annotations


def change_base_path_to_pv_path(model_path: str, *, base_path: str, pv_path: str) -> str:
    """Replace the client-side ``base_path`` root with the mounted ``pv_path``."""
    return model_path.replace(base_path, pv_path, 1)


def replace_back_quotes_with_quotes(path: str) -> str:
    """Normalise Windows separators (``\\``) to ``/``."""
    return path.replace("\\", "/")


def remove_pv_path_from_model_path(model_path: str, *, pv_path: str) -> str:
    """Strip the mounted root, leaving the storage-relative path."""
    return model_path.replace(f"{pv_path.rstrip('/')}/", "", 1)


def to_mounted_path(model_path: str, *, base_path: str, pv_path: str) -> str:
    """Map a client-side model path to its location on the mounted volume."""
    return replace_back_quotes_with_quotes(
        change_base_path_to_pv_path(model_path, base_path=base_path, pv_path=pv_path)
    )
