"""Upstream loader metadata: wire-shape adapters and fetch.

Two wire shapes are understood and both normalize to VersionMetadata:

* version map: ``{"1.20.1": ["1.20.1-47.0.0", "1.20.1-47.1.0"], ...}``
* game versions: ``{"gameVersions": [{"id": "1.20.1", "loaders": [{"id": "47.1.0"}]}]}``
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants, MetadataShapes
from errors import MetadataFormatError

from .models import VersionMetadata

logger = logging.getLogger(__name__)


def _strip_base_prefix(base: str, loader: str) -> str:
    """Forge lists loaders as '<base>-<loader>'; keep only the loader part."""
    prefix = f"{base}-"
    if loader.startswith(prefix) and len(loader) > len(prefix):
        return loader[len(prefix):]
    return loader


def from_version_map(raw: Any) -> VersionMetadata:
    """Normalize the base -> [loader, ...] shape.

    Non-string entries are ignored; bases left without loaders are dropped.
    """
    if not isinstance(raw, dict):
        raise MetadataFormatError("version map metadata must be a JSON object")
    metadata: VersionMetadata = {}
    for base, loaders in raw.items():
        if not isinstance(base, str) or not isinstance(loaders, list):
            continue
        cleaned: List[str] = [
            _strip_base_prefix(base, loader.strip())
            for loader in loaders
            if isinstance(loader, str) and loader.strip()
        ]
        if cleaned:
            metadata[base] = cleaned
    return metadata


def from_game_versions(raw: Any) -> VersionMetadata:
    """Normalize the gameVersions shape, keeping the first loader per base."""
    entries = raw.get("gameVersions") if isinstance(raw, dict) else None
    if not isinstance(entries, list):
        raise MetadataFormatError("game versions metadata requires a 'gameVersions' array")
    metadata: VersionMetadata = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        base = entry.get("id")
        loaders = entry.get("loaders")
        if not isinstance(base, str) or not base or not isinstance(loaders, list):
            continue
        first = loaders[0] if loaders else None
        loader_id = first.get("id") if isinstance(first, dict) else None
        if isinstance(loader_id, str) and loader_id:
            metadata[base] = [_strip_base_prefix(base, loader_id)]
    return metadata


def detect_shape(raw: Any) -> MetadataShapes:
    """Identify which wire shape raw uses."""
    if isinstance(raw, dict):
        if "gameVersions" in raw:
            return MetadataShapes.GAME_VERSIONS
        return MetadataShapes.VERSION_MAP
    raise MetadataFormatError(f"unsupported metadata payload of type {type(raw).__name__}")


def normalize_metadata(raw: Any) -> VersionMetadata:
    """Dispatch raw JSON to the adapter for its wire shape."""
    shape = detect_shape(raw)
    if shape == MetadataShapes.GAME_VERSIONS:
        metadata = from_game_versions(raw)
    else:
        metadata = from_version_map(raw)
    if is_debug_enabled(logger):
        logger.debug(
            "Normalized metadata",
            extra=extra_context(
                event="parse",
                component="metadata",
                action="normalize",
                outcome=shape.value,
                count=len(metadata),
            ),
        )
    return metadata


def fetch_metadata(url: str = Constants.METADATA_URL, timeout: Optional[float] = None) -> VersionMetadata:
    """Download and normalize the upstream metadata document.

    Raises:
        TransportError: Transport failure, non-200 status or invalid JSON.
        MetadataFormatError: Unrecognized document shape.
    """
    logger.info("Fetching loader metadata from %s", safe_url(url))
    _, _, payload = get_json(url, context="metadata", timeout=timeout)
    metadata = normalize_metadata(payload)
    logger.info("Metadata lists %d base versions", len(metadata))
    return metadata
