"""Installer manifest (install profile) parsing and auxiliary artifact extraction.

The manifest carries a ``data`` object whose entries may reference library
files through a ``client`` value such as ``"[net.minecraft:client:1.20.1:srg]"``.
Each bracketed coordinate is resolved against the installer's library tree
and copied next to the primary artifact.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled
from errors import ArtifactNotFound, MalformedCoordinate, ManifestParseError
from resolution.coordinates import resolve_path
from resolution.locator import locate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    """One normalized entry of the manifest's data object."""
    key: str
    has_client_field: bool
    client_value: Optional[Any] = None

    @property
    def coordinate(self) -> Optional[str]:
        """Bracket-stripped coordinate, or None when the entry is not actionable."""
        value = self.client_value
        if not self.has_client_field or not isinstance(value, str):
            return None
        if len(value) > 2 and value.startswith("[") and value.endswith("]"):
            return value[1:-1]
        return None


@dataclass
class AuxiliaryOutcome:
    """Result of handling one actionable manifest entry."""
    key: str
    coordinate: str
    copied_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize_manifest(document: Any) -> List[ManifestEntry]:
    """Turn a raw manifest document into ManifestEntry values.

    Raises:
        ManifestParseError: The top level or its 'data' member is not an object.
    """
    if not isinstance(document, dict):
        raise ManifestParseError("Manifest top level is not a JSON object")
    data = document.get("data")
    if not isinstance(data, dict):
        raise ManifestParseError("Manifest has no 'data' object")

    entries: List[ManifestEntry] = []
    for key, value in data.items():
        if isinstance(value, dict) and "client" in value:
            entries.append(ManifestEntry(str(key), True, value["client"]))
        else:
            entries.append(ManifestEntry(str(key), False))
    return entries


def load_manifest(manifest_path: str) -> List[ManifestEntry]:
    """Read and normalize the manifest file at manifest_path."""
    try:
        with open(manifest_path, encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestParseError(f"Cannot read manifest {manifest_path}: {exc}") from exc
    return normalize_manifest(document)


def _extract_entry(entry: ManifestEntry, coordinate: str, library_roots: Sequence[str],
                   destination_dir: str) -> AuxiliaryOutcome:
    outcome = AuxiliaryOutcome(key=entry.key, coordinate=coordinate)
    try:
        source = locate(resolve_path(coordinate), library_roots)
        os.makedirs(destination_dir, exist_ok=True)
        target = os.path.join(destination_dir, os.path.basename(source))
        # Flattened names may collide with the primary jar or an earlier entry.
        if os.path.exists(target):
            raise FileExistsError(f"Refusing to overwrite existing file {target}")
        shutil.copyfile(source, target)
        outcome.copied_path = target
    except (MalformedCoordinate, ArtifactNotFound, OSError) as exc:
        outcome.error = str(exc)
        logger.warning("Skipping auxiliary artifact %s (%s): %s", entry.key, coordinate, exc)
    return outcome


def extract_auxiliary_artifacts(
    manifest_path: str,
    library_roots: Sequence[str],
    destination_dir: str,
) -> List[AuxiliaryOutcome]:
    """Copy every bracket-referenced client artifact into destination_dir.

    Args:
        manifest_path: Path of the extracted install profile.
        library_roots: Candidate library roots in lookup order.
        destination_dir: Flat output directory.

    Returns:
        One outcome per actionable entry; other entries are skipped silently.

    Raises:
        ManifestParseError: Only when the manifest itself cannot be parsed.
    """
    entries = load_manifest(manifest_path)
    outcomes: List[AuxiliaryOutcome] = []
    for entry in entries:
        coordinate = entry.coordinate
        if coordinate is None:
            continue
        outcomes.append(_extract_entry(entry, coordinate, library_roots, destination_dir))

    copied = sum(1 for o in outcomes if o.ok)
    if is_debug_enabled(logger):
        logger.debug(
            "Auxiliary extraction finished",
            extra=extra_context(
                event="function_exit",
                component="profile",
                action="extract_auxiliary_artifacts",
                count=len(outcomes),
                copied=copied,
            ),
        )
    if outcomes:
        logger.info("Copied %d of %d auxiliary artifacts to %s", copied, len(outcomes), destination_dir)
    return outcomes
