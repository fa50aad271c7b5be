"""Pick the (base version, loader version) pair to build."""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Tuple

from packaging import version

from common.logging_utils import extra_context, is_debug_enabled
from errors import AmbiguousSelection, NoValidBaseVersions, UnknownBaseVersion

from .models import SelectionMode, VersionMetadata, VersionPair

logger = logging.getLogger(__name__)

# e.g. 1.20.1; suffixed keys such as 1.7.10_pre4 or 1.21rc1 do not qualify.
_DOTTED_NUMERIC = re.compile(r"\d+(?:\.\d+)+")


def selection_mode(
    filter_base: Optional[str],
    loader_version: Optional[str],
    pick_latest_loader: bool,
) -> SelectionMode:
    """Map the supplied filters onto a supported selection strategy.

    Raises:
        AmbiguousSelection: The combination is not supported.
    """
    if filter_base and loader_version:
        return SelectionMode.EXPLICIT
    if filter_base and pick_latest_loader:
        return SelectionMode.LATEST_LOADER
    if not filter_base and not loader_version and pick_latest_loader:
        return SelectionMode.LATEST
    raise AmbiguousSelection(
        "Unsupported selection: use --latest, --mc <version> --latest, "
        "or --mc <version> --forge <version>"
    )


def latest_loader(metadata: VersionMetadata, base_version: str) -> str:
    """Greatest loader for base_version under plain string ordering.

    Loader identifiers are not guaranteed to be semantic versions, so the
    comparison is lexicographic on the raw strings.
    """
    loaders = metadata.get(base_version) if metadata else None
    if not loaders:
        raise UnknownBaseVersion(base_version)
    return max(loaders)


def _parse_base(raw: str) -> Optional[version.Version]:
    if not _DOTTED_NUMERIC.fullmatch(raw):
        return None
    try:
        return version.Version(raw)
    except version.InvalidVersion:
        return None


def latest_base(base_versions: Iterable[str]) -> str:
    """Greatest base version among keys that are dotted numeric versions."""
    parsed: List[Tuple[version.Version, str]] = []
    for raw in base_versions:
        ver = _parse_base(raw)
        if ver is not None:
            parsed.append((ver, raw))
    if not parsed:
        raise NoValidBaseVersions("No base version in the metadata is a dotted numeric version")
    # Stable on ties: the first key seen wins between equal parsed versions.
    best = parsed[0]
    for candidate in parsed[1:]:
        if candidate[0] > best[0]:
            best = candidate
    return best[1]


def select_version(
    metadata: Optional[VersionMetadata],
    filter_base: Optional[str] = None,
    loader_version: Optional[str] = None,
    pick_latest_loader: bool = False,
) -> VersionPair:
    """Choose the pair to build.

    Args:
        metadata: Normalized upstream metadata; unused for an explicit pair.
        filter_base: Requested base version, if any.
        loader_version: Explicit loader version, if any.
        pick_latest_loader: Select the newest loader (and base when unfiltered).

    Returns:
        The selected VersionPair.
    """
    mode = selection_mode(filter_base, loader_version, pick_latest_loader)

    if mode == SelectionMode.EXPLICIT:
        # Trusted as given; no cross-check against the metadata.
        pair = VersionPair(filter_base, loader_version)
    elif mode == SelectionMode.LATEST_LOADER:
        pair = VersionPair(filter_base, latest_loader(metadata or {}, filter_base))
    else:
        base = latest_base((metadata or {}).keys())
        pair = VersionPair(base, latest_loader(metadata, base))

    if is_debug_enabled(logger):
        logger.debug(
            "Version selected",
            extra=extra_context(
                event="decision",
                component="selector",
                action="select_version",
                outcome=mode.value,
                base_version=pair.base_version,
                loader_version=pair.loader_version,
            ),
        )
    logger.info("Selected %s (%s)", pair, mode.value)
    return pair
