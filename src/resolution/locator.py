"""Locate library files across an ordered list of candidate roots."""
from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, List, Optional, TypeVar

from common.logging_utils import extra_context, is_debug_enabled
from errors import ArtifactNotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")


def first_match(candidates: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """Return the first candidate satisfying predicate, or None."""
    for candidate in candidates:
        if predicate(candidate):
            return candidate
    return None


def candidate_paths(relative_path: str, candidate_roots: Iterable[str]) -> List[str]:
    """Join relative_path (forward slashes) onto every root, preserving order."""
    parts = [p for p in relative_path.split("/") if p]
    return [os.path.join(root, *parts) for root in candidate_roots]


def locate(relative_path: str, candidate_roots: Iterable[str]) -> str:
    """Return the first existing file for relative_path under candidate_roots.

    Args:
        relative_path: Forward-slash path, e.g. from resolve_path().
        candidate_roots: Directories tried in the order given.

    Raises:
        ArtifactNotFound: With every attempted path when none exist.
    """
    attempted = candidate_paths(relative_path, candidate_roots)
    found = first_match(attempted, os.path.isfile)
    if is_debug_enabled(logger):
        logger.debug(
            "Library lookup",
            extra=extra_context(
                event="decision",
                component="locator",
                action="locate",
                outcome="found" if found else "missing",
                target=relative_path,
                count=len(attempted),
            ),
        )
    if found is None:
        raise ArtifactNotFound(relative_path, attempted)
    return found
