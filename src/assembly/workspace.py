"""Per-build transient workspace."""
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Iterable, List

from versioning.models import VersionPair

logger = logging.getLogger(__name__)


@dataclass
class BuildWorkspace:
    """Directory tree owned by one build; namespaced by the pair's full version.

    Use as a context manager: the directory is created on enter and removed
    on exit whether or not the build succeeded. Removal failures are logged.
    """

    root: str
    pair: VersionPair

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.pair.full_version)

    def join(self, *parts: str) -> str:
        return os.path.join(self.path, *parts)

    def library_roots(self, library_dirs: Iterable[str]) -> List[str]:
        """Candidate library roots inside the workspace, in lookup order."""
        return [self.join(d) for d in library_dirs]

    def __enter__(self) -> "BuildWorkspace":
        os.makedirs(self.path, exist_ok=True)
        logger.debug("Workspace ready: %s", self.path)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> bool:
        """Remove the workspace; return False (and log) when removal fails."""
        if not os.path.exists(self.path):
            return True
        try:
            shutil.rmtree(self.path)
        except OSError as e:
            logger.warning("Could not remove workspace %s: %s", self.path, e)
            return False
        logger.debug("Workspace removed: %s", self.path)
        return True
