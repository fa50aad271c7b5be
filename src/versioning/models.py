"""Data models for version metadata and selection."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class SelectionMode(Enum):
    """Selection strategy derived from the supplied filters."""
    EXPLICIT = "explicit"
    LATEST_LOADER = "latest_loader"
    LATEST = "latest"


@dataclass(frozen=True)
class VersionPair:
    """Base (game) version and loader version chosen for one build."""
    base_version: str
    loader_version: str

    def __post_init__(self):
        if not self.base_version or not self.loader_version:
            raise ValueError("base_version and loader_version must be non-empty")

    @property
    def full_version(self) -> str:
        """Maven version of the loader artifact, e.g. 1.20.1-47.1.0."""
        return f"{self.base_version}-{self.loader_version}"

    def __str__(self) -> str:
        return f"{self.base_version} / {self.loader_version}"


# Base version -> ordered, non-empty loader versions (normalized wire data).
VersionMetadata = Dict[str, List[str]]
