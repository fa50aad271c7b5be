"""Version metadata normalization and version pair selection."""

from .models import SelectionMode, VersionMetadata, VersionPair
from .metadata import fetch_metadata, normalize_metadata
from .selector import select_version

__all__ = [
    "SelectionMode",
    "VersionMetadata",
    "VersionPair",
    "fetch_metadata",
    "normalize_metadata",
    "select_version",
]
