"""Error taxonomy for forgepack.

Selection and transport errors precede any build attempt. Build stages wrap
their fatal failures in BuildError so the failing stage is visible to callers.
"""

from __future__ import annotations

from typing import List, Optional, Sequence


class ForgepackError(Exception):
    """Base class for every error raised by forgepack."""


class ConfigError(ForgepackError):
    """Raised when a configuration file cannot be read or is not a mapping."""


class TransportError(ForgepackError):
    """Raised on HTTP transport failures or non-success status codes."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DownloadError(TransportError):
    """Raised when the installer package cannot be downloaded."""


class MetadataFormatError(ForgepackError):
    """Raised when upstream metadata matches none of the known wire shapes."""


class MalformedCoordinate(ForgepackError):
    """Raised when a dependency coordinate has fewer than three parts."""

    def __init__(self, coordinate: str, reason: str = "expected group:artifact:version"):
        super().__init__(f"Malformed coordinate '{coordinate}': {reason}")
        self.coordinate = coordinate


class ManifestParseError(ForgepackError):
    """Raised when an installer manifest is unreadable or lacks a 'data' object."""


class ArtifactNotFound(ForgepackError):
    """Raised when a relative path exists under none of the candidate roots."""

    def __init__(self, relative_path: str, attempted: Sequence[str]):
        self.relative_path = relative_path
        self.attempted: List[str] = list(attempted)
        tried = ", ".join(self.attempted) if self.attempted else "<no candidate roots>"
        super().__init__(f"Artifact '{relative_path}' not found; tried: {tried}")


class InstallerFailed(ForgepackError):
    """Raised when the external installer exits non-zero or cannot be started."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


class SelectionError(ForgepackError):
    """Base class for version selection failures."""


class UnknownBaseVersion(SelectionError):
    """Raised when the requested base version has no loaders in the metadata."""

    def __init__(self, base_version: str):
        super().__init__(f"Unknown base version: {base_version}")
        self.base_version = base_version


class NoValidBaseVersions(SelectionError):
    """Raised when no metadata key parses as a dotted numeric version."""


class AmbiguousSelection(SelectionError):
    """Raised when the supplied filters form no supported combination."""


class BuildError(ForgepackError):
    """Fatal build failure tagged with the stage it happened in."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"Build failed during {stage}: {cause}")
        self.stage = stage
        self.cause = cause
