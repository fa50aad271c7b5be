"""Maven-style dependency coordinate parsing.

A coordinate looks like ``group:artifact:version[:classifier[@extension]]``
and maps onto the repository layout
``group/with/slashes/artifact/version/artifact-version[-classifier].extension``.
"""

from dataclasses import dataclass
from typing import Optional

from constants import Constants
from errors import MalformedCoordinate


@dataclass(frozen=True)
class DependencyCoordinate:
    """Parsed coordinate; extension falls back to jar."""
    group: str
    artifact: str
    version: str
    classifier: Optional[str] = None
    extension: str = Constants.DEFAULT_EXTENSION

    @property
    def filename(self) -> str:
        """Repository file name for this coordinate."""
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifact}-{self.version}{suffix}.{self.extension}"

    @property
    def relative_path(self) -> str:
        """Forward-slash path relative to a repository root."""
        group_path = self.group.replace(".", "/")
        return f"{group_path}/{self.artifact}/{self.version}/{self.filename}"


def parse_coordinate(coordinate: str) -> DependencyCoordinate:
    """Split a coordinate string into its parts.

    Raises:
        MalformedCoordinate: Fewer than three parts, or an empty required part.
    """
    parts = coordinate.strip().split(":")
    if len(parts) < 3:
        raise MalformedCoordinate(coordinate)
    group, artifact, version = parts[0], parts[1], parts[2]
    if not group or not artifact or not version:
        raise MalformedCoordinate(coordinate, "group, artifact and version must be non-empty")

    classifier: Optional[str] = None
    extension = Constants.DEFAULT_EXTENSION
    if len(parts) > 3:
        # Anything past the fourth part is ignored.
        extra = parts[3]
        if "@" in extra:
            classifier, extension = extra.split("@", 1)
            extension = extension or Constants.DEFAULT_EXTENSION
        else:
            classifier = extra
    return DependencyCoordinate(
        group=group,
        artifact=artifact,
        version=version,
        classifier=classifier or None,
        extension=extension,
    )


def resolve_path(coordinate: str) -> str:
    """Return the repository-relative path for a coordinate string."""
    return parse_coordinate(coordinate).relative_path
