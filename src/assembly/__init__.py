"""Installer-driven assembly of the offline client artifact."""

from .assembler import ArtifactAssembler, BuildResult, BuildStage
from .profile import AuxiliaryOutcome, ManifestEntry, extract_auxiliary_artifacts
from .workspace import BuildWorkspace

__all__ = [
    "ArtifactAssembler",
    "BuildResult",
    "BuildStage",
    "AuxiliaryOutcome",
    "ManifestEntry",
    "extract_auxiliary_artifacts",
    "BuildWorkspace",
]
