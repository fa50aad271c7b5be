"""Build driver: installer package in, offline client artifact out.

One call to ArtifactAssembler.build() walks the stages of BuildStage in order
for a single VersionPair. Primary-artifact and upstream failures abort the
build with a BuildError naming the stage; descriptor and auxiliary extraction
only ever log warnings.
"""
from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from common.logging_utils import extra_context, is_debug_enabled, Timer
from constants import Constants
from errors import ArtifactNotFound, BuildError, ForgepackError, ManifestParseError
from resolution.locator import first_match, locate
from versioning.models import VersionPair

from .archive import READ_ERRORS, extract_named
from .installer import download_installer, run_installer
from .profile import AuxiliaryOutcome, extract_auxiliary_artifacts
from .workspace import BuildWorkspace

logger = logging.getLogger(__name__)


class BuildStage(Enum):
    """Stages of a single build, in execution order."""
    INIT = "INIT"
    DOWNLOADING = "DOWNLOADING"
    INSTALLING = "INSTALLING"
    LOCATING_PRIMARY = "LOCATING_PRIMARY"
    COPYING_PRIMARY = "COPYING_PRIMARY"
    EXTRACTING_DESCRIPTOR = "EXTRACTING_DESCRIPTOR"
    EXTRACTING_AUXILIARY = "EXTRACTING_AUXILIARY"
    CLEANING_UP = "CLEANING_UP"
    DONE = "DONE"
    FAILED = "FAILED"


@dataclass
class BuildResult:
    """Outcome of a successful (or skipped) build."""
    pair: VersionPair
    artifact_path: str
    skipped: bool = False
    descriptor_path: Optional[str] = None
    auxiliary: List[AuxiliaryOutcome] = field(default_factory=list)


def primary_filenames(pair: VersionPair, artifact: str = Constants.LOADER_ARTIFACT) -> List[str]:
    """Primary artifact file names in lookup order (current, then legacy)."""
    return [t.format(artifact=artifact, full=pair.full_version) for t in Constants.PRIMARY_FILE_TEMPLATES]


def primary_relative_dir(pair: VersionPair) -> str:
    """Forward-slash directory of the loader artifact inside a library tree."""
    group_path = Constants.LOADER_GROUP.replace(".", "/")
    return f"{group_path}/{Constants.LOADER_ARTIFACT}/{pair.full_version}"


class ArtifactAssembler:
    """Drives download, installation and extraction for one pair at a time."""

    def __init__(
        self,
        output_dir: str = Constants.OUTPUT_DIR,
        work_dir: str = Constants.WORK_DIR,
        repository_url: str = Constants.REPOSITORY_URL,
        java_bin: str = Constants.JAVA_BIN,
        installer_args: Sequence[str] = Constants.INSTALLER_ARGS,
        library_dirs: Sequence[str] = Constants.LIBRARY_DIRS,
        manifest_candidates: Sequence[str] = Constants.MANIFEST_CANDIDATES,
        request_timeout: Optional[float] = None,
    ):
        self.output_dir = output_dir
        self.work_dir = work_dir
        self.repository_url = repository_url
        self.java_bin = java_bin
        self.installer_args = list(installer_args)
        self.library_dirs = list(library_dirs)
        self.manifest_candidates = list(manifest_candidates)
        self.request_timeout = request_timeout
        self.stage = BuildStage.INIT

    @classmethod
    def from_settings(cls, settings) -> "ArtifactAssembler":
        """Build an assembler from a cli_config.Settings instance."""
        return cls(
            output_dir=settings.output_dir,
            work_dir=settings.work_dir,
            repository_url=settings.repository_url,
            java_bin=settings.java_bin,
            installer_args=settings.installer_args,
            library_dirs=settings.library_dirs,
            manifest_candidates=settings.manifest_candidates,
            request_timeout=settings.request_timeout,
        )

    def destination_dir(self, pair: VersionPair) -> str:
        """Final per-version output directory."""
        return os.path.join(self.output_dir, pair.full_version)

    def existing_artifact(self, pair: VersionPair) -> Optional[str]:
        """Path of an already-built primary artifact, if any."""
        dest = self.destination_dir(pair)
        paths = [os.path.join(dest, name) for name in primary_filenames(pair)]
        return first_match(paths, os.path.isfile)

    def _enter(self, stage: BuildStage) -> None:
        self.stage = stage
        if is_debug_enabled(logger):
            logger.debug(
                "Build stage",
                extra=extra_context(event="state", component="assembler", action=stage.value),
            )

    def build(self, pair: VersionPair) -> BuildResult:
        """Produce the offline client artifact for pair.

        Returns:
            BuildResult whose artifact_path points at the copied primary artifact.

        Raises:
            BuildError: A fatal stage failed; ``stage`` names it.
        """
        self._enter(BuildStage.INIT)
        logger.info("Building %s client for %s", Constants.LOADER_ARTIFACT, pair)
        existing = self.existing_artifact(pair)
        if existing:
            logger.info("Already built: %s, skip.", existing)
            self._enter(BuildStage.DONE)
            return BuildResult(pair=pair, artifact_path=existing, skipped=True)

        with Timer() as t:
            try:
                with BuildWorkspace(self.work_dir, pair) as workspace:
                    result = self._build_in(workspace, pair)
                    self._enter(BuildStage.CLEANING_UP)
            except BuildError:
                self.stage = BuildStage.FAILED
                raise
            except OSError as exc:
                # Workspace creation itself failed.
                failed_stage = self.stage.value
                self.stage = BuildStage.FAILED
                raise BuildError(failed_stage, exc) from exc

        self._enter(BuildStage.DONE)
        logger.info("Built %s in %.0f ms", result.artifact_path, t.duration_ms())
        return result

    def _fatal(self, exc: BaseException) -> BuildError:
        stage = self.stage.value
        logger.error("%s failed: %s", stage, exc)
        return BuildError(stage, exc)

    def _build_in(self, workspace: BuildWorkspace, pair: VersionPair) -> BuildResult:
        self._enter(BuildStage.DOWNLOADING)
        try:
            installer_path = download_installer(
                pair, workspace.path, self.repository_url, timeout=self.request_timeout
            )
        except ForgepackError as exc:
            raise self._fatal(exc) from exc

        self._enter(BuildStage.INSTALLING)
        try:
            run_installer(installer_path, workspace.path, self.java_bin, self.installer_args)
        except ForgepackError as exc:
            raise self._fatal(exc) from exc

        self._enter(BuildStage.LOCATING_PRIMARY)
        roots = workspace.library_roots(self.library_dirs)
        try:
            source = self.locate_primary(pair, roots)
        except ArtifactNotFound as exc:
            raise self._fatal(exc) from exc

        self._enter(BuildStage.COPYING_PRIMARY)
        dest_dir = self.destination_dir(pair)
        try:
            os.makedirs(dest_dir, exist_ok=True)
            artifact_path = os.path.join(dest_dir, os.path.basename(source))
            shutil.copyfile(source, artifact_path)
        except OSError as exc:
            raise self._fatal(exc) from exc
        logger.info("Copied client jar to %s", artifact_path)

        self._enter(BuildStage.EXTRACTING_DESCRIPTOR)
        descriptor_path = self.extract_descriptor(installer_path, dest_dir)

        self._enter(BuildStage.EXTRACTING_AUXILIARY)
        auxiliary = self.extract_auxiliary(installer_path, workspace, roots, dest_dir)

        return BuildResult(
            pair=pair,
            artifact_path=artifact_path,
            descriptor_path=descriptor_path,
            auxiliary=auxiliary,
        )

    def locate_primary(self, pair: VersionPair, roots: Sequence[str]) -> str:
        """Find the primary artifact, falling back to the legacy file name.

        Raises:
            ArtifactNotFound: Neither name exists; lists every attempted path.
        """
        rel_dir = primary_relative_dir(pair)
        attempted: List[str] = []
        for name in primary_filenames(pair):
            relative = f"{rel_dir}/{name}"
            try:
                return locate(relative, roots)
            except ArtifactNotFound as exc:
                logger.debug("Primary artifact not at %s", relative)
                attempted.extend(exc.attempted)
        raise ArtifactNotFound(f"{rel_dir}/{primary_filenames(pair)[0]}", attempted)

    def extract_descriptor(self, installer_path: str, dest_dir: str) -> Optional[str]:
        """Best-effort copy of the installer's version.json into dest_dir."""
        try:
            path = extract_named(installer_path, [Constants.DESCRIPTOR_FILE], dest_dir)
        except READ_ERRORS as exc:
            logger.warning("Could not extract %s: %s", Constants.DESCRIPTOR_FILE, exc)
            return None
        logger.info("Extracted %s to %s", Constants.DESCRIPTOR_FILE, path)
        return path

    def extract_auxiliary(self, installer_path: str, workspace: BuildWorkspace,
                          roots: Sequence[str], dest_dir: str) -> List[AuxiliaryOutcome]:
        """Best-effort extraction of the manifest's auxiliary artifacts."""
        try:
            manifest_path = extract_named(
                installer_path, self.manifest_candidates, workspace.join("manifest")
            )
            return extract_auxiliary_artifacts(manifest_path, roots, dest_dir)
        except READ_ERRORS + (ManifestParseError,) as exc:
            logger.warning("Skipping auxiliary artifacts: %s", exc)
            return []
