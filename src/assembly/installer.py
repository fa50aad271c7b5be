"""Installer package collaborators: URL templating, download, subprocess run."""
from __future__ import annotations

import logging
import os
import subprocess
from typing import Sequence

from common.http_client import download_file
from constants import Constants
from errors import DownloadError, InstallerFailed
from versioning.models import VersionPair

logger = logging.getLogger(__name__)


def installer_filename(pair: VersionPair, artifact: str = Constants.LOADER_ARTIFACT) -> str:
    """File name of the installer package, e.g. forge-1.20.1-47.1.0-installer.jar."""
    return Constants.INSTALLER_FILE_TEMPLATE.format(artifact=artifact, full=pair.full_version)


def installer_url(pair: VersionPair, repository_url: str = Constants.REPOSITORY_URL) -> str:
    """Repository URL of the installer package for pair."""
    return f"{repository_url.rstrip('/')}/{pair.full_version}/{installer_filename(pair)}"


def download_installer(pair: VersionPair, dest_dir: str, repository_url: str = Constants.REPOSITORY_URL,
                       timeout=None) -> str:
    """Download the installer for pair into dest_dir and return its path.

    Raises:
        DownloadError: Transport failure or non-200 response.
    """
    url = installer_url(pair, repository_url)
    dest_path = os.path.join(dest_dir, installer_filename(pair))
    logger.info("Downloading %s to %s", installer_filename(pair), dest_path)
    return download_file(url, dest_path, context="installer", timeout=timeout, error_cls=DownloadError)


def run_installer(installer_path: str, workdir: str, java_bin: str = Constants.JAVA_BIN,
                  installer_args: Sequence[str] = Constants.INSTALLER_ARGS) -> None:
    """Run the installer jar inside workdir with inherited stdout/stderr.

    Raises:
        InstallerFailed: The process could not start or exited non-zero.
    """
    command = [java_bin, "-jar", os.path.basename(installer_path), *installer_args]
    logger.info("Running installer: %s", " ".join(command))
    try:
        result = subprocess.run(command, cwd=workdir, check=False)  # noqa: S603
    except OSError as exc:
        raise InstallerFailed(f"Could not start installer with '{java_bin}': {exc}") from exc
    if result.returncode != 0:
        raise InstallerFailed(
            f"Installer exited with code {result.returncode}",
            returncode=result.returncode,
        )
